from sqlalchemy import Column, String, DateTime, Boolean, Integer
from sqlalchemy.sql import func
from .db import Base
import uuid

def uid() -> str:
    return str(uuid.uuid4())

class AIInteraction(Base):
    """One completed tool call, kept for usage tracking (never the user's text)."""
    __tablename__ = "ai_interactions"
    id = Column(String, primary_key=True, default=uid)
    action = Column(String, index=True)  # generate-portfolio|generate-cover-letter|analyze-resume|...
    model_used = Column(String)
    prompt_tokens = Column(Integer, default=0)  # estimated, 4 chars/token
    completion_tokens = Column(Integer, default=0)
    truncated = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
