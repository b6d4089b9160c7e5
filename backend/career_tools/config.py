import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


class Settings(BaseModel):
    groq_api_key: Optional[str] = None
    groq_base_url: str = "https://api.groq.com/openai/v1"
    ai_model: str = "llama-3.1-8b-instant"
    ai_timeout_seconds: float = 60.0
    database_url: str = "sqlite:///./career_tools.db"
    cors_origins: List[str] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"
    record_ai_interactions: bool = True


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def get_settings() -> Settings:
    """Read settings from the environment (and .env) at call time."""
    origins_env = os.getenv("CORS_ORIGINS")
    origins = [o.strip() for o in (origins_env or "").split(",") if o.strip()]
    return Settings(
        groq_api_key=os.getenv("GROQ_API_KEY") or None,
        groq_base_url=os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1").rstrip("/"),
        ai_model=os.getenv("AI_MODEL", "llama-3.1-8b-instant"),
        ai_timeout_seconds=float(os.getenv("AI_TIMEOUT_SECONDS", "60")),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./career_tools.db"),
        cors_origins=origins or DEFAULT_CORS_ORIGINS,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        record_ai_interactions=_env_flag("RECORD_AI_INTERACTIONS", True),
    )
