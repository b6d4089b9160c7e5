import os
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .db import Base, engine
from . import models  # noqa: F401  registers tables on Base

settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Career Tools Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Base.metadata.create_all(bind=engine)

# Keys shown on the environment check; values containing KEY are masked
ENV_CHECK_KEYS = ["GROQ_API_KEY", "GROQ_BASE_URL", "AI_MODEL", "DATABASE_URL"]


def _mask(name: str, value: str) -> str:
    if "KEY" in name:
        return "***" + value[-4:]
    return value


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/api/debug/env")
def env_status():
    """Which configuration values are set, without leaking secrets."""
    status = {}
    for name in ENV_CHECK_KEYS:
        value = os.getenv(name)
        status[name] = {"set": bool(value), "value": _mask(name, value) if value else None}
    return status


from .api.routes_ai import router as ai_router
from .api.routes_jobs import router as jobs_router
from .api.routes_uploads import router as uploads_router
app.include_router(ai_router)
app.include_router(jobs_router)
app.include_router(uploads_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
