"""
AI tool endpoint.

A single POST /api/ai takes ``{"action": ..., "data": {...}}`` and dispatches
to one of the career tools. Upstream failures are reported as JSON errors
with ``error`` and ``details`` keys.
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..config import Settings, get_settings
from ..db import get_db
from ..llm_client import (
    GenerationError, RequestTooLargeError, ModelUnavailableError, get_generation_client,
)
from ..schemas import AIRequest, UsageResponse
from ..tools import CareerTools, ToolInputError
from ..usage import record_interaction, summarize_usage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])


def _error(status_code: int, error: str, details: str = None) -> JSONResponse:
    body = {"error": error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def get_career_tools(settings: Settings = Depends(get_settings)) -> CareerTools:
    return CareerTools(get_generation_client(settings))


@router.post("")
async def run_tool(
    request: AIRequest,
    settings: Settings = Depends(get_settings),
    tools: CareerTools = Depends(get_career_tools),
    db: Session = Depends(get_db),
):
    if not settings.groq_api_key:
        logger.error("GROQ_API_KEY not found in environment variables")
        return _error(500, "AI service not configured")

    if not request.action or not isinstance(request.data, dict):
        return _error(400, "Missing required parameters")

    if not tools.supports(request.action):
        return _error(400, "Invalid action")

    logger.info(f"Processing AI request: {request.action}")

    try:
        result = await tools.dispatch(request.action, request.data)
    except ToolInputError as e:
        return _error(400, "Missing required parameters", str(e))
    except RequestTooLargeError as e:
        logger.warning(f"{request.action} rejected upstream as too large: {e.status_code}")
        return _error(
            400,
            "Input too large. Please try with a shorter resume or job description.",
            "The content exceeds the AI model's token limit. Try reducing the text length.",
        )
    except ModelUnavailableError as e:
        logger.error(f"{request.action} failed, model unavailable: {e}")
        return _error(
            503,
            "AI model temporarily unavailable. Please try again.",
            "The AI service is experiencing issues. Please try again in a moment.",
        )
    except GenerationError as e:
        logger.error(f"{request.action} failed: {e}")
        return _error(500, "An error occurred while processing your request. Please try again.", str(e))
    except Exception as e:
        logger.exception(f"{request.action} failed unexpectedly: {e}")
        return _error(500, "An error occurred while processing your request. Please try again.", str(e))

    if settings.record_ai_interactions:
        record_interaction(db, request.action, tools.client.model, result)

    return result.payload.model_dump(exclude_none=True)


@router.get("/usage", response_model=UsageResponse)
def usage(db: Session = Depends(get_db)):
    """Per-action call counts and estimated token totals."""
    return summarize_usage(db)
