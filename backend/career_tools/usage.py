"""
Usage tracking for AI tool calls.

Only sizes and flags are stored; prompts and replies stay out of the database.
"""
import logging

from sqlalchemy import func, case
from sqlalchemy.orm import Session

from .budget import InputBudgetManager, default_budget_manager
from .models import AIInteraction
from .schemas import ActionUsage, UsageResponse
from .tools import ToolResult

logger = logging.getLogger(__name__)


def record_interaction(db: Session, action: str, model: str, result: ToolResult,
                       budget: InputBudgetManager = default_budget_manager) -> None:
    """Store one tool call. Failures are logged, never raised to the caller."""
    try:
        interaction = AIInteraction(
            action=action,
            model_used=model,
            prompt_tokens=budget.estimate_size(result.prompt),
            completion_tokens=budget.estimate_size(result.output),
            truncated=result.truncated,
        )
        db.add(interaction)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to store AI interaction: {e}")


def summarize_usage(db: Session) -> UsageResponse:
    rows = (
        db.query(
            AIInteraction.action,
            func.count(AIInteraction.id),
            func.coalesce(func.sum(AIInteraction.prompt_tokens), 0),
            func.coalesce(func.sum(AIInteraction.completion_tokens), 0),
            func.coalesce(func.sum(case((AIInteraction.truncated.is_(True), 1), else_=0)), 0),
        )
        .group_by(AIInteraction.action)
        .order_by(AIInteraction.action)
        .all()
    )
    actions = [
        ActionUsage(action=action, calls=calls, prompt_tokens=prompt_tokens,
                    completion_tokens=completion_tokens, truncated_calls=truncated_calls)
        for action, calls, prompt_tokens, completion_tokens, truncated_calls in rows
    ]
    return UsageResponse(total_calls=sum(a.calls for a in actions), actions=actions)
