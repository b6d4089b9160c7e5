"""
Input budgeting for text handed to the generation service.

Token counts are estimated from character length (roughly 4 characters per
token for English text). Oversized inputs are cut proportionally so that the
larger block absorbs most of the truncation.
"""
import math
from dataclasses import dataclass
from typing import Optional, Tuple

CHARS_PER_TOKEN = 4
RESERVE_CHARS = 100
TRUNCATION_MARKER = "\n\n[Content truncated...]"


@dataclass(frozen=True)
class BudgetVerdict:
    valid: bool
    message: Optional[str] = None
    adjusted_primary: Optional[str] = None
    adjusted_secondary: Optional[str] = None

    def resolve(self, primary: str, secondary: Optional[str] = None) -> Tuple[str, Optional[str]]:
        """Return the texts to send downstream: originals when valid, adjusted ones otherwise."""
        if self.valid:
            return primary, secondary
        adjusted_secondary = self.adjusted_secondary if secondary is not None else None
        return self.adjusted_primary or "", adjusted_secondary


@dataclass(frozen=True)
class InputBudgetManager:
    chars_per_token: int = CHARS_PER_TOKEN
    reserve_chars: int = RESERVE_CHARS
    truncation_marker: str = TRUNCATION_MARKER

    def estimate_size(self, text: Optional[str]) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / self.chars_per_token)

    def truncate(self, text: str, max_tokens: int) -> str:
        max_tokens = max(max_tokens, 0)
        if self.estimate_size(text) <= max_tokens:
            return text

        keep = max(max_tokens * self.chars_per_token - self.reserve_chars, 0)
        truncated = text[:keep] + self.truncation_marker
        # short text stays whole rather than becoming just the marker, so output length is monotone in max_tokens
        if len(truncated) >= len(text):
            return text
        return truncated

    def evaluate(self, primary: str, secondary: Optional[str] = None, budget: int = 0) -> BudgetVerdict:
        budget = max(budget, 0)
        primary_size = self.estimate_size(primary)
        secondary_size = self.estimate_size(secondary)
        total = primary_size + secondary_size

        if total <= budget:
            return BudgetVerdict(valid=True)

        # floor division keeps the two shares within the budget
        primary_budget = budget * primary_size // total
        secondary_budget = budget * secondary_size // total

        return BudgetVerdict(
            valid=False,
            message=(
                f"Input too large ({total} tokens). "
                "Content has been automatically truncated to fit within limits."
            ),
            adjusted_primary=self.truncate(primary, primary_budget),
            adjusted_secondary=self.truncate(secondary, secondary_budget) if secondary is not None else None,
        )


default_budget_manager = InputBudgetManager()
