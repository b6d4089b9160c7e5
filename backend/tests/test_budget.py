import math

import pytest

from career_tools.budget import (
    InputBudgetManager, BudgetVerdict, TRUNCATION_MARKER, default_budget_manager,
)

MARKER_TOKENS = math.ceil(len(TRUNCATION_MARKER) / 4)


@pytest.fixture
def budget():
    return InputBudgetManager()


def test_estimate_size_of_empty_text_is_zero(budget):
    assert budget.estimate_size("") == 0
    assert budget.estimate_size(None) == 0


def test_estimate_size_rounds_up(budget):
    assert budget.estimate_size("a" * 400) == 100
    assert budget.estimate_size("a" * 401) == 101
    assert budget.estimate_size("abc") == 1


def test_truncate_keeps_budget_minus_reserve_plus_marker(budget):
    out = budget.truncate("a" * 400, 50)
    assert out == "a" * 100 + TRUNCATION_MARKER
    assert len(out) == 100 + len(TRUNCATION_MARKER)


def test_truncate_returns_only_marker_when_nothing_fits(budget):
    assert budget.truncate("a" * 400, 10) == TRUNCATION_MARKER
    assert budget.truncate("a" * 400, 25) == TRUNCATION_MARKER


def test_truncate_treats_negative_budget_as_zero(budget):
    assert budget.truncate("a" * 400, -5) == budget.truncate("a" * 400, 0) == TRUNCATION_MARKER


def test_truncate_never_lengthens_short_text(budget):
    # Marker would make the output longer than the input
    assert budget.truncate("a" * 10, 1) == "a" * 10
    assert budget.truncate("a" * 10, 0) == "a" * 10


@pytest.mark.parametrize("length", [0, 1, 4, 99, 400, 4001])
def test_truncate_is_a_noop_when_text_fits(budget, length):
    text = "x" * length
    assert budget.truncate(text, budget.estimate_size(text)) is text
    assert budget.truncate(text, budget.estimate_size(text) + 10) is text


def test_truncate_respects_budget_and_is_monotone(budget):
    texts = ["", "short", "word " * 50, "z" * 1000, "line\n" * 2000]
    for text in texts:
        previous = -1
        for max_tokens in range(0, 700, 7):
            out = budget.truncate(text, max_tokens)
            assert budget.estimate_size(out) <= max_tokens + MARKER_TOKENS
            assert len(out) >= previous
            previous = len(out)


def test_custom_marker_and_chars_per_token():
    manager = InputBudgetManager(chars_per_token=2, reserve_chars=10, truncation_marker=" [cut]")
    assert manager.estimate_size("abcde") == 3
    assert manager.truncate("q" * 100, 10) == "q" * 10 + " [cut]"


def test_evaluate_truncates_both_blocks_proportionally(budget):
    verdict = budget.evaluate("a" * 4000, "b" * 4000, 1000)
    assert verdict.valid is False
    assert "2000 tokens" in verdict.message
    assert "automatically truncated" in verdict.message
    assert verdict.adjusted_primary == "a" * 1900 + TRUNCATION_MARKER
    assert verdict.adjusted_secondary == "b" * 1900 + TRUNCATION_MARKER


def test_evaluate_short_inputs_are_valid(budget):
    verdict = budget.evaluate("short resume", "short job desc", 2000)
    assert verdict == BudgetVerdict(valid=True)
    assert verdict.message is None
    assert verdict.adjusted_primary is None and verdict.adjusted_secondary is None


def test_evaluate_single_block(budget):
    verdict = budget.evaluate("a" * 8000, budget=1000)
    assert verdict.valid is False
    assert verdict.adjusted_primary == "a" * 3900 + TRUNCATION_MARKER
    assert verdict.adjusted_secondary is None


def test_evaluate_cuts_the_larger_block_hardest(budget):
    resume = "r" * 12000  # 3000 tokens
    job = "j" * 2000  # 500 tokens
    verdict = budget.evaluate(resume, job, 2000)
    # sub budgets: 2000*3000//3500 = 1714, 2000*500//3500 = 285
    assert verdict.adjusted_primary == "r" * (1714 * 4 - 100) + TRUNCATION_MARKER
    assert verdict.adjusted_secondary == "j" * (285 * 4 - 100) + TRUNCATION_MARKER


def test_evaluate_validity_threshold(budget):
    assert budget.evaluate("a" * 400, "b" * 400, 200).valid is True
    assert budget.evaluate("a" * 400, "b" * 401, 200).valid is False


@pytest.mark.parametrize("size_a,size_b,limit", [
    (3, 7, 9), (1000, 1, 999), (333, 333, 500), (1, 1, 1), (12345, 678, 2000),
])
def test_evaluate_sub_budgets_never_overshoot(budget, size_a, size_b, limit):
    verdict = budget.evaluate("a" * (size_a * 4), "b" * (size_b * 4), limit)
    assert verdict.valid is False
    sub_a = limit * size_a // (size_a + size_b)
    sub_b = limit * size_b // (size_a + size_b)
    assert sub_a + sub_b <= limit
    assert budget.estimate_size(verdict.adjusted_primary) <= sub_a + MARKER_TOKENS
    assert budget.estimate_size(verdict.adjusted_secondary) <= sub_b + MARKER_TOKENS


def test_evaluate_empty_input_is_valid_even_with_zero_budget(budget):
    assert budget.evaluate("", None, 0).valid is True
    assert budget.evaluate("", "", -10).valid is True


def test_evaluate_is_deterministic(budget):
    first = budget.evaluate("a" * 5000, "b" * 300, 900)
    second = budget.evaluate("a" * 5000, "b" * 300, 900)
    assert first == second


def test_resolve_picks_originals_or_adjusted_blocks(budget):
    resume, job = "a" * 4000, "b" * 4000
    assert budget.evaluate("x", "y", 10).resolve("x", "y") == ("x", "y")
    verdict = budget.evaluate(resume, job, 1000)
    assert verdict.resolve(resume, job) == (verdict.adjusted_primary, verdict.adjusted_secondary)


def test_default_manager_is_immutable():
    with pytest.raises(AttributeError):
        default_budget_manager.chars_per_token = 3
