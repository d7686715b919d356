"""
FSRS - Free Spaced Repetition Scheduler

Primary scheduler for the engine.

This package implements the FSRS v4 memory model with:
- Power-law forgetting curve: R = (1 + t / 9S)^-1
- Stability growth on recall and a separate lapse formula on failure
- Difficulty with mean reversion, bounded to [1, 10]
- New -> Learning -> Review <-> Relearning lifecycle

Quick start:
    from srs_engine import fsrs

    card = fsrs.create_card()
    result = fsrs.review_card(card, fsrs.Response.GOOD)
    card = result.card  # the original card is unchanged
"""

from srs_engine.fsrs.config import (
    DEFAULT_CONFIG,
    SchedulerConfig,
    load_config_from_env,
)
from srs_engine.fsrs.constants import (
    D_MAX,
    D_MIN,
    DEFAULT_WEIGHTS,
    MAXIMUM_INTERVAL,
    REQUEST_RETENTION,
    S_MIN,
    CardStatus,
    Rating,
    Response,
)
from srs_engine.fsrs.memory_state import (
    Card,
    calculate_retrievability,
    create_card,
    interval_for_stability,
)
from srs_engine.fsrs.scheduler import (
    ReviewResult,
    format_interval,
    get_retention,
    grade_to_response,
    is_due,
    preview_review,
    response_to_grade,
    review_card,
)


__all__ = [
    # Core algorithm
    "create_card",
    "review_card",
    "preview_review",
    "is_due",
    "get_retention",
    "response_to_grade",
    "grade_to_response",
    "format_interval",

    # Configuration
    "SchedulerConfig",
    "DEFAULT_CONFIG",
    "load_config_from_env",

    # Types and enums
    "Card",
    "ReviewResult",
    "CardStatus",
    "Rating",
    "Response",

    # Memory model
    "calculate_retrievability",
    "interval_for_stability",

    # Parameters
    "DEFAULT_WEIGHTS",
    "REQUEST_RETENTION",
    "MAXIMUM_INTERVAL",
    "S_MIN",
    "D_MIN",
    "D_MAX",
]
