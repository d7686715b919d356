"""
SM-2 - legacy scheduler

Retained to keep collections created before FSRS working and to feed the
migration adapter.
"""

from srs_engine.sm2.constants import (
    DEFAULT_EASE_FACTOR,
    MAX_EASE_FACTOR,
    MIN_EASE_FACTOR,
    LegacyStatus,
)
from srs_engine.sm2.scheduler import (
    LegacyCard,
    LegacyReviewEntry,
    SM2Result,
    apply_review,
    calculate_average_ease_factor,
    calculate_next_review,
    calculate_retention_rate,
    create_legacy_card,
    estimate_session_duration,
    get_cards_for_review,
    get_new_cards,
    get_next_review_text,
    get_study_session,
    is_due_for_review,
    response_to_quality,
)

__all__ = [
    "LegacyCard",
    "LegacyReviewEntry",
    "LegacyStatus",
    "SM2Result",
    "create_legacy_card",
    "calculate_next_review",
    "apply_review",
    "response_to_quality",
    "is_due_for_review",
    "get_cards_for_review",
    "get_new_cards",
    "get_study_session",
    "calculate_average_ease_factor",
    "calculate_retention_rate",
    "get_next_review_text",
    "estimate_session_duration",
    "DEFAULT_EASE_FACTOR",
    "MIN_EASE_FACTOR",
    "MAX_EASE_FACTOR",
]
