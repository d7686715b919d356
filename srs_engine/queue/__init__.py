"""Review queue: priority ordering and session assembly."""

from srs_engine.queue.priority import (
    get_due_cards,
    is_due_for_review,
    sort_by_review_priority,
)
from srs_engine.queue.session import build_review_session, fill_in_order

__all__ = [
    "sort_by_review_priority",
    "is_due_for_review",
    "get_due_cards",
    "build_review_session",
    "fill_in_order",
]
