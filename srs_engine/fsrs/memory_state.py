"""
Memory State - FSRS Card and Retrievability

Defines the card value type and the derived quantities of the memory model.

Key concepts:
- Stability (S): Days until retrievability decays to 90%
- Difficulty (D): How hard the card is to learn (1-10 scale)
- Retrievability (R): Probability of successful recall at time t
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from srs_engine.fsrs.constants import DECAY_FACTOR, CardStatus
from srs_engine.timeutils import ensure_utc, resolve_now

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400.0


@dataclass(frozen=True)
class Card:
    """
    Scheduling state for one item.

    Frozen: every review produces a new Card, the input is never touched.
    """
    due: datetime
    stability: float = 0.0  # S, in days
    difficulty: float = 0.0  # D, range 1-10 once reviewed
    elapsed_days: float = 0.0  # Days between the last two reviews
    scheduled_days: float = 0.0  # Interval assigned by the last review
    reps: int = 0
    lapses: int = 0
    status: CardStatus = CardStatus.NEW
    last_review: Optional[datetime] = None
    learning_steps: int = 0  # Consecutive successes in the current short-interval phase

    @property
    def is_new(self) -> bool:
        return self.status == CardStatus.NEW


def create_card(now: Optional[datetime] = None) -> Card:
    """
    Initialize state for a new card (never seen before).

    Args:
        now: Creation instant (defaults to now); the card is due immediately

    Returns:
        New Card in the New state
    """
    return Card(due=resolve_now(now))


def days_between(start: Optional[datetime], end: datetime) -> float:
    """
    Days from start to end, clamped to zero.

    A missing start, an end before start (inconsistent caller clock) or a
    non-finite result all give 0.0.
    """
    if start is None:
        return 0.0

    days = (ensure_utc(end) - ensure_utc(start)).total_seconds() / SECONDS_PER_DAY
    if not math.isfinite(days) or days < 0:
        if days < 0:
            logger.warning("Clamping negative elapsed time (%.4f days) to zero", days)
        return 0.0
    return days


def last_review_reference(card: Card) -> Optional[datetime]:
    """
    Instant the card's elapsed time is measured from.

    Uses last_review, falling back to due - scheduled_days for cards
    restored from storage without a review timestamp.
    """
    if card.last_review is not None:
        return card.last_review
    if card.reps == 0:
        return None
    return ensure_utc(card.due) - timedelta(days=card.scheduled_days)


def calculate_retrievability(stability: float, elapsed_days: float) -> float:
    """
    Calculate retrievability using the FSRS power-law forgetting curve.

    Formula: R = (1 + t / (9 * S)) ^ -1

    Where:
    - t = time since the last review (in days)
    - S = stability (in days)

    Interpretation:
    - Immediately after review: R = 1.0
    - At t = S: R = 0.9
    - Decays with a heavier tail than exponential decay

    Args:
        stability: Current stability in days
        elapsed_days: Time since the last review in days

    Returns:
        Retrievability between 0 and 1
    """
    if stability <= 0 or elapsed_days <= 0 or not math.isfinite(elapsed_days):
        return 1.0

    retrievability = 1.0 / (1.0 + elapsed_days / (DECAY_FACTOR * stability))
    return max(0.0, min(1.0, retrievability))


def interval_for_stability(stability: float, request_retention: float) -> float:
    """
    Invert the forgetting curve: days until R falls to request_retention.

    Formula: I = 9 * S * (1 / r - 1)

    With r = 0.9 the interval equals the stability.
    """
    return DECAY_FACTOR * stability * (1.0 / request_retention - 1.0)
