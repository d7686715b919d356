"""
SM-2 Spaced Repetition Algorithm Implementation.

Legacy scheduler for collections created before FSRS. Interval and ease
factor are driven by the recall quality (0-5) derived from the response.

All functions are pure: cards are frozen and every update returns a new one.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Sequence

from srs_engine.fsrs.constants import Response
from srs_engine.sm2.constants import (
    DEFAULT_EASE_FACTOR,
    DEFAULT_QUALITY,
    EASE_MODIFIERS,
    GRADUATION_INTERVAL,
    MAX_EASE_FACTOR,
    MAX_NEW_CARDS_PER_DAY,
    MAX_REVIEWS_PER_DAY,
    MIN_EASE_FACTOR,
    NEW_CARD_INTERVALS,
    PASSING_QUALITY,
    QUALITY,
    REVIEWS_PER_NEW_CARD,
    SECONDS_PER_CARD,
    LegacyStatus,
)
from srs_engine.timeutils import ensure_utc, resolve_now

logger = logging.getLogger(__name__)

_MIN_TIME = datetime.min.replace(tzinfo=timezone.utc)
_MAX_TIME = datetime.max.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class LegacyReviewEntry:
    """A single review in a legacy card's history."""
    reviewed_at: datetime
    response: Response
    time_spent_ms: int = 0


@dataclass(frozen=True)
class LegacyCard:
    """SM-2 scheduling state for one item."""
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = 0  # days
    repetitions: int = 0  # consecutive correct reviews
    status: LegacyStatus = LegacyStatus.NEW
    next_review: Optional[datetime] = None
    created_at: Optional[datetime] = None
    review_history: tuple[LegacyReviewEntry, ...] = ()


@dataclass(frozen=True)
class SM2Result:
    """Result of a review scheduling calculation."""
    interval: int
    ease_factor: float
    repetitions: int
    status: LegacyStatus
    next_review_date: datetime


def create_legacy_card(now: Optional[datetime] = None) -> LegacyCard:
    """Create a legacy card that is available for review immediately."""
    now = resolve_now(now)
    return LegacyCard(next_review=now, created_at=now)


def _coerce_response(response: Any) -> Optional[Response]:
    value = response.strip().lower() if isinstance(response, str) else response
    try:
        return Response(value)
    except (ValueError, TypeError):
        logger.warning("Unrecognized response %r for SM-2 review", response)
        return None


def response_to_quality(response: Any) -> int:
    """
    Convert a response to SM-2 recall quality (0-5).

    again -> 0, hard -> 2, good -> 4, easy -> 5; anything else -> 3.
    """
    return QUALITY.get(_coerce_response(response), DEFAULT_QUALITY)


def _determine_status(repetitions: int, interval: int, was_correct: bool) -> LegacyStatus:
    if not was_correct or repetitions == 0:
        return LegacyStatus.LEARNING
    if interval >= GRADUATION_INTERVAL:
        return LegacyStatus.GRADUATED
    if repetitions >= 2:
        return LegacyStatus.REVIEW
    return LegacyStatus.LEARNING


def calculate_next_review(
    card: LegacyCard,
    response: Any,
    now: Optional[datetime] = None
) -> SM2Result:
    """
    Calculate the next schedule based on the review response.

    Classic SM-2:
        EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
        plus a per-response modifier, clamped to [1.3, 3.0]

    Successful reviews (q >= 2) step the interval 1 -> 6 -> round(I * EF');
    AGAIN resets repetitions to 0 and the interval to 1 day. Cards in the
    new state use fixed first intervals instead.

    Args:
        card: Current legacy card
        response: User response (again/hard/good/easy)
        now: Review instant (defaults to now)

    Returns:
        SM2Result with updated scheduling parameters
    """
    now = resolve_now(now)
    coerced = _coerce_response(response)
    quality = QUALITY.get(coerced, DEFAULT_QUALITY)
    was_correct = quality >= PASSING_QUALITY

    if card.status == LegacyStatus.NEW:
        interval = NEW_CARD_INTERVALS.get(coerced, NEW_CARD_INTERVALS[Response.GOOD])
        repetitions = 1 if was_correct else 0
        return SM2Result(
            interval=interval,
            ease_factor=DEFAULT_EASE_FACTOR,
            repetitions=repetitions,
            status=_determine_status(repetitions, interval, was_correct),
            next_review_date=now + timedelta(days=interval),
        )

    ease_factor = card.ease_factor + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02))
    ease_factor += EASE_MODIFIERS.get(coerced, 0.0)
    ease_factor = max(MIN_EASE_FACTOR, min(MAX_EASE_FACTOR, ease_factor))

    if was_correct:
        if card.repetitions == 0:
            interval = 1
        elif card.repetitions == 1:
            interval = 6
        else:
            interval = round(card.interval * ease_factor)
        repetitions = card.repetitions + 1
    else:
        repetitions = 0
        interval = 1

    interval = max(1, interval)

    return SM2Result(
        interval=interval,
        ease_factor=ease_factor,
        repetitions=repetitions,
        status=_determine_status(repetitions, interval, was_correct),
        next_review_date=now + timedelta(days=interval),
    )


def apply_review(
    card: LegacyCard,
    response: Any,
    now: Optional[datetime] = None,
    time_spent_ms: int = 0
) -> LegacyCard:
    """
    Apply an SM-2 review and return the updated card with the review logged.
    """
    now = resolve_now(now)
    result = calculate_next_review(card, response, now)
    entry = LegacyReviewEntry(
        reviewed_at=now,
        response=_coerce_response(response) or Response.GOOD,
        time_spent_ms=time_spent_ms,
    )
    return replace(
        card,
        ease_factor=result.ease_factor,
        interval=result.interval,
        repetitions=result.repetitions,
        status=result.status,
        next_review=result.next_review_date,
        review_history=card.review_history + (entry,),
    )


# ---- Collection filters ----

def is_due_for_review(card: LegacyCard, today: Optional[datetime] = None) -> bool:
    """Check whether a legacy card needs review; cards without a date are due."""
    if card.next_review is None:
        return True
    return ensure_utc(card.next_review) <= resolve_now(today)


def _review_sort_key(card: LegacyCard) -> datetime:
    return ensure_utc(card.next_review) if card.next_review is not None else _MIN_TIME


def get_cards_for_review(
    cards: Sequence[LegacyCard],
    today: Optional[datetime] = None,
    limit: Optional[int] = None
) -> list[LegacyCard]:
    """
    Cards due for review, most overdue first.

    A limit of None or 0 returns every due card.
    """
    today = resolve_now(today)
    due_cards = [card for card in cards if is_due_for_review(card, today)]
    due_cards.sort(key=_review_sort_key)
    return due_cards[:limit] if limit else due_cards


def get_new_cards(
    cards: Sequence[LegacyCard],
    limit: Optional[int] = None
) -> list[LegacyCard]:
    """
    Cards never studied, oldest first.

    A limit of None or 0 returns every new card.
    """
    new_cards = [card for card in cards if card.status == LegacyStatus.NEW]
    new_cards.sort(key=lambda c: ensure_utc(c.created_at) if c.created_at else _MAX_TIME)
    return new_cards[:limit] if limit else new_cards


def get_study_session(
    cards: Sequence[LegacyCard],
    max_new: int = MAX_NEW_CARDS_PER_DAY,
    max_review: int = MAX_REVIEWS_PER_DAY,
    today: Optional[datetime] = None
) -> list[LegacyCard]:
    """
    Combine due reviews and new cards into one session.

    New cards are interleaved: one after every REVIEWS_PER_NEW_CARD reviews.
    """
    new_cards = get_new_cards(cards, max_new)
    review_cards = get_cards_for_review(
        [c for c in cards if c.status != LegacyStatus.NEW], today, max_review
    )

    session: list[LegacyCard] = []
    new_iter = iter(new_cards)
    for position, card in enumerate(review_cards, start=1):
        session.append(card)
        if position % REVIEWS_PER_NEW_CARD == 0:
            new_card = next(new_iter, None)
            if new_card is not None:
                session.append(new_card)
    session.extend(new_iter)
    return session


def calculate_average_ease_factor(cards: Sequence[LegacyCard]) -> float:
    """Average ease factor, or the default for an empty collection."""
    if not cards:
        return DEFAULT_EASE_FACTOR
    return sum(card.ease_factor for card in cards) / len(cards)


def calculate_retention_rate(cards: Sequence[LegacyCard]) -> float:
    """
    Percentage of logged reviews that were not AGAIN (0 with no history).
    """
    responses = [entry.response for card in cards for entry in card.review_history]
    if not responses:
        return 0.0
    correct = sum(1 for response in responses if response != Response.AGAIN)
    return correct / len(responses) * 100.0


# ---- Display helpers ----

def get_next_review_text(card: LegacyCard, now: Optional[datetime] = None) -> str:
    """
    Describe when a card is next due: Today, Tomorrow, In 3 days, In 2 weeks, In 4 months.

    Partial days round up; cards without a date are due today.
    """
    if card.next_review is None:
        return "Today"
    seconds = (ensure_utc(card.next_review) - resolve_now(now)).total_seconds()
    days = math.ceil(seconds / 86400)

    if days <= 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    if days < 7:
        return f"In {days} days"
    if days < 30:
        return f"In {math.ceil(days / 7)} weeks"
    return f"In {math.ceil(days / 30)} months"


def estimate_session_duration(card_count: int) -> int:
    """Estimated minutes to study card_count cards, rounded up."""
    return math.ceil(card_count * SECONDS_PER_CARD / 60)
