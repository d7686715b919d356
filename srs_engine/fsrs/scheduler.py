"""
Scheduler - FSRS Algorithm Logic

Pure FSRS scheduling and state updates (no I/O, no shared state).

Main workflow:
1. Caller holds a card and collects a response
2. Measure elapsed time since the last review
3. Calculate retrievability
4. Apply the difficulty and stability update for the card's phase
5. Return a new card plus the next due date

The input card is never modified.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Optional

from srs_engine.fsrs import review_updates, short_term
from srs_engine.fsrs.config import DEFAULT_CONFIG, SchedulerConfig
from srs_engine.fsrs.constants import (
    RATING_TO_RESPONSE,
    RESPONSE_TO_RATING,
    CardStatus,
    Rating,
    Response,
)
from srs_engine.fsrs.memory_state import (
    SECONDS_PER_DAY,
    Card,
    calculate_retrievability,
    days_between,
    interval_for_stability,
    last_review_reference,
)
from srs_engine.timeutils import ensure_utc, resolve_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewResult:
    """Outcome of a single review."""
    card: Card
    next_review_date: datetime
    interval: float  # days
    status: CardStatus
    retrievability: float  # before the review


# ---- Response conversion ----

def response_to_grade(response: Any) -> Rating:
    """
    Convert a user response to an FSRS rating.

    again -> 1, hard -> 2, good -> 3, easy -> 4. Accepts Response members or
    their string values (case-insensitive). Anything else is treated as GOOD
    so a bad rating value never interrupts a session. Never returns MANUAL.
    """
    value = response.strip().lower() if isinstance(response, str) else response
    try:
        return RESPONSE_TO_RATING[Response(value)]
    except (ValueError, KeyError, TypeError):
        logger.warning("Unrecognized response %r, treating as good", response)
        return Rating.GOOD


def grade_to_response(grade: Any) -> Response:
    """
    Convert an FSRS rating back to a response.

    MANUAL and unrecognized values map to GOOD.
    """
    try:
        return RATING_TO_RESPONSE[Rating(grade)]
    except (ValueError, KeyError, TypeError):
        return Response.GOOD


# ---- Review ----

def _review_interval_days(stability: float, config: SchedulerConfig) -> float:
    """Whole-day Review interval for a stability, within [1, maximum_interval]."""
    days = round(interval_for_stability(stability, config.request_retention))
    return float(max(1, min(config.maximum_interval, days)))


def review_card(
    card: Card,
    response: Any,
    now: Optional[datetime] = None,
    config: Optional[SchedulerConfig] = None
) -> ReviewResult:
    """
    Review a card and compute its next state.

    Args:
        card: Card to review (left unchanged)
        response: User response (again/hard/good/easy)
        now: Review instant (defaults to now)
        config: Scheduler parameters (defaults to DEFAULT_CONFIG)

    Returns:
        ReviewResult with the new card, next review date and interval (days)
    """
    if config is None:
        config = DEFAULT_CONFIG
    now = resolve_now(now)

    rating = response_to_grade(response)
    weights = config.weights
    elapsed_days = days_between(last_review_reference(card), now)

    lapses = card.lapses

    if card.status == CardStatus.NEW:
        retrievability = 1.0
        stability = review_updates.initial_stability(weights, rating)
        difficulty = review_updates.initial_difficulty(weights, rating)
        steps = config.learning_steps
        successes = short_term.next_success_count(0, rating)
        status = CardStatus.LEARNING
        interval = short_term.step_interval(steps, 0, rating)
    else:
        retrievability = calculate_retrievability(card.stability, elapsed_days)
        difficulty = review_updates.next_difficulty(weights, card.difficulty, rating)

        if rating == Rating.AGAIN:
            severity = (
                config.relearning_lapse_factor
                if card.status == CardStatus.RELEARNING else 1.0
            )
            stability = review_updates.next_forget_stability(
                weights, card.stability, card.difficulty, retrievability, severity
            )
            lapses += 1
            status = (
                CardStatus.LEARNING if card.status == CardStatus.LEARNING
                else CardStatus.RELEARNING
            )
            successes = 0
            interval = short_term.steps_for(status, config)[0]
        else:
            stability = review_updates.next_recall_stability(
                weights, card.stability, card.difficulty, retrievability, rating
            )
            if card.status == CardStatus.REVIEW:
                status = CardStatus.REVIEW
                successes = 0
                interval = timedelta(days=_review_interval_days(stability, config))
            else:
                steps = short_term.steps_for(card.status, config)
                successes = short_term.next_success_count(card.learning_steps, rating)
                if short_term.should_graduate(stability, successes, steps, config):
                    status = CardStatus.REVIEW
                    successes = 0
                    interval = timedelta(days=_review_interval_days(stability, config))
                else:
                    status = card.status
                    interval = short_term.step_interval(steps, card.learning_steps, rating)

    scheduled_days = interval.total_seconds() / SECONDS_PER_DAY
    due = now + interval

    new_card = replace(
        card,
        due=due,
        stability=stability,
        difficulty=difficulty,
        elapsed_days=elapsed_days,
        scheduled_days=scheduled_days,
        reps=card.reps + 1,
        lapses=lapses,
        status=status,
        last_review=now,
        learning_steps=successes,
    )

    logger.debug(
        "Reviewed card (%s -> %s, %s): S=%.3f D=%.3f R=%.3f interval=%.4fd",
        card.status.value, status.value, rating.name,
        stability, difficulty, retrievability, scheduled_days,
    )

    return ReviewResult(
        card=new_card,
        next_review_date=due,
        interval=scheduled_days,
        status=status,
        retrievability=retrievability,
    )


def preview_review(
    card: Card,
    now: Optional[datetime] = None,
    config: Optional[SchedulerConfig] = None
) -> dict[Response, ReviewResult]:
    """
    Outcome of every possible response, for showing intervals on the buttons.
    """
    now = resolve_now(now)
    return {response: review_card(card, response, now, config) for response in Response}


# ---- Utilities ----

def is_due(card: Card, now: Optional[datetime] = None) -> bool:
    """Check whether a card needs review at now."""
    now = resolve_now(now)
    return ensure_utc(card.due) <= now


def get_retention(card: Card, now: Optional[datetime] = None) -> float:
    """
    Estimated probability that the card is still remembered at now.

    New (never reviewed) cards have nothing to forget and return 1.0.
    """
    if card.status == CardStatus.NEW or card.reps == 0:
        return 1.0

    now = resolve_now(now)
    elapsed_days = days_between(last_review_reference(card), now)
    return calculate_retrievability(card.stability, elapsed_days)


def format_interval(days: float) -> str:
    """
    Format an interval as short readable text.

    Examples: 5min, 3h, 4d, 2w, 3mo, 1y
    """
    if days < 1:
        minutes = round(days * 24 * 60)
        if minutes < 60:
            return f"{minutes}min"
        return f"{round(minutes / 60)}h"
    if days < 7:
        return f"{round(days)}d"
    if days < 30:
        return f"{round(days / 7)}w"
    if days < 365:
        return f"{round(days / 30)}mo"
    return f"{round(days / 365)}y"
