"""
Short-Interval Regime

Learning and Relearning cards are rescheduled on fixed short steps
(minutes) instead of stability-driven day intervals.

Key principle:
A card leaves the short regime (graduates to Review) on a successful review
once its stability reaches the graduation threshold or it has passed every step.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Sequence

from srs_engine.fsrs.config import SchedulerConfig
from srs_engine.fsrs.constants import CardStatus, Rating


def steps_for(status: CardStatus, config: SchedulerConfig) -> tuple[timedelta, ...]:
    """
    Step list used by a card in the given status.

    New and Learning cards use the learning steps; Review and Relearning
    cards (a lapse) use the relearning steps.
    """
    if status in (CardStatus.NEW, CardStatus.LEARNING):
        return config.learning_steps
    return config.relearning_steps


def step_interval(
    steps: Sequence[timedelta],
    successes_before: int,
    rating: Rating
) -> timedelta:
    """
    Pick the short interval for a review in the short regime.

    - AGAIN restarts at the first step
    - HARD repeats the current step
    - GOOD advances one step
    - EASY jumps to the last step

    Args:
        steps: Step list for the card's phase
        successes_before: Consecutive successes before this review
        rating: Review grade

    Returns:
        Interval until the card is due again
    """
    last = len(steps) - 1
    if rating == Rating.AGAIN:
        return steps[0]
    if rating == Rating.HARD:
        return steps[min(successes_before, last)]
    if rating == Rating.EASY:
        return steps[last]
    return steps[min(successes_before + 1, last)]


def next_success_count(successes_before: int, rating: Rating) -> int:
    """Consecutive successes after this review (AGAIN resets the streak)."""
    if rating == Rating.AGAIN:
        return 0
    return successes_before + 1


def should_graduate(
    stability: float,
    successes: int,
    steps: Sequence[timedelta],
    config: SchedulerConfig
) -> bool:
    """
    Decide whether a Learning/Relearning card moves to Review.

    Args:
        stability: Stability after this review
        successes: Consecutive successes including this review
        steps: Step list for the card's phase
        config: Scheduler configuration

    Returns:
        True if the card should graduate
    """
    if successes <= 0:
        return False
    return stability >= config.graduation_stability or successes >= len(steps)
