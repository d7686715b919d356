"""
SM-2 to FSRS migration.

Converts legacy cards into FSRS cards so a collection can switch schedulers
without losing its review schedule. Unlike the schedulers, migration is
strict: a record with missing or invalid SM-2 fields raises MigrationError
instead of being filled with defaults.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timedelta
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import ValidationError

from srs_engine.errors import MigrationError
from srs_engine.fsrs.constants import D_MAX, D_MIN, CardStatus
from srs_engine.fsrs.memory_state import Card
from srs_engine.schemas import LegacyCardRecord
from srs_engine.sm2.constants import MAX_EASE_FACTOR, MIN_EASE_FACTOR, LegacyStatus
from srs_engine.sm2.scheduler import LegacyCard
from srs_engine.timeutils import ensure_utc, resolve_now

logger = logging.getLogger(__name__)

LegacyInput = Union[LegacyCard, LegacyCardRecord, Mapping[str, Any]]

# SM-2 intervals were scheduled at roughly 90% recall; FSRS stability is the
# 90% point, so it sits a little below the legacy interval.
STABILITY_PER_INTERVAL_DAY = 0.9
MIN_MIGRATED_STABILITY = 1.0

STATUS_MAP = {
    LegacyStatus.NEW: CardStatus.NEW,
    LegacyStatus.LEARNING: CardStatus.LEARNING,
    LegacyStatus.REVIEW: CardStatus.REVIEW,
    LegacyStatus.GRADUATED: CardStatus.REVIEW,
}


def _validate(legacy: LegacyInput) -> LegacyCardRecord:
    if isinstance(legacy, LegacyCardRecord):
        return legacy
    data = asdict(legacy) if isinstance(legacy, LegacyCard) else legacy
    try:
        return LegacyCardRecord.model_validate(data)
    except ValidationError as exc:
        raise MigrationError(f"Invalid legacy card: {exc}") from exc


def ease_to_difficulty(ease_factor: float) -> float:
    """
    Map SM-2 ease onto FSRS difficulty.

    Linear and decreasing: ease 1.3 (hardest) -> 10, ease 3.0 (easiest) -> 1.
    Values outside the ease range are clamped.
    """
    ease = max(MIN_EASE_FACTOR, min(MAX_EASE_FACTOR, ease_factor))
    fraction = (MAX_EASE_FACTOR - ease) / (MAX_EASE_FACTOR - MIN_EASE_FACTOR)
    return D_MIN + fraction * (D_MAX - D_MIN)


def interval_to_stability(interval: int) -> float:
    return max(MIN_MIGRATED_STABILITY, STABILITY_PER_INTERVAL_DAY * interval)


def migrate_from_sm2(legacy: LegacyInput, now: Optional[datetime] = None) -> Card:
    """
    Convert one SM-2 card into an FSRS card.

    Args:
        legacy: LegacyCard, LegacyCardRecord or stored mapping
        now: Fallback anchor for cards without next_review (defaults to now)

    Returns:
        Card carrying the legacy schedule. Lapses start at 0 because SM-2
        does not record them.

    Raises:
        MigrationError: Required SM-2 fields are missing or invalid
    """
    record = _validate(legacy)
    now = resolve_now(now)

    interval_delta = timedelta(days=record.interval)
    if record.next_review is not None:
        due = ensure_utc(record.next_review)
    else:
        due = now + interval_delta

    status = STATUS_MAP[record.status]
    reviewed = status != CardStatus.NEW or record.repetitions > 0

    return Card(
        due=due,
        stability=interval_to_stability(record.interval),
        difficulty=ease_to_difficulty(record.ease_factor),
        elapsed_days=0.0,
        scheduled_days=float(record.interval),
        reps=record.repetitions,
        lapses=0,
        status=status,
        last_review=due - interval_delta if reviewed else None,
        learning_steps=0,
    )


def migrate_collection(
    cards: Iterable[LegacyInput],
    now: Optional[datetime] = None
) -> list[Card]:
    """
    Migrate every card of a legacy collection with a shared clock.

    The first invalid card aborts the batch with MigrationError.
    """
    now = resolve_now(now)
    migrated = [migrate_from_sm2(card, now) for card in cards]
    logger.info("Migrated %d legacy cards to FSRS", len(migrated))
    return migrated
