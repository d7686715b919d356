"""
Pydantic models for stored card state.

These models define the plain-data form of both card shapes so any external
store (document DB, JSON file, API payload) can round-trip them without the
engine. Timestamps are ISO 8601 strings in JSON mode, enums are their values.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from srs_engine.fsrs.constants import D_MAX, CardStatus, Response
from srs_engine.fsrs.memory_state import Card
from srs_engine.sm2.constants import LegacyStatus
from srs_engine.sm2.scheduler import LegacyCard, LegacyReviewEntry
from srs_engine.timeutils import ensure_utc


# ---- FSRS ----

class CardRecord(BaseModel):
    """Stored FSRS state of one card."""
    model_config = ConfigDict(extra="ignore")

    due: datetime = Field(..., description="Next scheduled review instant")
    stability: float = Field(0.0, ge=0, description="Days until retrievability reaches 90%")
    difficulty: float = Field(0.0, ge=0, le=D_MAX, description="Difficulty, 1-10 once reviewed")
    elapsed_days: float = Field(0.0, ge=0)
    scheduled_days: float = Field(0.0, ge=0)
    reps: int = Field(0, ge=0)
    lapses: int = Field(0, ge=0)
    status: CardStatus = CardStatus.NEW
    last_review: Optional[datetime] = None
    learning_steps: int = Field(0, ge=0)


# ---- SM-2 ----

class LegacyReviewRecord(BaseModel):
    """One entry of a legacy card's review history."""
    model_config = ConfigDict(extra="ignore")

    reviewed_at: datetime
    response: Response
    time_spent_ms: int = Field(0, ge=0)


class LegacyCardRecord(BaseModel):
    """
    Stored SM-2 state of one card.

    The four scheduling fields are required: a record missing any of them
    cannot be migrated without inventing history.
    """
    model_config = ConfigDict(extra="ignore")

    ease_factor: float = Field(..., gt=0, description="SM-2 ease factor (floor 1.3)")
    interval: int = Field(..., ge=0, description="Current interval in days")
    repetitions: int = Field(..., ge=0, description="Consecutive correct reviews")
    status: LegacyStatus = Field(..., description="new, learning, review or graduated")
    next_review: Optional[datetime] = None
    created_at: Optional[datetime] = None
    review_history: list[LegacyReviewRecord] = Field(default_factory=list)


# ---- Conversions ----

def _utc_or_none(value: Optional[datetime]) -> Optional[datetime]:
    return ensure_utc(value) if value is not None else None


def card_to_record(card: Card) -> CardRecord:
    return CardRecord.model_validate(asdict(card))


def card_from_record(record: Union[CardRecord, Mapping[str, Any]]) -> Card:
    """Build a Card from a stored record or a plain mapping."""
    if not isinstance(record, CardRecord):
        record = CardRecord.model_validate(record)
    return Card(
        due=ensure_utc(record.due),
        stability=record.stability,
        difficulty=record.difficulty,
        elapsed_days=record.elapsed_days,
        scheduled_days=record.scheduled_days,
        reps=record.reps,
        lapses=record.lapses,
        status=record.status,
        last_review=_utc_or_none(record.last_review),
        learning_steps=record.learning_steps,
    )


def legacy_card_to_record(card: LegacyCard) -> LegacyCardRecord:
    return LegacyCardRecord.model_validate(asdict(card))


def legacy_card_from_record(record: Union[LegacyCardRecord, Mapping[str, Any]]) -> LegacyCard:
    """Build a LegacyCard from a stored record or a plain mapping."""
    if not isinstance(record, LegacyCardRecord):
        record = LegacyCardRecord.model_validate(record)
    return LegacyCard(
        ease_factor=record.ease_factor,
        interval=record.interval,
        repetitions=record.repetitions,
        status=record.status,
        next_review=_utc_or_none(record.next_review),
        created_at=_utc_or_none(record.created_at),
        review_history=tuple(
            LegacyReviewEntry(
                reviewed_at=ensure_utc(entry.reviewed_at),
                response=entry.response,
                time_spent_ms=entry.time_spent_ms,
            )
            for entry in record.review_history
        ),
    )
