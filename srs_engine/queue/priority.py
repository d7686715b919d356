"""
Review priority ordering.

Cards closest to being forgotten come first. Ordering uses the FSRS
retrievability at the caller's clock, so the same collection sorts the same
way for the same instant.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from srs_engine.fsrs.constants import CardStatus
from srs_engine.fsrs.memory_state import Card
from srs_engine.fsrs.scheduler import get_retention, is_due
from srs_engine.timeutils import ensure_utc, resolve_now


def sort_by_review_priority(cards: Iterable[Card], now: Optional[datetime] = None) -> list[Card]:
    """
    Sort cards by ascending retention, ties broken by earlier due date.

    Returns a new list; the sort is stable and idempotent.
    """
    now = resolve_now(now)
    return sorted(cards, key=lambda card: (get_retention(card, now), ensure_utc(card.due)))


def is_due_for_review(card: Card, now: Optional[datetime] = None) -> bool:
    """A card needs review when it is due or has never been studied."""
    return card.status == CardStatus.NEW or is_due(card, now)


def get_due_cards(cards: Iterable[Card], now: Optional[datetime] = None) -> list[Card]:
    """Cards needing review at now, in priority order."""
    now = resolve_now(now)
    return sort_by_review_priority(
        (card for card in cards if is_due_for_review(card, now)), now
    )
