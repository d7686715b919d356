"""
Review session assembly.

A session is the due review cards in priority order followed by unseen cards,
each pool capped separately.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence, TypeVar

from srs_engine.fsrs.memory_state import Card
from srs_engine.fsrs.scheduler import is_due
from srs_engine.queue.priority import sort_by_review_priority
from srs_engine.timeutils import resolve_now

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_REVIEWS_PER_SESSION = 200
MAX_NEW_PER_SESSION = 20

REVIEW_POOL = "review"
NEW_POOL = "new"


def fill_in_order(
    pools: dict[str, list[T]],
    order: list[str],
    limits: dict[str, int]
) -> list[T]:
    """
    Fill a session by walking pools in order, taking at most limits[name] from each.
    """
    session: list[T] = []
    for name in order:
        session.extend(pools.get(name, [])[:max(0, limits.get(name, 0))])
    return session


def build_review_session(
    cards: Sequence[Card],
    now: Optional[datetime] = None,
    max_reviews: int = MAX_REVIEWS_PER_SESSION,
    max_new: int = MAX_NEW_PER_SESSION
) -> list[Card]:
    """
    Build a session: due reviews first (most at risk first), then new cards.

    Args:
        cards: Card snapshot of the collection
        now: Session instant (defaults to now)
        max_reviews: Cap on previously studied cards
        max_new: Cap on never-studied cards, taken in input order

    Returns:
        Ordered list of cards to present
    """
    now = resolve_now(now)
    pools = {
        REVIEW_POOL: sort_by_review_priority(
            [card for card in cards if not card.is_new and is_due(card, now)], now
        ),
        NEW_POOL: [card for card in cards if card.is_new],
    }
    session = fill_in_order(
        pools,
        [REVIEW_POOL, NEW_POOL],
        {REVIEW_POOL: max_reviews, NEW_POOL: max_new},
    )
    logger.debug(
        "Built session: %d cards (%d due reviews, %d new available)",
        len(session), len(pools[REVIEW_POOL]), len(pools[NEW_POOL]),
    )
    return session
