"""
Service layer assembling collection analytics.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import pandas as pd

from srs_engine.analytics.frames import cards_to_snapshot_df
from srs_engine.analytics.metrics import (
    build_forecast_index,
    compute_due_per_day,
    count_by_status,
    count_due_before,
    reviewed_means,
    start_of_next_day,
)
from srs_engine.analytics.types import CollectionStats
from srs_engine.fsrs.constants import CardStatus
from srs_engine.fsrs.memory_state import Card
from srs_engine.timeutils import resolve_now

DEFAULT_FORECAST_DAYS = 7


def get_collection_stats(cards: Sequence[Card], now: Optional[datetime] = None) -> CollectionStats:
    """
    Summarize a collection: counts per state, cards due today and averages
    over reviewed cards.
    """
    now = resolve_now(now)
    snapshot_df = cards_to_snapshot_df(cards, now)
    if snapshot_df.empty:
        return CollectionStats()

    by_status = count_by_status(snapshot_df)
    average_stability, average_difficulty, estimated_retention = reviewed_means(snapshot_df)

    return CollectionStats(
        total=len(snapshot_df),
        new=by_status[CardStatus.NEW],
        learning=by_status[CardStatus.LEARNING],
        review=by_status[CardStatus.REVIEW],
        relearning=by_status[CardStatus.RELEARNING],
        due_today=count_due_before(snapshot_df, start_of_next_day(now)),
        average_stability=average_stability,
        average_difficulty=average_difficulty,
        estimated_retention=estimated_retention,
    )


def build_due_forecast(
    cards: Sequence[Card],
    now: Optional[datetime] = None,
    days: int = DEFAULT_FORECAST_DAYS
) -> pd.Series:
    """
    Cards falling due on each of the next days UTC days, indexed by day.

    Overdue cards count toward the first day; cards beyond the window are
    not counted.
    """
    now = resolve_now(now)
    day_index = build_forecast_index(now, days)
    return compute_due_per_day(cards_to_snapshot_df(cards, now), day_index)
