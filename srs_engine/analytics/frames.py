"""
Card snapshot frames for analytics.

Flattens a card collection into a DataFrame with one row per card, evaluated
at a fixed instant.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

import pandas as pd

from srs_engine.fsrs.memory_state import Card
from srs_engine.fsrs.scheduler import get_retention
from srs_engine.timeutils import ensure_utc

SNAPSHOT_COLUMNS = ["status", "reps", "stability", "difficulty", "due", "retention"]


def cards_to_snapshot_df(cards: Iterable[Card], now: datetime) -> pd.DataFrame:
    """
    Build a card snapshot frame.

    Columns: status (str), reps, stability, difficulty, due (UTC timestamp),
    retention (at now).
    """
    rows = [
        {
            "status": card.status.value,
            "reps": card.reps,
            "stability": card.stability,
            "difficulty": card.difficulty,
            "due": ensure_utc(card.due),
            "retention": get_retention(card, now),
        }
        for card in cards
    ]
    if not rows:
        return pd.DataFrame(columns=SNAPSHOT_COLUMNS)

    df = pd.DataFrame(rows, columns=SNAPSHOT_COLUMNS)
    df["due"] = pd.to_datetime(df["due"], utc=True)
    return df
