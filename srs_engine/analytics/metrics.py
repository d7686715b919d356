"""
Metric computations over card snapshot frames.
"""

from __future__ import annotations

from datetime import datetime

import pandas as pd

from srs_engine.fsrs.constants import CardStatus


def start_of_next_day(now: datetime) -> pd.Timestamp:
    """Midnight UTC following now."""
    return pd.Timestamp(now).tz_convert("UTC").floor("D") + pd.Timedelta(days=1)


def build_forecast_index(now: datetime, days: int) -> pd.DatetimeIndex:
    """
    Dense UTC day index starting at the day of now.
    """
    if days <= 0:
        return pd.DatetimeIndex([], tz="UTC")
    start = pd.Timestamp(now).tz_convert("UTC").floor("D")
    return pd.date_range(start=start, periods=days, freq="D")


def zero_series(day_index: pd.DatetimeIndex, dtype: str = "int64") -> pd.Series:
    """
    Convenience zero-valued series aligned to day index.
    """
    return pd.Series(0, index=day_index, dtype=dtype)


def count_by_status(snapshot_df: pd.DataFrame) -> dict[CardStatus, int]:
    """
    Number of cards in each lifecycle state, zero for absent states.
    """
    if snapshot_df.empty:
        return {status: 0 for status in CardStatus}
    counts = snapshot_df["status"].value_counts()
    return {status: int(counts.get(status.value, 0)) for status in CardStatus}


def count_due_before(snapshot_df: pd.DataFrame, cutoff: pd.Timestamp) -> int:
    """
    Cards whose due instant falls before cutoff (overdue included).
    """
    if snapshot_df.empty:
        return 0
    return int((snapshot_df["due"] < cutoff).sum())


def reviewed_means(snapshot_df: pd.DataFrame) -> tuple[float, float, float]:
    """
    Mean stability, difficulty and retention over reviewed cards (reps > 0).
    """
    if snapshot_df.empty:
        return 0.0, 0.0, 0.0
    reviewed = snapshot_df[snapshot_df["reps"] > 0]
    if reviewed.empty:
        return 0.0, 0.0, 0.0
    return (
        float(reviewed["stability"].mean()),
        float(reviewed["difficulty"].mean()),
        float(reviewed["retention"].mean()),
    )


def compute_due_per_day(snapshot_df: pd.DataFrame, day_index: pd.DatetimeIndex) -> pd.Series:
    """
    Cards falling due on each day of the index; overdue cards land on the first day.
    """
    if len(day_index) == 0:
        return pd.Series(dtype="int64")
    if snapshot_df.empty:
        return zero_series(day_index)

    due_days = snapshot_df["due"].dt.floor("D").clip(lower=day_index[0])
    counts = due_days.value_counts().sort_index()
    return counts.reindex(day_index, fill_value=0).astype("int64")
