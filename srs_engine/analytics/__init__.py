"""
Analytics package exports.
"""

from srs_engine.analytics.frames import cards_to_snapshot_df
from srs_engine.analytics.service import build_due_forecast, get_collection_stats
from srs_engine.analytics.types import CollectionStats

__all__ = [
    "CollectionStats",
    "get_collection_stats",
    "build_due_forecast",
    "cards_to_snapshot_df",
]
