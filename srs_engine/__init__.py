"""
srs_engine - spaced repetition scheduling

Pure scheduling engine for flashcard collections:
- fsrs: primary scheduler (stability / difficulty / retrievability)
- sm2: legacy SuperMemo-2 scheduler
- migration: SM-2 -> FSRS card conversion
- queue: review priority and session assembly
- analytics: collection statistics (pandas)
- schemas: pydantic records for storing cards

The engine performs no I/O. Callers own storage and pass the current time.
"""

from srs_engine import fsrs, sm2
from srs_engine.analytics import CollectionStats, build_due_forecast, get_collection_stats
from srs_engine.errors import ConfigError, MigrationError, SRSEngineError
from srs_engine.fsrs import (
    Card,
    CardStatus,
    Rating,
    Response,
    ReviewResult,
    SchedulerConfig,
    create_card,
    get_retention,
    is_due,
    review_card,
)
from srs_engine.migration import migrate_collection, migrate_from_sm2
from srs_engine.queue import build_review_session, get_due_cards, sort_by_review_priority

__all__ = [
    # Subpackages
    "fsrs",
    "sm2",
    # Cards and reviews
    "Card",
    "CardStatus",
    "Rating",
    "Response",
    "ReviewResult",
    "SchedulerConfig",
    "create_card",
    "review_card",
    "is_due",
    "get_retention",
    # Migration
    "migrate_from_sm2",
    "migrate_collection",
    # Queue
    "sort_by_review_priority",
    "get_due_cards",
    "build_review_session",
    # Analytics
    "CollectionStats",
    "get_collection_stats",
    "build_due_forecast",
    # Errors
    "SRSEngineError",
    "ConfigError",
    "MigrationError",
]
