"""
Types for collection analytics.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CollectionStats:
    """
    Summary of a card collection at one instant.

    Averages cover reviewed cards (reps > 0) only; an empty collection is all zeros.
    """
    total: int = 0
    new: int = 0
    learning: int = 0
    review: int = 0
    relearning: int = 0
    due_today: int = 0
    average_stability: float = 0.0
    average_difficulty: float = 0.0
    estimated_retention: float = 0.0
