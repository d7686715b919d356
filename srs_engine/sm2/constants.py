"""
SM-2 Constants

Parameters of the legacy SuperMemo-2 scheduler, kept for collections created
before FSRS.
"""

from enum import Enum

from srs_engine.fsrs.constants import Response


class LegacyStatus(str, Enum):
    """Lifecycle state of a legacy card."""
    NEW = "new"
    LEARNING = "learning"
    REVIEW = "review"
    GRADUATED = "graduated"


# ---- Ease Factor ----

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
MAX_EASE_FACTOR = 3.0


# ---- Intervals (days) ----

GRADUATION_INTERVAL = 21  # Interval at which a card counts as graduated

# Fixed first intervals for cards that were never reviewed
NEW_CARD_INTERVALS = {
    Response.AGAIN: 0,  # Same day
    Response.HARD: 1,
    Response.GOOD: 3,
    Response.EASY: 7,
}


# ---- Response Mapping ----

# SM-2 recall quality (0-5) per response
QUALITY = {
    Response.AGAIN: 0,  # Complete blackout
    Response.HARD: 2,   # Recalled with serious difficulty
    Response.GOOD: 4,   # Recalled after hesitation
    Response.EASY: 5,   # Perfect recall
}
DEFAULT_QUALITY = 3
PASSING_QUALITY = 2

# Extra ease adjustment applied on top of the SM-2 formula
EASE_MODIFIERS = {
    Response.AGAIN: -0.20,
    Response.HARD: -0.15,
    Response.GOOD: 0.0,
    Response.EASY: 0.15,
}


# ---- Daily Limits ----

MAX_NEW_CARDS_PER_DAY = 10
MAX_REVIEWS_PER_DAY = 50
REVIEWS_PER_NEW_CARD = 3  # Study sessions interleave one new card after this many reviews

SECONDS_PER_CARD = 10  # Average time spent per card when estimating a session
