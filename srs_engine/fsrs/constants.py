"""
FSRS Constants and Parameters

All fixed parameters for the FSRS algorithm in one place.
The weights are the published FSRS v4 default set.
"""

from enum import Enum, IntEnum


# ---- Ratings ----

class Rating(IntEnum):
    """Grade applied to a card by a review."""
    MANUAL = 0  # Non-review adjustment, never produced from a response
    AGAIN = 1   # Retrieval failed
    HARD = 2    # Retrieved with high effort
    GOOD = 3    # Retrieved normally
    EASY = 4    # Retrieved fluently


class Response(str, Enum):
    """User response to a card."""
    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"


class CardStatus(str, Enum):
    """Lifecycle state of a card."""
    NEW = "New"
    LEARNING = "Learning"
    REVIEW = "Review"
    RELEARNING = "Relearning"


# ---- Global Constants ----

REQUEST_RETENTION = 0.90  # Target retrievability when the card comes due
MAXIMUM_INTERVAL = 365    # Longest interval in days
S_MIN = 0.01              # Minimum stability (days) once reviewed
D_MIN = 1.0               # Minimum difficulty
D_MAX = 10.0              # Maximum difficulty

# Forgetting curve: R = (1 + t / (DECAY_FACTOR * S)) ^ -1
# DECAY_FACTOR = 9 puts R at 0.9 when t == S.
DECAY_FACTOR = 9.0

# A lapse keeps at most this share of the previous stability, however late it comes
LAPSE_STABILITY_CAP = 0.5


# ---- Model Weights ----

DEFAULT_WEIGHTS = (
    0.4,   # w0: initial stability, AGAIN
    0.6,   # w1: initial stability, HARD
    2.4,   # w2: initial stability, GOOD
    5.8,   # w3: initial stability, EASY
    4.93,  # w4: initial difficulty for GOOD
    0.94,  # w5: initial difficulty slope per grade
    0.86,  # w6: difficulty step per grade
    0.01,  # w7: mean reversion weight
    1.49,  # w8: recall stability scale (exp)
    0.14,  # w9: recall stability saturation
    0.94,  # w10: recall stability retrievability gain
    2.18,  # w11: lapse stability scale
    0.05,  # w12: lapse difficulty exponent
    0.34,  # w13: lapse stability exponent
    1.26,  # w14: lapse retrievability gain
    0.29,  # w15: HARD penalty
    2.61,  # w16: EASY bonus
)


# ---- Short-Interval Regime ----

LEARNING_STEPS_MINUTES = (1.0, 10.0)
RELEARNING_STEPS_MINUTES = (10.0,)
GRADUATION_STABILITY = 1.0   # Days of stability needed to leave Learning/Relearning
RELEARNING_LAPSE_FACTOR = 1.0  # Extra stability multiplier when a Relearning card fails again


# ---- Lookup Tables ----

RESPONSE_TO_RATING = {
    Response.AGAIN: Rating.AGAIN,
    Response.HARD: Rating.HARD,
    Response.GOOD: Rating.GOOD,
    Response.EASY: Rating.EASY,
}

RATING_TO_RESPONSE = {rating: response for response, rating in RESPONSE_TO_RATING.items()}
