"""
Review Updates

Implements the FSRS v4 difficulty and stability formulas.

Key principles:
- Spaced, effortful success produces the largest stability gains
- Harder cards and cards that were likely still remembered gain less
- A lapse resets stability through a separate, much smaller formula
- Difficulty reflects learning efficiency and is pulled back toward its default
"""

from __future__ import annotations

import math
from typing import Sequence

from srs_engine.fsrs.constants import D_MAX, D_MIN, LAPSE_STABILITY_CAP, S_MIN, Rating


def clamp_difficulty(difficulty: float) -> float:
    return max(D_MIN, min(D_MAX, difficulty))


def initial_stability(weights: Sequence[float], rating: Rating) -> float:
    """
    Stability after the first review.

    Formula: S0(G) = w[G - 1]
    """
    return max(S_MIN, weights[int(rating) - 1])


def initial_difficulty(weights: Sequence[float], rating: Rating) -> float:
    """
    Difficulty after the first review.

    Formula: D0(G) = w4 - (G - 3) * w5, clipped to [1, 10]
    """
    return clamp_difficulty(weights[4] - (int(rating) - 3) * weights[5])


def next_difficulty(
    weights: Sequence[float],
    difficulty: float,
    rating: Rating
) -> float:
    """
    Update difficulty based on the review outcome.

    Formula:
        D' = D - w6 * (G - 3)
        D'' = w7 * D0(GOOD) + (1 - w7) * D'

    Conceptually:
    - AGAIN and HARD increase difficulty
    - EASY decreases difficulty
    - GOOD only applies the mean reversion toward D0(GOOD)

    Args:
        weights: FSRS weights
        difficulty: Current difficulty
        rating: Review grade

    Returns:
        New difficulty value (clipped to [1, 10])
    """
    shifted = difficulty - weights[6] * (int(rating) - 3)
    reverted = weights[7] * initial_difficulty(weights, Rating.GOOD) + (1.0 - weights[7]) * shifted
    return clamp_difficulty(reverted)


def next_recall_stability(
    weights: Sequence[float],
    stability: float,
    difficulty: float,
    retrievability: float,
    rating: Rating
) -> float:
    """
    Update stability after successful retrieval (HARD/GOOD/EASY).

    Formula:
        S' = S * (1 + e^w8 * (11 - D) * S^-w9 * (e^(w10 * (1 - R)) - 1) * h * b)

    Where:
        - (11 - D) shrinks gains for difficult cards
        - S^-w9 saturates gains for already stable cards
        - (e^(w10 * (1 - R)) - 1) rewards risky (well-spaced) success
        - h = w15 for HARD, b = w16 for EASY, 1 otherwise

    Args:
        weights: FSRS weights
        stability: Current stability (S)
        difficulty: Current difficulty (D)
        retrievability: Retrievability at review time (R)
        rating: HARD, GOOD or EASY

    Returns:
        New stability value (never below the current one)
    """
    if rating == Rating.AGAIN:
        raise ValueError("Use next_forget_stability for AGAIN ratings")

    stability = max(S_MIN, stability)
    hard_penalty = weights[15] if rating == Rating.HARD else 1.0
    easy_bonus = weights[16] if rating == Rating.EASY else 1.0

    growth = (
        math.exp(weights[8])
        * (11.0 - clamp_difficulty(difficulty))
        * math.pow(stability, -weights[9])
        * (math.exp(weights[10] * (1.0 - retrievability)) - 1.0)
        * hard_penalty
        * easy_bonus
    )
    return max(S_MIN, stability * (1.0 + growth))


def next_forget_stability(
    weights: Sequence[float],
    stability: float,
    difficulty: float,
    retrievability: float,
    severity: float = 1.0
) -> float:
    """
    Update stability after failed retrieval (AGAIN).

    Formula:
        S' = w11 * D^-w12 * ((S + 1)^w13 - 1) * e^(w14 * (1 - R))

    The result is capped at LAPSE_STABILITY_CAP * S, so a lapse always
    shrinks stability even when the card was badly overdue (low R makes the
    raw formula large). It is then scaled by severity (1.0 for a first lapse)
    and floored at S_MIN.

    Args:
        weights: FSRS weights
        stability: Current stability
        difficulty: Current difficulty
        retrievability: Retrievability at review time
        severity: Extra multiplier in (0, 1] for repeated failures

    Returns:
        New stability value (reduced)
    """
    stability = max(S_MIN, stability)
    forgotten = (
        weights[11]
        * math.pow(clamp_difficulty(difficulty), -weights[12])
        * (math.pow(stability + 1.0, weights[13]) - 1.0)
        * math.exp(weights[14] * (1.0 - retrievability))
    )
    return max(S_MIN, min(forgotten, stability * LAPSE_STABILITY_CAP) * severity)
