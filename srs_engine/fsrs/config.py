"""
Scheduler configuration.

SchedulerConfig bundles every tunable FSRS parameter. Scheduling functions
take an optional config and fall back to DEFAULT_CONFIG, so independent
collections can run with different settings side by side.

Environment overrides (read only when load_config_from_env() is called):
    SRS_REQUEST_RETENTION        target retention, 0 < r < 1
    SRS_MAXIMUM_INTERVAL         longest interval in days
    SRS_GRADUATION_STABILITY     stability (days) needed to leave learning
    SRS_RELEARNING_LAPSE_FACTOR  extra penalty for failing while relearning
    SRS_LEARNING_STEPS           comma-separated minutes, e.g. "1,10"
    SRS_RELEARNING_STEPS         comma-separated minutes, e.g. "10"
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from srs_engine.errors import ConfigError
from srs_engine.fsrs.constants import (
    DEFAULT_WEIGHTS,
    GRADUATION_STABILITY,
    LEARNING_STEPS_MINUTES,
    MAXIMUM_INTERVAL,
    RELEARNING_LAPSE_FACTOR,
    RELEARNING_STEPS_MINUTES,
    REQUEST_RETENTION,
)

logger = logging.getLogger(__name__)


def _minutes(values: tuple[float, ...]) -> tuple[timedelta, ...]:
    return tuple(timedelta(minutes=v) for v in values)


@dataclass(frozen=True)
class SchedulerConfig:
    """
    Parameters for the FSRS scheduler.

    Attributes:
        weights: 17 FSRS model weights (w0..w16)
        request_retention: Retrievability the next interval is sized for
        maximum_interval: Upper bound on Review intervals (days)
        learning_steps: Short intervals used while Learning
        relearning_steps: Short intervals used while Relearning
        graduation_stability: Stability (days) that moves a card to Review
        relearning_lapse_factor: Multiplier (0, 1] on lapse stability when
            a Relearning card fails again; 1.0 treats it like a first lapse
    """
    weights: tuple[float, ...] = DEFAULT_WEIGHTS
    request_retention: float = REQUEST_RETENTION
    maximum_interval: int = MAXIMUM_INTERVAL
    learning_steps: tuple[timedelta, ...] = field(
        default_factory=lambda: _minutes(LEARNING_STEPS_MINUTES)
    )
    relearning_steps: tuple[timedelta, ...] = field(
        default_factory=lambda: _minutes(RELEARNING_STEPS_MINUTES)
    )
    graduation_stability: float = GRADUATION_STABILITY
    relearning_lapse_factor: float = RELEARNING_LAPSE_FACTOR

    def __post_init__(self):
        """Reject values that would break the scheduling invariants."""
        if len(self.weights) != len(DEFAULT_WEIGHTS):
            raise ConfigError(
                f"Expected {len(DEFAULT_WEIGHTS)} weights, got {len(self.weights)}"
            )
        if not all(math.isfinite(w) for w in self.weights):
            raise ConfigError("Weights must be finite numbers")
        if not 0.0 < self.request_retention < 1.0:
            raise ConfigError(
                f"request_retention must be between 0 and 1, got {self.request_retention}"
            )
        if not (math.isfinite(self.maximum_interval) and self.maximum_interval >= 1):
            raise ConfigError(
                f"maximum_interval must be at least 1 day, got {self.maximum_interval}"
            )
        if not self.learning_steps or not self.relearning_steps:
            raise ConfigError("learning_steps and relearning_steps must not be empty")
        for step in (*self.learning_steps, *self.relearning_steps):
            if step <= timedelta(0):
                raise ConfigError(f"Steps must be positive, got {step}")
        if not (math.isfinite(self.graduation_stability) and self.graduation_stability > 0):
            raise ConfigError(
                f"graduation_stability must be positive, got {self.graduation_stability}"
            )
        if not 0.0 < self.relearning_lapse_factor <= 1.0:
            raise ConfigError(
                "relearning_lapse_factor must be in (0, 1], "
                f"got {self.relearning_lapse_factor}"
            )


DEFAULT_CONFIG = SchedulerConfig()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be a finite number, got {raw!r}")
    return value


def _env_steps(name: str, default: tuple[timedelta, ...]) -> tuple[timedelta, ...]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        minutes = tuple(float(part) for part in raw.split(",") if part.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be comma-separated minutes, got {raw!r}") from exc
    if not all(math.isfinite(m) for m in minutes):
        raise ConfigError(f"{name} must contain finite minutes, got {raw!r}")
    try:
        return _minutes(minutes)
    except OverflowError as exc:
        raise ConfigError(f"{name} has a step too large to represent, got {raw!r}") from exc


def load_config_from_env(
    dotenv_path: Optional[Union[str, Path]] = None
) -> SchedulerConfig:
    """
    Build a SchedulerConfig from environment variables.

    Loads a .env file first (without overriding variables already set),
    then reads the SRS_* variables. Unset variables keep their defaults.

    Args:
        dotenv_path: Explicit .env file; defaults to python-dotenv's search

    Returns:
        Validated SchedulerConfig

    Raises:
        ConfigError: If a variable is unparsable or out of range
    """
    load_dotenv(dotenv_path=dotenv_path)

    config = SchedulerConfig(
        request_retention=_env_float("SRS_REQUEST_RETENTION", DEFAULT_CONFIG.request_retention),
        maximum_interval=int(_env_float("SRS_MAXIMUM_INTERVAL", DEFAULT_CONFIG.maximum_interval)),
        graduation_stability=_env_float(
            "SRS_GRADUATION_STABILITY", DEFAULT_CONFIG.graduation_stability
        ),
        relearning_lapse_factor=_env_float(
            "SRS_RELEARNING_LAPSE_FACTOR", DEFAULT_CONFIG.relearning_lapse_factor
        ),
        learning_steps=_env_steps("SRS_LEARNING_STEPS", DEFAULT_CONFIG.learning_steps),
        relearning_steps=_env_steps("SRS_RELEARNING_STEPS", DEFAULT_CONFIG.relearning_steps),
    )
    logger.debug("Loaded scheduler config: %s", config)
    return config
