"""
Exception types raised by the scheduling engine.
"""


class SRSEngineError(Exception):
    """Base class for engine errors."""


class ConfigError(SRSEngineError, ValueError):
    """Scheduler configuration value is out of range or unparsable."""


class MigrationError(SRSEngineError):
    """A legacy card could not be converted without losing history."""
