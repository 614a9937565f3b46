"""Error taxonomy for the walk-forward engine."""

from __future__ import annotations


class WalkForwardError(Exception):
    """Base class for engine errors."""


class ConfigError(WalkForwardError, ValueError):
    """Malformed configuration, chart or variable definitions."""


class StreamError(WalkForwardError):
    """The tick source ran out before a required condition was met."""


class TradeInvariantError(WalkForwardError, RuntimeError):
    """A trade or simulation contract was violated by the caller."""
