"""Simulation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from walkforward.errors import ConfigError

PIP_MULTIPLIER = 10000.0
JPY_QUOTE_DIVISOR = 100.0
DEFAULT_DEPOSIT = 10000.0
DEFAULT_DRAWDOWN_LIMIT = -10.0


class TradeDirection(str, Enum):
    LONG = "long"
    SHORT = "short"


@dataclass(frozen=True)
class SimulationSettings:
    deposit: float = DEFAULT_DEPOSIT
    drawdown_limit: float = DEFAULT_DRAWDOWN_LIMIT  # percent, must be negative
    jpy_quote: bool = False

    def __post_init__(self) -> None:
        if self.drawdown_limit >= 0:
            raise ConfigError(f"drawdown_limit must be negative, got {self.drawdown_limit}")
        if self.deposit <= 0:
            raise ConfigError(f"deposit must be > 0, got {self.deposit}")


def pip_profit(open_price: float, close_price: float) -> float:
    return (close_price * PIP_MULTIPLIER) - (open_price * PIP_MULTIPLIER)
