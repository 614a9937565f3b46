"""Strategy capability driven once per tick by the simulation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from walkforward.market.models import Candle, Tick


class Decision(str, Enum):
    NOOP = "noop"
    OPEN_LONG = "long"
    OPEN_SHORT = "short"
    CLOSE_ALL = "close"

    @staticmethod
    def coerce(value: Any) -> "Decision":
        if value is None:
            return Decision.NOOP
        if isinstance(value, Decision):
            return value
        text = str(value).strip().lower()
        for member in Decision:
            if text in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unknown strategy decision: {value!r}")


@dataclass(frozen=True)
class MarketView:
    """Read-only snapshot of a simulation handed to ``on_tick``."""

    tick: Tick
    has_open_trades: bool
    open_trades: int
    closed_trades: int
    balance: float
    equity: float
    charts: Mapping[str, tuple[Candle, ...]] = field(default_factory=dict)
    indicators: Mapping[str, float] = field(default_factory=dict)

    @property
    def bid(self) -> float:
        return self.tick.bid

    @property
    def ask(self) -> float:
        return self.tick.ask

    @property
    def spread(self) -> float:
        return self.tick.spread


class TradingStrategy(ABC):
    strategy_id: str = "strategy"

    @abstractmethod
    def setup(self, parameters: Mapping[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def on_tick(self, view: MarketView, tick: Tick) -> Decision:
        raise NotImplementedError

    def teardown(self) -> None:
        return None
