"""Indicators computed from a chart's completed candles."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from walkforward.market.models import Candle


class IndicatorKind(str, Enum):
    SMA = "sma"


class Indicator:
    def __init__(self, name: str, lookback: int, kind: IndicatorKind = IndicatorKind.SMA) -> None:
        self.name = name
        self.lookback = lookback
        self.kind = kind
        self.value: Optional[float] = None
        self.published: Optional[float] = None

    @staticmethod
    def sma(name: str, lookback: int) -> "Indicator":
        return Indicator(name, lookback, IndicatorKind.SMA)

    def update(self, candles: Sequence[Candle], active: bool) -> float:
        if self.kind == IndicatorKind.SMA:
            value = self._simple_moving_average(candles)
        else:  # pragma: no cover - closed enum
            raise ValueError(f"Unknown indicator kind: {self.kind}")
        self.value = value
        if active:
            self.published = value
        return value

    def _simple_moving_average(self, candles: Sequence[Candle]) -> float:
        # index 0 is the incomplete bar
        total = 0.0
        for index in range(1, self.lookback + 1):
            total += candles[index].close_bid
        return total / self.lookback

    def __repr__(self) -> str:
        return f"Indicator(name={self.name!r}, lookback={self.lookback}, kind={self.kind.value})"
