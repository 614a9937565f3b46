"""Streaming tick-to-candle aggregation.

A chart configured for N candles keeps N + 1 of them, newest first. Index 0 is
the bar still being built; indices 1..N are completed bars. Indicators and the
strategy rely on that numbering.
"""

from __future__ import annotations

import copy
from collections import deque
from typing import Optional

from walkforward.market.indicators import Indicator
from walkforward.market.models import Candle, ChartPeriod, ChartType, Tick


class Chart:
    def __init__(
        self,
        name: str,
        period: ChartPeriod,
        candle_count: int,
        chart_type: ChartType = ChartType.CANDLESTICK,
    ) -> None:
        self.name = name
        self.period = period
        self.candle_count = candle_count
        self.capacity = candle_count + 1
        self.chart_type = chart_type
        self.candles: deque[Candle] = deque(maxlen=self.capacity)
        self.indicators: list[Indicator] = []
        self.last_tick: Optional[Tick] = None
        self.active = False
        self.ticks_processed = 0

    @staticmethod
    def candlestick(name: str, period: ChartPeriod | str, candle_count: int) -> "Chart":
        if not isinstance(period, ChartPeriod):
            period = ChartPeriod.parse(period)
        return Chart(name, period, candle_count, ChartType.CANDLESTICK)

    def attach_indicator(self, indicator: Indicator) -> None:
        self.indicators.append(indicator)

    def has_full_data(self) -> bool:
        return len(self.candles) == self.capacity

    def set_active(self) -> None:
        self.active = True

    def process_tick(self, tick: Tick) -> None:
        period_id = tick.epoch_seconds // self.period.seconds
        if not self.candles:
            self._open_candle(tick, period_id)
        elif period_id > self.candles[0].period_id:
            # the close of a bar is the last tick seen before the next bar opened
            if self.last_tick is not None:
                self.candles[0].close_with(self.last_tick)
            self._open_candle(tick, period_id)
        else:
            self.candles[0].extend(tick)

        self.last_tick = tick
        self.ticks_processed += 1

    def _open_candle(self, tick: Tick, period_id: int) -> None:
        self.candles.appendleft(Candle.from_tick(tick, period_id))
        if self.has_full_data():
            for indicator in self.indicators:
                indicator.update(self.candles, self.active)

    def published_candles(self) -> tuple[Candle, ...]:
        if not self.active:
            return ()
        return tuple(copy.copy(candle) for candle in self.candles)

    def indicator_values(self) -> dict[str, float]:
        return {
            indicator.name: indicator.published
            for indicator in self.indicators
            if indicator.published is not None
        }

    def clone(self) -> "Chart":
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return (
            f"Chart(name={self.name!r}, period={self.period.value}, candles={len(self.candles)}/"
            f"{self.capacity}, ticks_processed={self.ticks_processed})"
        )


def clone_charts(charts: list[Chart]) -> list[Chart]:
    return [chart.clone() for chart in charts]


def all_full(charts: list[Chart]) -> bool:
    return all(chart.has_full_data() for chart in charts)
