"""Ticks, candles, charts and indicators."""

from walkforward.market.chart import Chart, all_full, clone_charts
from walkforward.market.indicators import Indicator, IndicatorKind
from walkforward.market.models import Candle, ChartPeriod, ChartType, Tick
from walkforward.market.source import CsvTickSource, MemoryTickSource, TickRecord, TickSource

__all__ = [
    "Candle",
    "Chart",
    "ChartPeriod",
    "ChartType",
    "CsvTickSource",
    "Indicator",
    "IndicatorKind",
    "MemoryTickSource",
    "Tick",
    "TickRecord",
    "TickSource",
    "all_full",
    "clone_charts",
]
