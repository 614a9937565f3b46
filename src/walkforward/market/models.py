"""Market data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from walkforward.errors import ConfigError
from walkforward.market.time import epoch_seconds, is_sunday, parse_tick_time, to_iso


@dataclass(frozen=True)
class Tick:
    time: datetime
    bid: float
    ask: float

    @property
    def spread(self) -> float:
        return self.ask - self.bid

    @property
    def epoch_seconds(self) -> int:
        return epoch_seconds(self.time)

    def is_sunday(self) -> bool:
        return is_sunday(self.time)

    def iso_time(self) -> str:
        return to_iso(self.time)

    def csv_fields(self) -> list:
        return [self.bid, self.ask, self.iso_time()]

    @staticmethod
    def parse_line(line: str) -> "Tick":
        """Parse ``MM/DD/YYYY HH:MM:SS,bid,ask``."""
        parts = line.strip().split(",")
        if len(parts) < 3:
            raise ValueError(f"Malformed tick line: {line!r}")
        return Tick(time=parse_tick_time(parts[0]), bid=float(parts[1]), ask=float(parts[2]))


class ChartPeriod(str, Enum):
    M1 = "M1"
    M5 = "M5"
    M15 = "M15"
    M30 = "M30"
    H1 = "H1"
    H4 = "H4"

    @property
    def seconds(self) -> int:
        return _PERIOD_SECONDS[self]

    @staticmethod
    def parse(value: str) -> "ChartPeriod":
        try:
            return ChartPeriod(value)
        except ValueError as exc:
            raise ConfigError(f"Unknown chart period: {value}") from exc


_PERIOD_SECONDS = {
    ChartPeriod.M1: 60,
    ChartPeriod.M5: 60 * 5,
    ChartPeriod.M15: 60 * 15,
    ChartPeriod.M30: 60 * 30,
    ChartPeriod.H1: 60 * 60,
    ChartPeriod.H4: 60 * 60 * 4,
}


class ChartType(str, Enum):
    CANDLESTICK = "candlestick"


@dataclass
class Candle:
    open_bid: float
    open_ask: float
    high_bid: float
    high_ask: float
    low_bid: float
    low_ask: float
    period_id: int
    close_bid: float = 0.0
    close_ask: float = 0.0
    volume: int = 1

    @staticmethod
    def from_tick(tick: Tick, period_id: int) -> "Candle":
        return Candle(
            open_bid=tick.bid,
            open_ask=tick.ask,
            high_bid=tick.bid,
            high_ask=tick.ask,
            low_bid=tick.bid,
            low_ask=tick.ask,
            period_id=period_id,
        )

    def extend(self, tick: Tick) -> None:
        self.high_bid = max(self.high_bid, tick.bid)
        self.low_bid = min(self.low_bid, tick.bid)
        self.high_ask = max(self.high_ask, tick.ask)
        self.low_ask = min(self.low_ask, tick.ask)
        self.volume += 1

    def close_with(self, tick: Tick) -> None:
        self.close_bid = tick.bid
        self.close_ask = tick.ask
