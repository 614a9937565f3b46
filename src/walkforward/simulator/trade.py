"""Lifecycle of a single simulated position."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from walkforward.errors import TradeInvariantError
from walkforward.market.models import Tick
from walkforward.market.time import to_iso
from walkforward.simulator.models import TradeDirection, pip_profit


class Trade:
    def __init__(self, trade_id: int, direction: TradeDirection, tick: Tick) -> None:
        self.id = trade_id
        self.direction = direction
        self.opened_at: datetime = tick.time
        self.closed_at: Optional[datetime] = None
        # buy at the ask, sell at the bid
        self.open_price = tick.ask if direction == TradeDirection.LONG else tick.bid
        self.close_price = 0.0
        self.open_bid = tick.bid
        self.open_ask = tick.ask
        self.close_bid = 0.0
        self.close_ask = 0.0
        self.ticks: list[Tick] = [tick]
        self._open = True

    @classmethod
    def long(cls, trade_id: int, tick: Tick) -> "Trade":
        return cls(trade_id, TradeDirection.LONG, tick)

    @classmethod
    def short(cls, trade_id: int, tick: Tick) -> "Trade":
        return cls(trade_id, TradeDirection.SHORT, tick)

    def is_open(self) -> bool:
        return self._open

    def is_closed(self) -> bool:
        return not self._open

    def is_long(self) -> bool:
        return self.direction == TradeDirection.LONG

    def is_short(self) -> bool:
        return not self.is_long()

    def record_tick(self, tick: Tick) -> None:
        self.ticks.append(tick)

    def close(self, tick: Tick) -> None:
        if self.is_closed():
            raise TradeInvariantError(f"Trade {self.id} is already closed")
        self.closed_at = tick.time
        self.close_price = tick.bid if self.is_long() else tick.ask
        self.close_bid = tick.bid
        self.close_ask = tick.ask
        self._open = False

    def profit(self) -> float:
        """Profit in pips, marked against the latest tick while open."""
        if self.is_open():
            last_tick = self.ticks[-1]
            if self.is_long():
                return pip_profit(self.open_price, last_tick.bid)
            return pip_profit(last_tick.ask, self.open_price)
        if self.is_long():
            return pip_profit(self.open_price, self.close_price)
        return pip_profit(self.close_price, self.open_price)

    def csv_fields(self) -> list:
        return [
            "true" if self.is_long() else "false",
            to_iso(self.opened_at),
            to_iso(self.closed_at),
            self.open_price,
            self.close_price,
            round(self.open_ask - self.open_bid, 6),
            round(self.close_ask - self.close_bid, 6),
            f"{self.profit():.1f}",
        ]

    def __repr__(self) -> str:
        state = "open" if self._open else "closed"
        return f"Trade(id={self.id}, direction={self.direction.value}, {state}, open_price={self.open_price})"
