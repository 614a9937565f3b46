"""Balance, equity and drawdown bookkeeping for one simulated pass."""

from __future__ import annotations

import math
from typing import Optional

from walkforward.errors import TradeInvariantError
from walkforward.market.chart import Chart, all_full
from walkforward.market.models import Tick
from walkforward.runtime.ids import IdAllocator
from walkforward.simulator.models import JPY_QUOTE_DIVISOR, SimulationSettings
from walkforward.simulator.trade import Trade
from walkforward.strategy.base import MarketView


class Simulation:
    def __init__(
        self,
        charts: list[Chart],
        settings: SimulationSettings,
        ids: IdAllocator,
        in_sample: bool = True,
    ) -> None:
        self.id = ids.simulation_id()
        self.ids = ids
        self.in_sample = in_sample
        self.settings = settings
        self.charts = charts
        self.deposit = settings.deposit
        self.drawdown_limit = settings.drawdown_limit
        self.last_equity_high = settings.deposit
        self.last_equity_low = settings.deposit
        self.highest_drawdown = 0.0
        self.open_trades: list[Trade] = []
        self.closed_trades: list[Trade] = []

    def _adjust(self, pips: float) -> float:
        # only trade pips are scaled for JPY quotes; the deposit stays in account currency
        if self.settings.jpy_quote:
            return pips / JPY_QUOTE_DIVISOR
        return pips

    def balance(self) -> float:
        """Deposit plus the profit of closed trades."""
        return self.deposit + self._adjust(sum(trade.profit() for trade in self.closed_trades))

    def equity(self) -> float:
        """Balance plus the floating profit of open trades."""
        return self.balance() + self._adjust(sum(trade.profit() for trade in self.open_trades))

    def profit(self) -> float:
        return self.balance() - self.deposit

    def activate_charts(self) -> None:
        for chart in self.charts:
            chart.set_active()

    def can_trade(self) -> bool:
        return all_full(self.charts)

    def update_charts(self, tick: Tick) -> None:
        for chart in self.charts:
            chart.process_tick(tick)

    def open_long_trade(self, tick: Tick) -> Trade:
        trade = Trade.long(self.ids.trade_id(), tick)
        self.open_trades.append(trade)
        return trade

    def open_short_trade(self, tick: Tick) -> Trade:
        trade = Trade.short(self.ids.trade_id(), tick)
        self.open_trades.append(trade)
        return trade

    def close_all_open_trades(self, tick: Tick) -> None:
        for trade in self.open_trades:
            trade.close(tick)
        self.migrate_closed_trades()

    def migrate_closed_trades(self) -> None:
        still_open: list[Trade] = []
        for trade in self.open_trades:
            if trade.is_closed():
                self.closed_trades.append(trade)
            else:
                still_open.append(trade)
        self.open_trades = still_open

    def record_tick_onto_trades(self, tick: Tick) -> None:
        for trade in self.open_trades:
            trade.record_tick(tick)

    def update_drawdown(self) -> float:
        equity = self.equity()
        if equity > self.last_equity_high:
            self.last_equity_high = equity
            self.last_equity_low = equity
        else:
            self.last_equity_low = min(self.last_equity_low, equity)

        drawdown = -(100.0 - ((self.last_equity_low / self.last_equity_high) * 100.0))
        if drawdown < self.highest_drawdown:
            self.highest_drawdown = drawdown
        return drawdown

    def has_exceeded_max_drawdown(self) -> bool:
        return self.highest_drawdown < self.drawdown_limit

    def has_open_trades(self) -> bool:
        return bool(self.open_trades)

    def open_trades_count(self) -> int:
        return len(self.open_trades)

    def closed_trades_count(self) -> int:
        return len(self.closed_trades)

    def closed_long_trade_count(self) -> int:
        return sum(1 for trade in self.closed_trades if trade.is_long())

    def closed_short_trade_count(self) -> int:
        return self.closed_trades_count() - self.closed_long_trade_count()

    def pip_expectancy(self) -> float:
        if self.open_trades:
            raise TradeInvariantError("pip expectancy can only be determined when no trades are open")
        if not self.closed_trades:
            return -math.inf
        return self.profit() / self.closed_trades_count()

    def view(self, tick: Tick) -> MarketView:
        charts = {}
        indicators: dict[str, float] = {}
        for chart in self.charts:
            charts[chart.name] = chart.published_candles()
            indicators.update(chart.indicator_values())
        return MarketView(
            tick=tick,
            has_open_trades=self.has_open_trades(),
            open_trades=self.open_trades_count(),
            closed_trades=self.closed_trades_count(),
            balance=self.balance(),
            equity=self.equity(),
            charts=charts,
            indicators=indicators,
        )

    def last_closed_trade(self) -> Optional[Trade]:
        return self.closed_trades[-1] if self.closed_trades else None
