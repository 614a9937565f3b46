"""Single in-sample or out-of-sample pass over a tick window."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

from loguru import logger

from walkforward.errors import StreamError
from walkforward.market.chart import Chart
from walkforward.market.models import Tick
from walkforward.monitoring.trade_log import TradeLog
from walkforward.runtime.ids import IdAllocator
from walkforward.simulator.models import SimulationSettings
from walkforward.simulator.simulation import Simulation
from walkforward.strategy.base import Decision, TradingStrategy

if TYPE_CHECKING:  # pragma: no cover
    from walkforward.optimizer.variables import RangeBoundVariables


class Algorithm:
    def __init__(
        self,
        strategy: TradingStrategy,
        charts: list[Chart],
        settings: SimulationSettings,
        ids: IdAllocator,
        trade_log: Optional[TradeLog] = None,
        in_sample: bool = True,
    ) -> None:
        self.strategy = strategy
        self.in_sample = in_sample
        self.trade_log = trade_log
        self.simulation = Simulation(charts, settings, ids, in_sample=in_sample)

    @classmethod
    def new_in_sample(cls, strategy, charts, settings, ids, trade_log=None) -> "Algorithm":
        return cls(strategy, charts, settings, ids, trade_log=trade_log, in_sample=True)

    @classmethod
    def new_out_of_sample(cls, strategy, charts, settings, ids, trade_log=None) -> "Algorithm":
        return cls(strategy, charts, settings, ids, trade_log=trade_log, in_sample=False)

    @property
    def mode(self) -> str:
        return "in-sample" if self.in_sample else "out-of-sample"

    def execute_on(
        self,
        ticks: Sequence[Tick],
        variables: "RangeBoundVariables | Mapping[str, Any]",
    ) -> Optional[float]:
        """Run the pass; returns the pip expectancy, or None on a drawdown breach."""
        if not ticks:
            raise StreamError(f"No ticks supplied for {self.mode} simulation")

        sim = self.simulation
        parameters = variables.as_dict() if hasattr(variables, "as_dict") else dict(variables)

        self.strategy.setup(parameters)
        sim.activate_charts()

        exceeded_drawdown_limit = False
        tick_count = 0
        last_tick = ticks[0]
        try:
            for tick in ticks:
                tick_count += 1
                last_tick = tick

                sim.record_tick_onto_trades(tick)
                sim.update_charts(tick)
                sim.migrate_closed_trades()

                sim.update_drawdown()
                if sim.has_exceeded_max_drawdown():
                    exceeded_drawdown_limit = True
                    break

                if sim.can_trade():
                    decision = self.strategy.on_tick(sim.view(tick), tick)
                    self._apply(decision, tick)

            sim.close_all_open_trades(last_tick)
        finally:
            self.strategy.teardown()

        if self.trade_log is not None:
            self.trade_log.log_trades(sim)
            self.trade_log.log_ticks(sim)

        if exceeded_drawdown_limit:
            logger.info(
                "Simulation {} ({}) exceeded max drawdown {:.2f}% after {} ticks, aborting",
                sim.id,
                self.mode,
                sim.highest_drawdown,
                tick_count,
            )
            return None

        score = sim.pip_expectancy()
        logger.info(
            "Final score: {:.1f} - Profit: {:.1f} - Total trades: {}/{} ({})",
            score,
            sim.profit(),
            sim.closed_long_trade_count(),
            sim.closed_short_trade_count(),
            self.mode,
        )
        logger.info("Ticks processed: {} - Max DD: {:.2f}%", tick_count, sim.highest_drawdown)
        return score

    def _apply(self, decision: Decision, tick: Tick) -> None:
        if decision == Decision.OPEN_LONG:
            self.simulation.open_long_trade(tick)
        elif decision == Decision.OPEN_SHORT:
            self.simulation.open_short_trade(tick)
        elif decision == Decision.CLOSE_ALL:
            self.simulation.close_all_open_trades(tick)
