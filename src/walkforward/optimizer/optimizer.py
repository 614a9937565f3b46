"""Randomized parameter search over an in-sample window."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from loguru import logger

from walkforward.market.chart import Chart, clone_charts
from walkforward.market.models import Tick
from walkforward.monitoring.trade_log import TradeLog
from walkforward.optimizer.variables import RangeBoundVariables
from walkforward.runtime.ids import IdAllocator
from walkforward.simulator.algorithm import Algorithm
from walkforward.simulator.models import SimulationSettings
from walkforward.strategy.base import TradingStrategy

INITIAL_BEST_SCORE = -999999.0
# TODO: replace with a configurable, probably positive, cutoff once scoring is calibrated
MIN_VIABLE_SCORE = -999.99


@dataclass(frozen=True)
class OptimizationResult:
    variables: RangeBoundVariables
    score: float
    successful_trials: int
    attempted_trials: int


class Optimizer:
    def __init__(
        self,
        settings: SimulationSettings,
        strategy_factory: Callable[[], TradingStrategy],
        variables: RangeBoundVariables,
        iterations: int,
        ids: IdAllocator,
        trade_log: Optional[TradeLog] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings
        self.strategy_factory = strategy_factory
        self.variables = variables
        self.iterations = iterations
        self.ids = ids
        self.trade_log = trade_log
        self.rng = rng or random.Random()

    def variables_for(self, charts: list[Chart], ticks: Sequence[Tick]) -> Optional[OptimizationResult]:
        best_variables: Optional[RangeBoundVariables] = None
        best_score = INITIAL_BEST_SCORE
        successful = 0

        for trial in range(1, self.iterations + 1):
            logger.info("-------------------- TEST {} --------------------", trial)
            candidate = self.variables.copy()
            candidate.randomize(random.Random(self.rng.getrandbits(64)))

            score = self._run_trial(clone_charts(charts), ticks, candidate)
            if score is None:
                continue

            if score > best_score:
                best_score = score
                best_variables = candidate
            successful += 1

        if successful == 0 or best_variables is None or best_score < MIN_VIABLE_SCORE:
            logger.warning(
                "Optimization failed: {} of {} trials succeeded, best score {}",
                successful,
                self.iterations,
                best_score,
            )
            return None

        logger.info("Best score: {} ({} of {} trials succeeded)", best_score, successful, self.iterations)
        return OptimizationResult(
            variables=best_variables,
            score=best_score,
            successful_trials=successful,
            attempted_trials=self.iterations,
        )

    def _run_trial(
        self,
        charts: list[Chart],
        ticks: Sequence[Tick],
        variables: RangeBoundVariables,
    ) -> Optional[float]:
        algorithm = Algorithm.new_in_sample(
            self.strategy_factory(),
            charts,
            self.settings,
            self.ids,
            trade_log=self.trade_log,
        )
        return algorithm.execute_on(ticks, variables)
