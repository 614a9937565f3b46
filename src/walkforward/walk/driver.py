"""Walk-forward orchestration.

Each step optimizes the strategy on an in-sample window, replays that window
onto the charts, then executes the optimized parameters once on the following
out-of-sample window. The next step starts one out-of-sample length later,
built from a pristine chart copy that trading never touched.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional

from loguru import logger

from walkforward.config.models import WalkForwardConfig
from walkforward.config.parsers import parse_charts, parse_variables
from walkforward.errors import StreamError
from walkforward.market.chart import clone_charts
from walkforward.market.source import TickSource
from walkforward.market.time import to_iso
from walkforward.monitoring.audit import AuditLog
from walkforward.monitoring.trade_log import TradeLog
from walkforward.optimizer.optimizer import Optimizer
from walkforward.runtime.ids import IdAllocator
from walkforward.simulator.algorithm import Algorithm
from walkforward.simulator.models import SimulationSettings
from walkforward.strategy.base import TradingStrategy
from walkforward.walk.windows import (
    Window,
    advance_charts,
    advance_to_sunday,
    collect_window,
    fill_charts,
    replay_charts,
)

FAILED_OPTIMIZATION = "optimization"
FAILED_EXECUTION = "execution"


@dataclass(frozen=True)
class StepResult:
    step: int
    in_sample_start: datetime
    in_sample_end: datetime
    in_sample_ticks: int
    out_of_sample_start: datetime
    out_of_sample_end: datetime
    out_of_sample_ticks: int
    parameters: dict[str, Any]
    in_sample_score: float
    score: float


@dataclass
class WalkForwardResult:
    steps: list[StepResult] = field(default_factory=list)
    failure: Optional[str] = None
    failed_step: Optional[int] = None
    chart_ticks_processed: list[int] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.failure is None

    @property
    def scores(self) -> list[float]:
        return [step.score for step in self.steps]


class WalkForwardDriver:
    def __init__(
        self,
        config: WalkForwardConfig,
        source: TickSource,
        strategy_factory: Callable[[], TradingStrategy],
        settings: Optional[SimulationSettings] = None,
        trade_log: Optional[TradeLog] = None,
        audit_log: Optional[AuditLog] = None,
        ids: Optional[IdAllocator] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self.source = source
        self.strategy_factory = strategy_factory
        self.settings = settings or config.simulation_settings()
        self.trade_log = trade_log
        self.audit_log = audit_log
        self.ids = ids or IdAllocator()
        self.rng = rng or random.Random(config.seed)
        self.variables = parse_variables(config.variables)
        self.in_sample_days = config.in_sample_days
        self.out_of_sample_days = config.out_of_sample_days

    def _audit(self, event: str, step: Optional[int] = None, **fields: Any) -> None:
        if self.audit_log is None:
            return
        self.audit_log.record(event, step=step, **fields)

    def run(self) -> WalkForwardResult:
        result = WalkForwardResult()
        logger.info("Simulating a maximum of {} steps", self.config.steps)
        self._audit(
            "run_started",
            steps=self.config.steps,
            iterations=self.config.iterations,
            in_sample_days=self.in_sample_days,
            out_of_sample_days=self.out_of_sample_days,
        )

        logger.info("==================== FILLING CHARTS ====================")
        charts = parse_charts(self.config.charts)
        cursor = fill_charts(self.source, charts)

        logger.info("==================== ADVANCING TO NEXT SUNDAY ====================")
        cursor, sunday = advance_to_sunday(self.source, charts, cursor)
        logger.info("Advanced to {}", to_iso(sunday.time))

        pristine = clone_charts(charts)
        in_sample_start = cursor

        for step in range(1, self.config.steps + 1):
            if step > 1:
                logger.info("==================== WALKING FORWARD TO NEXT IN SAMPLE ====================")
                in_sample_start = advance_charts(self.source, in_sample_start, self.out_of_sample_days, pristine)
                charts = clone_charts(pristine)

            logger.info("==================== GENERATING IN SAMPLE #{} ====================", step)
            in_sample = collect_window(self.source, in_sample_start, self.in_sample_days)
            self._require_ticks(in_sample, "in-sample", step)
            self._log_window("IN SAMPLE", step, in_sample)

            logger.info("==================== OPTIMIZING ====================")
            optimizer = Optimizer(
                self.settings,
                self.strategy_factory,
                self.variables,
                self.config.iterations,
                self.ids,
                trade_log=self.trade_log,
                rng=self.rng,
            )
            optimized = optimizer.variables_for(charts, in_sample.ticks)
            if optimized is None:
                self._fail(result, FAILED_OPTIMIZATION, step)
                break
            self._audit(
                "optimized",
                step,
                score=optimized.score,
                successful_trials=optimized.successful_trials,
                attempted_trials=optimized.attempted_trials,
                parameters=optimized.variables.as_dict(),
            )

            logger.info("==================== APPLYING IN SAMPLE TO CHARTS ====================")
            replay_charts(self.source, in_sample.start, in_sample.end, charts)

            logger.info("==================== GENERATING OUT OF SAMPLE #{} ====================", step)
            out_of_sample = collect_window(self.source, in_sample.end, self.out_of_sample_days)
            self._require_ticks(out_of_sample, "out-of-sample", step)
            self._log_window("OUT OF SAMPLE", step, out_of_sample)

            logger.info("==================== EXECUTING ====================")
            algorithm = Algorithm.new_out_of_sample(
                self.strategy_factory(),
                clone_charts(charts),
                self.settings,
                self.ids,
                trade_log=self.trade_log,
            )
            score = algorithm.execute_on(out_of_sample.ticks, optimized.variables)
            if score is None:
                self._fail(result, FAILED_EXECUTION, step)
                break

            step_result = StepResult(
                step=step,
                in_sample_start=in_sample.first.time,
                in_sample_end=in_sample.last.time,
                in_sample_ticks=len(in_sample.ticks),
                out_of_sample_start=out_of_sample.first.time,
                out_of_sample_end=out_of_sample.last.time,
                out_of_sample_ticks=len(out_of_sample.ticks),
                parameters=optimized.variables.as_dict(),
                in_sample_score=optimized.score,
                score=score,
            )
            result.steps.append(step_result)
            self._audit("executed", step, score=score, parameters=step_result.parameters)

        result.chart_ticks_processed = [chart.ticks_processed for chart in pristine]
        for chart in pristine:
            logger.info("Chart {} processed {} ticks", chart.name, chart.ticks_processed)

        if result.succeeded:
            logger.info("SCORES:")
            for step_result in result.steps:
                logger.info("{}: {}", step_result.step, step_result.score)
        self._audit("run_finished", result.failed_step, scores=result.scores, failure=result.failure)
        return result

    def _fail(self, result: WalkForwardResult, reason: str, step: int) -> None:
        result.failure = reason
        result.failed_step = step
        if reason == FAILED_OPTIMIZATION:
            logger.warning("Algorithm failed on in sample optimization (step {})", step)
        else:
            logger.warning("Algorithm failed on out of sample execution (step {})", step)
        self._audit("run_failed", step, reason=reason)

    def _require_ticks(self, window: Window, label: str, step: int) -> None:
        if not window.ticks:
            raise StreamError(f"No ticks available for the {label} window of step {step}")

    def _log_window(self, label: str, step: int, window: Window) -> None:
        logger.info(
            "{}: {} - {} ({} ticks)",
            label,
            to_iso(window.first.time),
            to_iso(window.last.time),
            len(window.ticks),
        )
        self._audit(
            "window",
            step,
            label=label.lower(),
            start=to_iso(window.first.time),
            end=to_iso(window.last.time),
            ticks=len(window.ticks),
        )
