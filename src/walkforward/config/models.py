"""Configuration models for walk-forward runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from walkforward.config.parsers import config_time_to_days
from walkforward.simulator.models import DEFAULT_DEPOSIT, DEFAULT_DRAWDOWN_LIMIT, SimulationSettings


@dataclass(frozen=True)
class WalkForwardConfig:
    csv_path: str
    strategy_path: str
    charts: str
    variables: str
    in_sample: str
    out_of_sample: str
    iterations: int
    steps: int
    post_run_command: Optional[str] = None
    deposit: float = DEFAULT_DEPOSIT
    drawdown_limit: float = DEFAULT_DRAWDOWN_LIMIT
    jpy_quote: Optional[bool] = None
    seed: Optional[int] = None
    output_dir: str = "output"
    audit_log_path: str = "output/audit.log"
    log_level: str = "INFO"

    @property
    def in_sample_days(self) -> int:
        return config_time_to_days(self.in_sample)

    @property
    def out_of_sample_days(self) -> int:
        return config_time_to_days(self.out_of_sample)

    def simulation_settings(self, jpy_quote: Optional[bool] = None) -> SimulationSettings:
        if jpy_quote is None:
            jpy_quote = bool(self.jpy_quote)
        return SimulationSettings(
            deposit=self.deposit,
            drawdown_limit=self.drawdown_limit,
            jpy_quote=jpy_quote,
        )
