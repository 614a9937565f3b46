"""Trade bookkeeping and single-pass simulation."""

from walkforward.simulator.algorithm import Algorithm
from walkforward.simulator.models import (
    DEFAULT_DEPOSIT,
    DEFAULT_DRAWDOWN_LIMIT,
    SimulationSettings,
    TradeDirection,
    pip_profit,
)
from walkforward.simulator.simulation import Simulation
from walkforward.simulator.trade import Trade

__all__ = [
    "Algorithm",
    "DEFAULT_DEPOSIT",
    "DEFAULT_DRAWDOWN_LIMIT",
    "Simulation",
    "SimulationSettings",
    "Trade",
    "TradeDirection",
    "pip_profit",
]
