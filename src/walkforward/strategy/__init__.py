"""Strategy interfaces and adapters."""

from walkforward.strategy.base import Decision, MarketView, TradingStrategy
from walkforward.strategy.scripted import ScriptStrategy

__all__ = [
    "Decision",
    "MarketView",
    "ScriptStrategy",
    "TradingStrategy",
]
