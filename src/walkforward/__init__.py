"""Walk-forward backtesting of tick-driven trading strategies."""

__version__ = "0.1.0"
