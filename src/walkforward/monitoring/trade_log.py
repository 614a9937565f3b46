"""CSV audit logs for closed trades and the ticks they observed."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:  # pragma: no cover
    from walkforward.simulator.simulation import Simulation

TRADE_HEADER = [
    "simulation_id",
    "trade_id",
    "in_sample",
    "long",
    "opened_at",
    "closed_at",
    "open_price",
    "close_price",
    "open_spread",
    "close_spread",
    "profit",
]
TICK_HEADER = ["simulation_id", "trade_id", "bid", "ask", "time"]


class TradeLog:
    def __init__(self, trades_path: str | Path, ticks_path: str | Path) -> None:
        self.trades_path = Path(trades_path)
        self.ticks_path = Path(ticks_path)
        self.trades_path.parent.mkdir(parents=True, exist_ok=True)
        self.ticks_path.parent.mkdir(parents=True, exist_ok=True)
        self._trades_handle: TextIO = self.trades_path.open("w", encoding="utf-8", newline="")
        self._ticks_handle: TextIO = self.ticks_path.open("w", encoding="utf-8", newline="")
        self._trades = csv.writer(self._trades_handle)
        self._ticks = csv.writer(self._ticks_handle)
        self._trades.writerow(TRADE_HEADER)
        self._ticks.writerow(TICK_HEADER)

    @classmethod
    def in_directory(cls, output_dir: str | Path) -> "TradeLog":
        output_dir = Path(output_dir)
        return cls(output_dir / "trades.csv", output_dir / "ticks.csv")

    def log_trades(self, simulation: "Simulation") -> int:
        count = 0
        for trade in simulation.closed_trades:
            self._trades.writerow([simulation.id, trade.id, _flag(simulation.in_sample), *trade.csv_fields()])
            count += 1
        self._trades_handle.flush()
        return count

    def log_ticks(self, simulation: "Simulation") -> int:
        count = 0
        for trade in simulation.closed_trades:
            for tick in trade.ticks:
                self._ticks.writerow([simulation.id, trade.id, *tick.csv_fields()])
                count += 1
        self._ticks_handle.flush()
        return count

    def close(self) -> None:
        self._trades_handle.close()
        self._ticks_handle.close()

    def __enter__(self) -> "TradeLog":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _flag(value: bool) -> str:
    return "true" if value else "false"
