"""Sequential ids for simulations and trades."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class IdAllocator:
    """Hands out simulation and trade ids for one walk-forward run."""

    next_simulation: int = 1
    next_trade: int = 1

    def simulation_id(self) -> int:
        value = self.next_simulation
        self.next_simulation += 1
        return value

    def trade_id(self) -> int:
        value = self.next_trade
        self.next_trade += 1
        return value
