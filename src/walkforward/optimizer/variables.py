"""Bounded, randomizable strategy parameters."""

from __future__ import annotations

import copy
import random
from dataclasses import dataclass
from typing import Any, Optional

from walkforward.errors import ConfigError


@dataclass
class RangeBoundBool:
    value: bool = False

    def randomize(self, rng: random.Random) -> None:
        self.value = rng.random() < 0.5


@dataclass
class RangeBoundFloat:
    lower: float
    upper: float
    value: float = 0.0

    def __post_init__(self) -> None:
        if self.lower >= self.upper:
            raise ConfigError(f"lower ({self.lower}) must be < upper ({self.upper})")

    def randomize(self, rng: random.Random) -> None:
        # uniform in [lower, upper)
        value = self.lower + (self.upper - self.lower) * rng.random()
        self.value = value if value < self.upper else self.lower


@dataclass
class RangeBoundInteger:
    lower: int
    upper: int
    value: int = 0

    def __post_init__(self) -> None:
        if self.lower >= self.upper:
            raise ConfigError(f"lower ({self.lower}) must be < upper ({self.upper})")

    def randomize(self, rng: random.Random) -> None:
        self.value = rng.randint(self.lower, self.upper)


class RangeBoundVariables:
    def __init__(self) -> None:
        self.bools: dict[str, RangeBoundBool] = {}
        self.floats: dict[str, RangeBoundFloat] = {}
        self.ints: dict[str, RangeBoundInteger] = {}

    def create_bool(self, name: str) -> None:
        if name in self.bools:
            raise ConfigError(f'A bool already exists with the name "{name}"')
        self.bools[name] = RangeBoundBool()

    def create_float(self, name: str, lower: float, upper: float) -> None:
        if name in self.floats:
            raise ConfigError(f'A float already exists with the name "{name}"')
        self.floats[name] = RangeBoundFloat(lower, upper)

    def create_int(self, name: str, lower: int, upper: int) -> None:
        if name in self.ints:
            raise ConfigError(f'An integer already exists with the name "{name}"')
        self.ints[name] = RangeBoundInteger(lower, upper)

    def get_bool(self, name: str) -> bool:
        if name not in self.bools:
            raise KeyError(f'Could not find a bool with the name "{name}"')
        return self.bools[name].value

    def get_float(self, name: str) -> float:
        if name not in self.floats:
            raise KeyError(f'Could not find a float with the name "{name}"')
        return self.floats[name].value

    def get_int(self, name: str) -> int:
        if name not in self.ints:
            raise KeyError(f'Could not find an integer with the name "{name}"')
        return self.ints[name].value

    def randomize(self, rng: Optional[random.Random] = None) -> None:
        rng = rng or random.Random()
        for variable in self.bools.values():
            variable.randomize(rng)
        for variable in self.floats.values():
            variable.randomize(rng)
        for variable in self.ints.values():
            variable.randomize(rng)

    def as_dict(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        values.update({name: var.value for name, var in self.bools.items()})
        values.update({name: var.value for name, var in self.floats.items()})
        values.update({name: var.value for name, var in self.ints.items()})
        return values

    def copy(self) -> "RangeBoundVariables":
        return copy.deepcopy(self)

    def __len__(self) -> int:
        return len(self.bools) + len(self.floats) + len(self.ints)

    def __repr__(self) -> str:
        return f"RangeBoundVariables({self.as_dict()!r})"
