"""Restartable tick sources.

A source yields ticks in file order together with cursors so a reader can be
reopened at any previously observed position.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Sequence

from walkforward.errors import ConfigError, StreamError
from walkforward.market.models import Tick


@dataclass(frozen=True)
class TickRecord:
    tick: Tick
    position: int
    next_position: int


class TickSource(ABC):
    @abstractmethod
    def read_from(self, position: int = 0) -> Iterator[TickRecord]:
        raise NotImplementedError


class CsvTickSource(TickSource):
    """Reads ``MM/DD/YYYY HH:MM:SS,bid,ask`` lines; cursors are byte offsets."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        if not self.path.exists():
            raise ConfigError(f"Tick file not found: {self.path}")

    def read_from(self, position: int = 0) -> Iterator[TickRecord]:
        with self.path.open("rb") as handle:
            handle.seek(position)
            offset = position
            for raw in handle:
                next_offset = offset + len(raw)
                if raw.strip():
                    try:
                        tick = Tick.parse_line(raw.decode("utf-8"))
                    except (UnicodeDecodeError, ValueError) as exc:
                        raise StreamError(f"Malformed tick at byte {offset} of {self.path}: {raw!r}") from exc
                    yield TickRecord(tick, offset, next_offset)
                offset = next_offset

    def is_jpy_quoted(self) -> bool:
        """Three decimal places on the first ask mean a JPY quote, five mean not."""
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                first = handle.readline().strip()
        except UnicodeDecodeError as exc:
            raise ConfigError(f"Tick file is not valid UTF-8: {self.path}") from exc
        if not first:
            raise ConfigError(f"Tick file is empty: {self.path}")
        last_field = first.split(",")[-1]
        places = len(last_field.split(".")[-1]) if "." in last_field else 0
        if places == 3:
            return True
        if places == 5:
            return False
        raise ConfigError(f"Expected 3 or 5 decimal places, got {places} ({last_field!r})")


class MemoryTickSource(TickSource):
    """In-memory ticks; cursors are record indexes."""

    def __init__(self, ticks: Sequence[Tick]) -> None:
        self.ticks = list(ticks)

    def read_from(self, position: int = 0) -> Iterator[TickRecord]:
        for index in range(position, len(self.ticks)):
            yield TickRecord(self.ticks[index], index, index + 1)
