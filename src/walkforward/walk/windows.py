"""Calendar-aware traversal of a tick source.

Windows are measured in calendar days. A day boundary is any tick whose day of
month differs from the previous tick's. Tick data has no Saturdays, so every
sixth boundary crossed counts one extra day. A window stops right before the
tick that reaches the target; that tick opens the next window.
"""

from __future__ import annotations

from contextlib import closing
from dataclasses import dataclass, field
from typing import Callable, Optional

from walkforward.errors import StreamError
from walkforward.market.chart import Chart, all_full
from walkforward.market.models import Tick
from walkforward.market.source import TickSource


@dataclass(frozen=True)
class Window:
    start: int
    end: int
    ticks: list[Tick] = field(default_factory=list)

    @property
    def first(self) -> Optional[Tick]:
        return self.ticks[0] if self.ticks else None

    @property
    def last(self) -> Optional[Tick]:
        return self.ticks[-1] if self.ticks else None


class DayCounter:
    def __init__(self, target_days: int) -> None:
        self.target_days = target_days
        self.days = 0
        self._current_day: Optional[int] = None

    def reaches_target(self, tick: Tick) -> bool:
        day = tick.time.day
        if self._current_day is None:
            self._current_day = day
            return False
        if day == self._current_day:
            return False

        self._current_day = day
        self.days += 1
        if self.days % 6 == 0:
            self.days += 1  # no tick data on saturdays
        return self.days >= self.target_days


def walk_days(
    source: TickSource,
    start: int,
    target_days: int,
    on_tick: Callable[[Tick], None],
) -> int:
    """Feed ``target_days`` worth of ticks to ``on_tick``; returns the stop cursor."""
    counter = DayCounter(target_days)
    end = start
    with closing(source.read_from(start)) as records:
        for record in records:
            if counter.reaches_target(record.tick):
                return record.position
            on_tick(record.tick)
            end = record.next_position
    return end


def collect_window(source: TickSource, start: int, target_days: int) -> Window:
    ticks: list[Tick] = []
    end = walk_days(source, start, target_days, ticks.append)
    return Window(start=start, end=end, ticks=ticks)


def advance_charts(source: TickSource, start: int, target_days: int, charts: list[Chart]) -> int:
    def apply(tick: Tick) -> None:
        for chart in charts:
            chart.process_tick(tick)

    return walk_days(source, start, target_days, apply)


def replay_charts(source: TickSource, start: int, end: int, charts: list[Chart]) -> int:
    """Apply every tick in ``[start, end)`` to the charts; returns the tick count."""
    count = 0
    with closing(source.read_from(start)) as records:
        for record in records:
            if record.position >= end:
                break
            for chart in charts:
                chart.process_tick(record.tick)
            count += 1
    return count


def fill_charts(source: TickSource, charts: list[Chart], start: int = 0) -> int:
    """Feed ticks until every chart holds a full window; returns the next cursor."""
    with closing(source.read_from(start)) as records:
        for record in records:
            for chart in charts:
                chart.process_tick(record.tick)
            if all_full(charts):
                return record.next_position
    raise StreamError("Reached end of tick data before all charts were filled")


def advance_to_sunday(source: TickSource, charts: list[Chart], start: int) -> tuple[int, Tick]:
    """Consume ticks up to the first Sunday after a change of day."""
    start_day: Optional[int] = None
    day_changed = False
    with closing(source.read_from(start)) as records:
        for record in records:
            tick = record.tick
            for chart in charts:
                chart.process_tick(tick)

            if start_day is None:
                start_day = tick.time.day
                continue
            if not day_changed and tick.time.day != start_day:
                day_changed = True
            if day_changed and tick.is_sunday():
                return record.next_position, tick
    raise StreamError("Advanced to end of tick data but did not find a Sunday")
