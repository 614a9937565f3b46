"""Walk-forward driver and calendar windows."""

from walkforward.walk.driver import StepResult, WalkForwardDriver, WalkForwardResult
from walkforward.walk.windows import (
    DayCounter,
    Window,
    advance_charts,
    advance_to_sunday,
    collect_window,
    fill_charts,
    replay_charts,
    walk_days,
)

__all__ = [
    "DayCounter",
    "StepResult",
    "WalkForwardDriver",
    "WalkForwardResult",
    "Window",
    "advance_charts",
    "advance_to_sunday",
    "collect_window",
    "fill_charts",
    "replay_charts",
    "walk_days",
]
