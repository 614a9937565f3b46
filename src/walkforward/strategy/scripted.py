"""Strategy adapter for plain Python strategy scripts.

A script is loaded fresh on every ``setup``. Every optimized parameter is set
as a module global before the script's own ``setup(parameters)`` (optional)
runs. The script must define ``on_tick(view, tick)`` returning a ``Decision``,
one of its names (``"long"``, ``"short"``, ``"close"``, ``"noop"``) or ``None``.
An optional ``teardown()`` is called at the end of each pass.
"""

from __future__ import annotations

import importlib.util
import itertools
from pathlib import Path
from types import ModuleType
from typing import Any, Mapping, Optional

from loguru import logger

from walkforward.errors import ConfigError
from walkforward.market.models import Tick
from walkforward.strategy.base import Decision, MarketView, TradingStrategy

_LOAD_COUNTER = itertools.count(1)


class ScriptStrategy(TradingStrategy):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        if not self.path.exists():
            raise ConfigError(f"Strategy script not found: {self.path}")
        self.strategy_id = self.path.stem
        self._module: Optional[ModuleType] = None

    def setup(self, parameters: Mapping[str, Any]) -> None:
        module = self._load()
        for name, value in parameters.items():
            setattr(module, name, value)
        hook = getattr(module, "setup", None)
        if callable(hook):
            hook(dict(parameters))
        if not callable(getattr(module, "on_tick", None)):
            raise ConfigError(f"Strategy script {self.path} does not define on_tick(view, tick)")
        self._module = module
        logger.debug("Registered variables for {}: {}", self.strategy_id, dict(parameters))

    def on_tick(self, view: MarketView, tick: Tick) -> Decision:
        if self._module is None:
            raise RuntimeError("setup() must be called before on_tick()")
        return Decision.coerce(self._module.on_tick(view, tick))

    def teardown(self) -> None:
        if self._module is None:
            return
        hook = getattr(self._module, "teardown", None)
        if callable(hook):
            hook()
        self._module = None

    def _load(self) -> ModuleType:
        name = f"walkforward_strategy_{self.path.stem}_{next(_LOAD_COUNTER)}"
        spec = importlib.util.spec_from_file_location(name, self.path)
        if spec is None or spec.loader is None:
            raise ConfigError(f"Cannot load strategy script: {self.path}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module
