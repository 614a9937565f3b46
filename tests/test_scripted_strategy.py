from datetime import datetime

import pytest

from walkforward.errors import ConfigError
from walkforward.market import Tick
from walkforward.strategy import Decision, MarketView, ScriptStrategy


def _view(has_open_trades=False, indicators=None):
    tick = Tick(datetime(2014, 1, 6, 9, 0), 1.3000, 1.3002)
    return MarketView(
        tick=tick,
        has_open_trades=has_open_trades,
        open_trades=int(has_open_trades),
        closed_trades=0,
        balance=10000.0,
        equity=10000.0,
        indicators=indicators or {},
    )


def _write_script(tmp_path, body):
    path = tmp_path / "strategy.py"
    path.write_text(body, encoding="utf-8")
    return path


SCRIPT = """
calls = []
threshold = None


def setup(parameters):
    calls.append(("setup", parameters["threshold"], threshold))


def on_tick(view, tick):
    if view.has_open_trades:
        return "close"
    if view.indicators.get("candlestick_M1_sma_3", 0.0) > threshold:
        return "long"
    return None


def teardown():
    calls.append(("teardown",))
"""


def test_script_receives_parameters_as_globals(tmp_path):
    strategy = ScriptStrategy(_write_script(tmp_path, SCRIPT))
    strategy.setup({"threshold": 1.25})

    module = strategy._module
    assert module.threshold == 1.25
    assert module.calls == [("setup", 1.25, 1.25)]

    assert strategy.on_tick(_view(indicators={"candlestick_M1_sma_3": 1.3}), None) == Decision.OPEN_LONG
    assert strategy.on_tick(_view(indicators={"candlestick_M1_sma_3": 1.2}), None) == Decision.NOOP
    assert strategy.on_tick(_view(has_open_trades=True), None) == Decision.CLOSE_ALL

    strategy.teardown()
    assert module.calls[-1] == ("teardown",)


def test_script_state_is_fresh_on_every_setup(tmp_path):
    strategy = ScriptStrategy(_write_script(tmp_path, SCRIPT))
    strategy.setup({"threshold": 1.0})
    first = strategy._module
    strategy.teardown()

    strategy.setup({"threshold": 2.0})

    assert strategy._module is not first
    assert strategy._module.calls == [("setup", 2.0, 2.0)]


def test_script_without_on_tick_is_rejected(tmp_path):
    strategy = ScriptStrategy(_write_script(tmp_path, "def setup(parameters):\n    pass\n"))
    with pytest.raises(ConfigError):
        strategy.setup({})


def test_missing_script_is_rejected(tmp_path):
    with pytest.raises(ConfigError):
        ScriptStrategy(tmp_path / "missing.py")


def test_unknown_decision_is_rejected(tmp_path):
    strategy = ScriptStrategy(_write_script(tmp_path, "def on_tick(view, tick):\n    return 'hedge'\n"))
    strategy.setup({})
    with pytest.raises(ValueError):
        strategy.on_tick(_view(), None)


def test_decision_coerce():
    assert Decision.coerce(None) == Decision.NOOP
    assert Decision.coerce("OPEN_SHORT") == Decision.OPEN_SHORT
    assert Decision.coerce(" Long ") == Decision.OPEN_LONG
    assert Decision.coerce(Decision.CLOSE_ALL) == Decision.CLOSE_ALL
