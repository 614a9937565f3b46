from datetime import date, datetime, timedelta

import pytest

yaml = pytest.importorskip("yaml")

from walkforward.cli import main

STRATEGY = """
entered = False


def setup(parameters):
    global entered
    entered = False


def on_tick(view, tick):
    global entered
    if entered or view.indicators.get("candlestick_M15_sma_2") is None:
        return None
    entered = True
    return "long"
"""


def _write_ticks(path):
    lines = []
    day = date(2014, 1, 5)
    index = 0
    while day <= date(2014, 1, 31):
        if day.weekday() != 5:
            moment = datetime(day.year, day.month, day.day)
            for _ in range(96):
                bid = 1.36000 + index * 0.00001
                lines.append(f"{moment:%m/%d/%Y %H:%M:%S},{bid:.5f},{bid + 0.0002:.5f}")
                moment += timedelta(minutes=15)
                index += 1
        day += timedelta(days=1)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _write_config(tmp_path, **overrides):
    _write_ticks(tmp_path / "ticks.csv")
    (tmp_path / "strategy.py").write_text(STRATEGY, encoding="utf-8")
    data = {
        "csv_path": "ticks.csv",
        "strategy_path": "strategy.py",
        "charts": "candlestick,M15,4|sma,2",
        "variables": "threshold,float,0.0,1.0",
        "in_sample": "1 week",
        "out_of_sample": "1 week",
        "iterations": 3,
        "steps": 2,
        "seed": 5,
        "output_dir": "out",
        "audit_log_path": "out/audit.log",
        "post_run_command": "echo done",
    }
    data.update(overrides)
    path = tmp_path / "walkforward.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_cli_runs_walk_forward(tmp_path, capsys):
    config_path = _write_config(tmp_path)

    assert main([str(config_path)]) == 0

    printed = capsys.readouterr().out.splitlines()
    assert printed[0].startswith("1: ")
    assert printed[1].startswith("2: ")
    assert printed[-1] == "done"
    assert (tmp_path / "out" / "trades.csv").exists()
    assert (tmp_path / "out" / "ticks.csv").exists()
    assert (tmp_path / "out" / "audit.log").exists()
    assert "config_loaded" in (tmp_path / "out" / "audit.log").read_text(encoding="utf-8")


def test_cli_invalid_config_exits_with_error(tmp_path):
    config_path = _write_config(tmp_path, steps=0)
    assert main([str(config_path)]) == 1


def test_cli_missing_tick_data_exits_with_error(tmp_path):
    config_path = _write_config(tmp_path, steps=5)
    assert main([str(config_path)]) == 1
