from pathlib import Path

import pytest

yaml = pytest.importorskip("yaml")

from walkforward.config import (
    compute_config_hash,
    config_time_to_days,
    load_config,
    parse_charts,
    parse_variables,
)
from walkforward.errors import ConfigError


def _write_config(tmp_path, **overrides):
    data = {
        "csv_path": "data/ticks.csv",
        "strategy_path": "strategy.py",
        "charts": "candlestick,M5,20|sma,5:sma,10\ncandlestick,H1,10",
        "variables": "// entry filter\nthreshold,float,0.0,1.0\nlookback,int,2,8\nshorts,bool",
        "in_sample": "4 weeks",
        "out_of_sample": "1 week",
        "iterations": 25,
        "steps": 3,
    }
    data.update(overrides)
    path = tmp_path / "walkforward.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_load_config_sample():
    config = load_config(Path("configs") / "eurusd_walkforward.yaml")
    assert config.in_sample_days == 28
    assert config.out_of_sample_days == 7
    assert config.csv_path.endswith("EURUSD_ticks.csv")
    assert [chart.name for chart in parse_charts(config.charts)] == ["candlestick_M5", "candlestick_H1"]


def test_load_config_defaults_and_relative_paths(tmp_path):
    config = load_config(_write_config(tmp_path))

    assert Path(config.csv_path) == tmp_path / "data" / "ticks.csv"
    assert Path(config.strategy_path) == tmp_path / "strategy.py"
    assert config.deposit == 10000.0
    assert config.drawdown_limit == -10.0
    assert config.jpy_quote is None
    assert config.post_run_command is None
    assert config.simulation_settings(jpy_quote=True).jpy_quote is True


def test_missing_required_key(tmp_path):
    path = _write_config(tmp_path)
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    del data["steps"]
    path.write_text(yaml.safe_dump(data), encoding="utf-8")

    with pytest.raises(ConfigError, match="steps"):
        load_config(path)


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "overrides",
    [
        {"steps": 0},
        {"iterations": 0},
        {"in_sample": "4 months"},
        {"out_of_sample": "0 weeks"},
        {"drawdown_limit": 5.0},
        {"charts": "// nothing here"},
        {"variables": "threshold,float,1.0,0.5"},
    ],
)
def test_invalid_values_are_rejected(tmp_path, overrides):
    with pytest.raises(ConfigError):
        load_config(_write_config(tmp_path, **overrides))


def test_config_hash_changes_with_content(tmp_path):
    path = _write_config(tmp_path)
    first = compute_config_hash(path)
    _write_config(tmp_path, steps=4)
    assert compute_config_hash(path) != first


def test_config_time_to_days():
    assert config_time_to_days("1 week") == 7
    assert config_time_to_days("3 weeks") == 21
    with pytest.raises(ConfigError):
        config_time_to_days("weeks")


def test_parse_charts_names_and_indicators():
    charts = parse_charts("candlestick,M1,20|sma,5:sma,20;\n// comment\n\ncandlestick,H4,3")

    assert [chart.name for chart in charts] == ["candlestick_M1", "candlestick_H4"]
    assert [indicator.name for indicator in charts[0].indicators] == [
        "candlestick_M1_sma_5",
        "candlestick_M1_sma_20",
    ]
    assert charts[0].capacity == 21
    assert charts[1].indicators == []


@pytest.mark.parametrize(
    "text",
    [
        "candlestick,M1",
        "renko,M1,20",
        "candlestick,M2,20",
        "candlestick,M1,0",
        "candlestick,M1,5|sma,6",
        "candlestick,M1,5|sma,0",
        "candlestick,M1,5|ema,3",
        "candlestick,M1,5|sma",
    ],
)
def test_parse_charts_rejects_bad_definitions(text):
    with pytest.raises(ConfigError):
        parse_charts(text)


def test_parse_variables():
    variables = parse_variables("threshold,float,0.5,1.5;lookback,int,2,8\nshorts,bool")
    assert set(variables.as_dict()) == {"threshold", "lookback", "shorts"}
    assert variables.floats["threshold"].lower == 0.5
    assert variables.ints["lookback"].upper == 8


@pytest.mark.parametrize(
    "text",
    [
        "threshold,decimal,0,1",
        "threshold,float,0",
        "bad name,int,0,1",
        "lookback,int,1,1",
        "lookback,int,a,5",
        "lookback,int,1,5\nlookback,int,2,6",
    ],
)
def test_parse_variables_rejects_bad_definitions(text):
    with pytest.raises(ConfigError):
        parse_variables(text)


def test_jpy_quote_accepts_booleans_only(tmp_path):
    assert load_config(_write_config(tmp_path, jpy_quote=False)).jpy_quote is False
    assert load_config(_write_config(tmp_path, jpy_quote=True)).jpy_quote is True
    with pytest.raises(ConfigError, match="jpy_quote"):
        load_config(_write_config(tmp_path, jpy_quote="false"))
