"""Parsers for the chart and variable definition strings.

Chart lines look like ``candlestick,M1,60|sma,12:sma,30``: chart type, period
and candle count, then optional indicators after the pipe. The chart is exposed
to strategies as ``candlestick_M1`` and the indicators as
``candlestick_M1_sma_12``.

Variable lines look like ``name,type[,lower,upper]`` with type one of
``bool``, ``float`` or ``int``.

Definitions are separated by newlines or semicolons. Blank lines and lines
starting with ``//`` are skipped.
"""

from __future__ import annotations

import re

from loguru import logger

from walkforward.errors import ConfigError
from walkforward.market.chart import Chart
from walkforward.market.indicators import Indicator, IndicatorKind
from walkforward.market.models import ChartPeriod, ChartType
from walkforward.optimizer.variables import RangeBoundVariables

_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
_SEPARATORS = re.compile(r"[;\n]")


def definition_lines(text: str) -> list[str]:
    lines = []
    for raw in _SEPARATORS.split(text or ""):
        line = raw.strip()
        if empty_or_comment(line):
            continue
        lines.append(line)
    return lines


def empty_or_comment(line: str) -> bool:
    return not line or line.startswith("//")


def validate_name(name: str) -> str:
    if not name:
        raise ConfigError("Variable name must not be empty")
    if not _NAME_PATTERN.fullmatch(name):
        raise ConfigError(f"Invalid character in name: {name!r}")
    return name


def config_time_to_days(value: str) -> int:
    """Convert durations such as ``"2 weeks"`` into days."""
    parts = str(value).split()
    if len(parts) != 2:
        raise ConfigError('Sample format must be something like "2 weeks"')
    count = _parse_int(parts[0], "number of periods")
    if count < 1:
        raise ConfigError("Number of periods must be > 0")
    unit = parts[1]
    if unit in ("week", "weeks"):
        return count * 7
    raise ConfigError(f'Unknown period specified: "{unit}"')


def parse_charts(text: str) -> list[Chart]:
    charts: list[Chart] = []
    for line in definition_lines(text):
        charts.append(_parse_chart_line(line))
    logger.debug("Loaded {} charts", len(charts))
    return charts


def _parse_chart_line(line: str) -> Chart:
    chart_section, _, indicator_section = line.partition("|")
    chart_parts = [part.strip() for part in chart_section.split(",")]
    if len(chart_parts) != 3:
        raise ConfigError(f"Chart definition must have 3 parts: {line!r}")

    chart_type, period, count_text = chart_parts
    candle_count = _parse_int(count_text, "chart candle count")
    if candle_count < 1:
        raise ConfigError("Number of candles for chart must be > 0")
    if chart_type != ChartType.CANDLESTICK.value:
        raise ConfigError(f"Unknown chart type: {chart_type}")

    name = validate_name(f"{chart_type}_{period}")
    chart = Chart.candlestick(name, ChartPeriod.parse(period), candle_count)
    logger.debug("Loaded chart {}", name)

    for indicator_text in indicator_section.split(":"):
        if not indicator_text.strip():
            continue
        chart.attach_indicator(_parse_indicator(name, indicator_text, candle_count))
    return chart


def _parse_indicator(chart_name: str, text: str, chart_candles: int) -> Indicator:
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2:
        raise ConfigError(f"Indicator definition must have 2 parts: {text!r}")

    indicator_type, lookback_text = parts
    lookback = _parse_int(lookback_text, "indicator lookback")
    if lookback < 1:
        raise ConfigError("Number of candles for indicator must be > 0")
    if lookback > chart_candles:
        raise ConfigError(
            f"Number of indicator candles ({lookback}) can't exceed number of chart candles ({chart_candles})"
        )

    name = validate_name(f"{chart_name}_{indicator_type}_{lookback}")
    try:
        kind = IndicatorKind(indicator_type)
    except ValueError as exc:
        raise ConfigError(f"Unknown indicator type: {indicator_type}") from exc
    logger.debug("Loaded indicator {}", name)
    return Indicator(name, lookback, kind)


def parse_variables(text: str) -> RangeBoundVariables:
    variables = RangeBoundVariables()
    for line in definition_lines(text):
        parts = [part.strip() for part in line.split(",")]
        if len(parts) < 2:
            raise ConfigError(f"Variable definition must have a name and a type: {line!r}")
        name = validate_name(parts[0])
        var_type = parts[1]

        if var_type == "bool":
            variables.create_bool(name)
        elif var_type in ("float", "int"):
            if len(parts) != 4:
                raise ConfigError(f"{var_type} variable {name} needs lower and upper bounds")
            if var_type == "float":
                variables.create_float(name, _parse_float(parts[2], name), _parse_float(parts[3], name))
            else:
                variables.create_int(name, _parse_int(parts[2], name), _parse_int(parts[3], name))
        else:
            raise ConfigError(f"Unknown variable type: {var_type}")
    logger.debug("Loaded {} variables", len(variables))
    return variables


def _parse_int(value: str, label: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"Invalid integer for {label}: {value!r}") from exc


def _parse_float(value: str, label: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigError(f"Invalid number for {label}: {value!r}") from exc
