"""Load walk-forward configuration files."""

from __future__ import annotations

import hashlib
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional

import yaml

from walkforward.config.models import WalkForwardConfig
from walkforward.config.parsers import config_time_to_days, parse_charts, parse_variables
from walkforward.errors import ConfigError


def load_config(path: str | Path) -> WalkForwardConfig:
    path = Path(path)
    data = _load_yaml(path)
    return parse_config(data, base_dir=path.parent)


def parse_config(data: dict[str, Any], base_dir: Optional[Path] = None) -> WalkForwardConfig:
    def resolve(value: Any) -> str:
        candidate = Path(str(value))
        if base_dir is not None and not candidate.is_absolute():
            candidate = base_dir / candidate
        return str(candidate)

    def optional_bool(value: Any) -> Optional[bool]:
        if value is None or isinstance(value, bool):
            return value
        raise ConfigError(f"Invalid jpy_quote: {value!r} (expected true or false)")

    def optional_int(value: Any) -> Optional[int]:
        if value is None:
            return None
        return _to_int(value, "seed")

    post_run_command = data.get("post_run_command") or None

    config = WalkForwardConfig(
        csv_path=resolve(_require(data, "csv_path")),
        strategy_path=resolve(_require(data, "strategy_path")),
        charts=str(_require(data, "charts")),
        variables=str(_require(data, "variables")),
        in_sample=str(_require(data, "in_sample")),
        out_of_sample=str(_require(data, "out_of_sample")),
        iterations=_to_int(_require(data, "iterations"), "iterations"),
        steps=_to_int(_require(data, "steps"), "steps"),
        post_run_command=str(post_run_command) if post_run_command else None,
        deposit=_to_float(data.get("deposit", 10000.0), "deposit"),
        drawdown_limit=_to_float(data.get("drawdown_limit", -10.0), "drawdown_limit"),
        jpy_quote=optional_bool(data.get("jpy_quote")),
        seed=optional_int(data.get("seed")),
        output_dir=resolve(data.get("output_dir", "output")),
        audit_log_path=resolve(data.get("audit_log_path", "output/audit.log")),
        log_level=str(data.get("log_level", "INFO")).upper(),
    )
    validate_config(config)
    return config


def validate_config(config: WalkForwardConfig) -> None:
    if config.steps < 1:
        raise ConfigError("steps must be > 0")
    if config.iterations < 1:
        raise ConfigError("iterations must be > 0")
    config_time_to_days(config.in_sample)
    config_time_to_days(config.out_of_sample)
    if not parse_charts(config.charts):
        raise ConfigError("At least one chart must be defined")
    parse_variables(config.variables)
    config.simulation_settings()


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def serialize_config(config: WalkForwardConfig) -> dict[str, Any]:
    return asdict(config)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data or data[key] is None:
        raise ConfigError(f"Missing required config key: {key}")
    return data[key]


def _to_int(value: Any, key: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {key}: {value}") from exc


def _to_float(value: Any, key: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {key}: {value}") from exc
