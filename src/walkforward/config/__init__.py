"""Configuration loading and definition parsing."""

from walkforward.config.loader import compute_config_hash, load_config, parse_config, serialize_config
from walkforward.config.models import WalkForwardConfig
from walkforward.config.parsers import config_time_to_days, parse_charts, parse_variables, validate_name

__all__ = [
    "WalkForwardConfig",
    "compute_config_hash",
    "config_time_to_days",
    "load_config",
    "parse_charts",
    "parse_config",
    "parse_variables",
    "serialize_config",
    "validate_name",
]
