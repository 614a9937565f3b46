"""Command line entry point for walk-forward runs."""

from __future__ import annotations

import argparse
import random
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from walkforward.config import load_config, serialize_config
from walkforward.errors import ConfigError, StreamError
from walkforward.logs import configure_logging
from walkforward.market import CsvTickSource
from walkforward.monitoring import AuditLog, TradeLog
from walkforward.runtime import run_post_command
from walkforward.runtime.context import create_run_context
from walkforward.strategy import ScriptStrategy
from walkforward.walk import WalkForwardDriver


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Walk-forward backtest of a tick strategy")
    parser.add_argument("config", help="YAML configuration file")
    parser.add_argument("--log-dir", default=None, help="Directory for rotating log files")
    parser.add_argument("--log-level", default=None, help="Overrides log_level from the config")
    parser.add_argument("--seed", type=int, default=None, help="Overrides seed from the config")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config_path = Path(args.config)

    try:
        config = load_config(config_path)
    except (ConfigError, OSError) as exc:
        configure_logging(args.log_level or "INFO", args.log_dir)
        logger.error("Failed to load config {}: {}", config_path, exc)
        return 1

    configure_logging(args.log_level or config.log_level, args.log_dir)
    context = create_run_context(config_path)
    logger.info("Run {} (config {})", context.run_id, context.config_hash[:12])

    try:
        source = CsvTickSource(config.csv_path)
        jpy_quote = config.jpy_quote
        if jpy_quote is None:
            jpy_quote = source.is_jpy_quoted()
        logger.info("Using {} pip calculation", "JPY" if jpy_quote else "regular")

        strategy_path = Path(config.strategy_path)
        ScriptStrategy(strategy_path)  # fails fast on a missing script

        audit = AuditLog(Path(config.audit_log_path), run_id=context.run_id, config_hash=context.config_hash)
        audit.record("config_loaded", config=serialize_config(config), jpy_quote=jpy_quote)
        with TradeLog.in_directory(config.output_dir) as trade_log:
            driver = WalkForwardDriver(
                config,
                source,
                lambda: ScriptStrategy(strategy_path),
                settings=config.simulation_settings(jpy_quote=jpy_quote),
                trade_log=trade_log,
                audit_log=audit,
                ids=context.ids,
                rng=random.Random(args.seed) if args.seed is not None else None,
            )
            result = driver.run()
    except (ConfigError, StreamError) as exc:
        logger.error("Walk-forward run aborted: {}", exc)
        return 1

    if not result.succeeded:
        logger.error("Walk-forward run failed at step {} ({})", result.failed_step, result.failure)
        return 1

    for step in result.steps:
        print(f"{step.step}: {step.score}")

    logger.info("Run {} finished in {:.1f}s", context.run_id, context.elapsed_seconds())

    if config.post_run_command:
        post_run = run_post_command(config.post_run_command)
        if post_run.stdout:
            print(post_run.stdout, end="")
        if post_run.returncode != 0:
            logger.warning("Post-run command failed: {}", post_run.stderr.strip())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
