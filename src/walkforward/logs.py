"""Logger setup shared by the command line tools."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"


def configure_logging(
    level: str = "INFO",
    log_dir: Optional[str | Path] = None,
    rotation: str = "1 day",
    retention: str = "30 days",
) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level, format=_FORMAT)
    if log_dir is not None:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        logger.add(
            sink=str(path / "walkforward_{time:YYYY-MM-DD}.log"),
            rotation=rotation,
            retention=retention,
            level=level,
            format=_FORMAT,
            backtrace=True,
            diagnose=False,
        )
