"""Optional shell command executed after a walk-forward run."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass

from loguru import logger


@dataclass(frozen=True)
class PostRunResult:
    command: str
    returncode: int
    stdout: str
    stderr: str


def run_post_command(command: str) -> PostRunResult:
    logger.info("Executing post-run command: {}", command)
    completed = subprocess.run(["bash", "-c", command], capture_output=True, text=True, check=False)
    logger.info("Post-run command exited with {}", completed.returncode)
    return PostRunResult(
        command=command,
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
