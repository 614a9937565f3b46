"""Identity of a single walk-forward run."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from walkforward.config.loader import compute_config_hash
from walkforward.runtime.ids import IdAllocator


@dataclass(frozen=True)
class RunContext:
    """Run id, config fingerprint and the id allocator shared by every pass."""

    run_id: str
    config_path: Path
    config_hash: str
    started_at: datetime
    ids: IdAllocator = field(default_factory=IdAllocator, compare=False)

    def elapsed_seconds(self, now: Optional[datetime] = None) -> float:
        now = now or datetime.now(timezone.utc)
        return (now - self.started_at).total_seconds()


def create_run_context(config_path: str | Path, run_id: Optional[str] = None) -> RunContext:
    path = Path(config_path)
    config_hash = compute_config_hash(path)
    started_at = datetime.now(timezone.utc)
    if run_id is None:
        run_id = f"{path.stem}-{started_at:%Y%m%dT%H%M%SZ}-{config_hash[:8]}"
    return RunContext(run_id=run_id, config_path=path, config_hash=config_hash, started_at=started_at)
