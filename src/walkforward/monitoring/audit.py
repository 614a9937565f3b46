"""JSON-lines record of walk-forward run events.

Every record carries the run id and config hash so several runs can share a
file. Records are numbered in write order within one ``AuditLog``.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


class AuditLog:
    def __init__(self, path: str | Path, run_id: Optional[str] = None, config_hash: Optional[str] = None) -> None:
        self.path = Path(path)
        self.run_id = run_id
        self.config_hash = config_hash
        self.sequence = 0
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def record(self, event: str, step: Optional[int] = None, **fields: Any) -> dict[str, Any]:
        self.sequence += 1
        entry = {
            "seq": self.sequence,
            "ts": datetime.now(timezone.utc).isoformat(),
            "run_id": self.run_id,
            "config_hash": self.config_hash,
            "event": event,
            "step": step,
            **fields,
        }
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(entry, default=str) + "\n")
        return entry

    def read(self, event: Optional[str] = None) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        entries = []
        with self.path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if not line.strip():
                    continue
                entry = json.loads(line)
                if event is None or entry["event"] == event:
                    entries.append(entry)
        return entries
