"""Light-weight JSONL event log for generation runs, with rotation support."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

__all__ = ["RunLog"]

_DEFAULT_MAX_BYTES = 10 * 1024 * 1024


def _date_prefix() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d")


class RunLog:
    """Append run events to ``<base_dir>/<YYYYMMDD>/generation_NN.jsonl``.

    A run owns its log instance; files roll over once they reach ``max_bytes``.
    """

    def __init__(self, base_dir: str | Path, *, run_id: str, max_bytes: int | None = None) -> None:
        self.base_dir = Path(base_dir)
        self.run_id = run_id
        self.max_bytes = max_bytes or _DEFAULT_MAX_BYTES
        self._current: Path | None = None

    @property
    def path(self) -> Path | None:
        return self._current

    def _resolve_path(self) -> Path:
        date_dir = self.base_dir / _date_prefix()
        date_dir.mkdir(parents=True, exist_ok=True)

        if self._current is not None and self._current.parent == date_dir and self._current.exists():
            if self._current.stat().st_size < self.max_bytes:
                return self._current

        counter = 0
        while True:
            candidate = date_dir / f"generation_{counter:02d}.jsonl"
            if not candidate.exists() or candidate.stat().st_size < self.max_bytes:
                self._current = candidate
                return candidate
            counter += 1

    def append(self, event: str, **fields: Any) -> Path:
        """Append one event and return the file it was written to."""

        payload: Dict[str, Any] = {"event": event, "run_id": self.run_id}
        payload.update(fields)
        payload.setdefault("ts", datetime.now(timezone.utc).isoformat(timespec="milliseconds"))

        line = json.dumps(payload, sort_keys=True, ensure_ascii=False)
        path = self._resolve_path()
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
        return path
