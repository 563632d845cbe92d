"""Append-only JSONL trace logger."""

from __future__ import annotations

import json
from pathlib import Path


class TraceLogger:
    """Append-only JSONL logger for parse trace events."""

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("a", encoding="utf-8")

    def append(self, event: dict) -> None:
        """Append one compact JSON event line."""

        line = json.dumps(event, ensure_ascii=False, separators=(",", ":"))
        self._fh.write(line + "\n")

    def close(self) -> None:
        """Close the underlying file handle."""

        self._fh.close()

    def __enter__(self) -> "TraceLogger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
