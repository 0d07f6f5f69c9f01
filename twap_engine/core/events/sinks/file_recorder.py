"""
Append-only file recorder sink.
"""
from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any


def _to_record(event: Any) -> dict[str, Any]:
    if is_dataclass(event) and not isinstance(event, type):
        record: dict[str, Any] = {"event": type(event).__name__}
        for key, value in asdict(event).items():
            # IntEnum would serialise as a bare int; keep the name as well.
            if isinstance(value, Enum):
                record[key] = int(value)
                record[f"{key}_name"] = value.name
            else:
                record[key] = value
        return record
    return {"event": str(event)}


class FileRecorderSink:
    """Writes each notification as a JSON line to a file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self._path.open("a", encoding="utf-8")
        self._closed = False

    def on_event(self, event: Any) -> None:
        self._fh.write(json.dumps(_to_record(event)) + "\n")
        self._fh.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._fh.flush()
        self._fh.close()
        self._closed = True
