"""JSON file implementation of SnapshotStorePort.

All slots live in one JSON document on disk. Every save rewrites the
whole document through a temp file + rename, so a crash never leaves a
partially written snapshot behind. An unreadable file is never
overwritten: load and save raise SnapshotReadError until it is repaired
or cleared.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from port.snapshot_store import SnapshotReadError, SnapshotWriteError

logger = logging.getLogger(__name__)

SNAPSHOT_FILE_NAME = "polyglot_snapshot_v7.json"


class JsonFileSnapshotStore:
    """Snapshot store backed by a single JSON file."""

    def __init__(self, data_dir: Path):
        self.path = Path(data_dir) / SNAPSHOT_FILE_NAME
        self._slots: dict[str, Any] | None = None

    def load(self) -> dict[str, Any]:
        if not self.path.exists():
            self._slots = {}
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to read snapshot", extra={
                "path": str(self.path), "error": str(e),
            })
            raise SnapshotReadError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            logger.error("Snapshot is not a JSON object", extra={"path": str(self.path)})
            raise SnapshotReadError(f"{self.path} does not contain a JSON object")
        self._slots = data
        return dict(data)

    def save(self, slot: str, value: Any) -> None:
        if self._slots is None:
            self.load()
        updated = {**self._slots, slot: value}
        self._write(updated)
        self._slots = updated

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise SnapshotWriteError(f"Cannot remove {self.path}: {e}") from e
        self._slots = {}
        logger.info("Snapshot cleared", extra={"path": str(self.path)})

    def ping(self) -> bool:
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return os.access(directory, os.W_OK)

    def _write(self, slots: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        except OSError as e:
            raise SnapshotWriteError(f"Cannot write {self.path}: {e}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(slots, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise SnapshotWriteError(f"Cannot write {self.path}: {e}") from e
