"""In-memory implementation of SnapshotStorePort for testing."""

import copy
from typing import Any

from port.snapshot_store import SnapshotReadError, SnapshotWriteError


class InMemorySnapshotStore:
    """Set ``fail_load`` / ``fail_save`` to simulate an unreadable or unwritable backend."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self.slots: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self.save_count = 0
        self.fail_load = False
        self.fail_save = False

    def load(self) -> dict[str, Any]:
        if self.fail_load:
            raise SnapshotReadError("snapshot unavailable")
        return copy.deepcopy(self.slots)

    def save(self, slot: str, value: Any) -> None:
        if self.fail_save:
            raise SnapshotWriteError(f"cannot write '{slot}'")
        self.slots[slot] = copy.deepcopy(value)
        self.save_count += 1

    def clear(self) -> None:
        if self.fail_save:
            raise SnapshotWriteError("cannot clear")
        self.slots.clear()

    def ping(self) -> bool:
        return True
