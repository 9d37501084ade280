"""Port for the key-value snapshot store backing the study library."""

from typing import Any, Protocol


class SnapshotStoreError(Exception):
    """Base exception for snapshot store failures."""


class SnapshotReadError(SnapshotStoreError):
    """Stored snapshot exists but could not be read.

    Adapters raise this instead of returning an empty snapshot so that the
    stored data is never overwritten with a blank state.
    """


class SnapshotWriteError(SnapshotStoreError):
    """A slot could not be written; the stored value is unchanged."""


class SnapshotStorePort(Protocol):
    """Protocol for slot-level persistence.

    Slots are the list slots ('vocab', 'sentences', 'grammar', 'journals')
    and the scalar 'language' slot. Values are JSON-compatible.
    """

    def load(self) -> dict[str, Any]:
        """Read every stored slot. Missing slots are absent from the result.

        Raises:
            SnapshotReadError: If stored data exists but cannot be read.
        """
        ...

    def save(self, slot: str, value: Any) -> None:
        """Write one slot, replacing its previous value.

        Raises:
            SnapshotReadError: If the adapter must read before writing and cannot.
            SnapshotWriteError: If the write fails.
        """
        ...

    def clear(self) -> None:
        """Delete every slot.

        Raises:
            SnapshotWriteError: If the stored data could not be removed.
        """
        ...

    def ping(self) -> bool:
        """Return True if the backing storage is reachable."""
        ...
