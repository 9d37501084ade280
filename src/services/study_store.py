"""Study store — the single injectable owner of the learner's library.

Lifecycle: ``load()`` once at startup, then every mutation writes the
affected slot through the snapshot port and only then updates the
in-memory library. Listeners registered with ``subscribe()`` are told
which slot changed.

A slot that cannot be read at startup is held read-only (empty in memory)
so the stored data is never overwritten by accident. Importing a backup
for that slot, or a factory reset, replaces it explicitly.
"""

import json
import logging
from dataclasses import replace
from typing import Any, Callable

from domain.model import library as slots
from domain.model.errors import ImportFormatError, NotFoundError, StorageError, ValidationError
from domain.model.journal import JournalEntry
from domain.model.language import get_language
from domain.model.library import StudyLibrary, decode_lists
from domain.model.study_items import GrammarItem, SentenceItem
from domain.model.vocabulary import VocabItem
from port.snapshot_store import SnapshotReadError, SnapshotStoreError, SnapshotStorePort

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]


class StudyStore:
    """Key-value snapshot of {vocab, sentences, grammar, journals, language}."""

    def __init__(self, port: SnapshotStorePort):
        self._port = port
        self._library = StudyLibrary()
        self._listeners: list[Listener] = []
        self._read_only: set[str] = set()

    # ── lifecycle ─────────────────────────────────────────

    def load(self) -> StudyLibrary:
        """Read every slot from the port.

        Slots that cannot be decoded load empty and become read-only; the
        remaining slots are unaffected. If the port cannot be read at all,
        every slot is read-only.
        """
        try:
            raw = self._port.load()
        except SnapshotReadError as e:
            logger.error("Stored snapshot unreadable, library is read-only", extra={
                "error": str(e),
            })
            self._library = StudyLibrary()
            self._read_only = set(slots.ALL_SLOTS)
            return self._library

        self._library, unreadable = StudyLibrary.from_slots(raw)
        self._read_only = set(unreadable)
        if unreadable:
            logger.warning("Stored slots are malformed and held read-only", extra={
                "slots": sorted(unreadable),
            })
        logger.info("Study library loaded", extra={
            "vocab": len(self._library.vocab),
            "sentences": len(self._library.sentences),
            "grammar": len(self._library.grammar),
            "journals": len(self._library.journals),
            "language": self._library.language,
        })
        return self._library

    @property
    def read_only_slots(self) -> list[str]:
        """Slots that failed to load and will not be written."""
        return sorted(self._read_only)

    def ping(self) -> bool:
        return self._port.ping()

    @property
    def backend(self) -> str:
        return type(self._port).__name__

    # ── get / set / subscribe ─────────────────────────────

    @property
    def language(self) -> str:
        return self._library.language

    def get(self, slot: str) -> Any:
        """Current value of a slot; lists are returned as copies."""
        self._check_slot(slot)
        value = getattr(self._library, slot)
        return list(value) if isinstance(value, list) else value

    def set(self, slot: str, value: Any) -> None:
        """Persist a slot's new value, then make it current.

        Raises:
            StorageError: If the slot is read-only or the write fails; the
                in-memory value is left unchanged.
        """
        self._check_slot(slot)
        if slot in self._read_only:
            raise StorageError(
                f"Stored '{slot}' could not be read; import a backup or reset to replace it"
            )
        self._commit(slot, value)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── mutations ─────────────────────────────────────────

    def set_language(self, name: str) -> str:
        if get_language(name) is None:
            raise ValidationError(f"Unsupported language: {name}")
        self.set(slots.LANGUAGE, name)
        return name

    def add_vocab(self, item: VocabItem) -> VocabItem:
        self._prepend(slots.VOCAB, item)
        return item

    def add_sentence(self, item: SentenceItem) -> SentenceItem:
        self._prepend(slots.SENTENCES, item)
        return item

    def add_grammar(self, item: GrammarItem) -> GrammarItem:
        self._prepend(slots.GRAMMAR, item)
        return item

    def add_journal(self, entry: JournalEntry) -> JournalEntry:
        self._prepend(slots.JOURNALS, entry)
        return entry

    def find_vocab(self, item_id: str) -> VocabItem:
        for item in self._library.vocab:
            if item.id == item_id:
                return item
        raise NotFoundError(f"Vocabulary item not found: {item_id}")

    def update_vocab_flags(
        self,
        item_id: str,
        is_important: bool | None = None,
        is_mistake: bool | None = None,
    ) -> VocabItem:
        """Update the review flags of one vocabulary item."""
        current = self.find_vocab(item_id)
        updated = current.with_flags(is_important=is_important, is_mistake=is_mistake)
        if updated == current:
            return current
        self.set(slots.VOCAB, [
            updated if item.id == item_id else item for item in self._library.vocab
        ])
        return updated

    def delete(self, slot: str, item_id: str) -> None:
        if slot not in slots.LIST_SLOTS:
            raise ValidationError(f"Unknown list: {slot}")
        items = getattr(self._library, slot)
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            raise NotFoundError(f"Item not found in {slot}: {item_id}")
        self.set(slot, remaining)

    # ── queries ───────────────────────────────────────────

    def items_for_language(self, slot: str, language: str | None = None) -> list[Any]:
        """Items of a language-tagged list for ``language`` (default: current)."""
        if slot not in (slots.VOCAB, slots.SENTENCES, slots.GRAMMAR):
            raise ValidationError(f"List is not language-tagged: {slot}")
        language = language or self._library.language
        return [item for item in getattr(self._library, slot) if item.language == language]

    def pending_review_count(self) -> int:
        """Vocabulary items flagged as mistake or important, across languages."""
        return sum(1 for v in self._library.vocab if v.is_mistake or v.is_important)

    # ── backup ────────────────────────────────────────────

    def export_backup(self) -> dict[str, list[dict[str, Any]]]:
        return self._library.to_backup()

    def export_json(self) -> str:
        return json.dumps(self.export_backup(), ensure_ascii=False, indent=2)

    def import_backup(self, document: str | bytes | dict[str, Any]) -> list[str]:
        """Replace the list slots present in a backup document.

        Slots missing from the document are left untouched. Nothing is
        written unless the whole document decodes.

        Returns:
            Names of the slots that were replaced.

        Raises:
            ImportFormatError: If the document is not valid JSON or has the
                wrong shape.
        """
        if isinstance(document, (str, bytes)):
            try:
                document = json.loads(document)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise ImportFormatError(f"Backup is not valid JSON: {e}") from e

        decoded = decode_lists(document)
        for slot, items in decoded.items():
            # An explicit import replaces a slot even if it failed to load
            self._commit(slot, items)
        logger.info("Backup imported", extra={"slots": list(decoded)})
        return list(decoded)

    def factory_reset(self) -> None:
        """Clear every slot and reload the initial empty state.

        Raises:
            StorageError: If the stored data could not be cleared.
        """
        try:
            self._port.clear()
        except SnapshotStoreError as e:
            logger.error("Factory reset failed", extra={"error": str(e)})
            raise StorageError(f"Could not clear stored data: {e}") from e
        self._library = StudyLibrary()
        self._read_only.clear()
        logger.warning("Study library reset to factory state")
        for slot in slots.ALL_SLOTS:
            self._notify(slot)

    # ── internals ─────────────────────────────────────────

    def _prepend(self, slot: str, item: Any) -> None:
        self.set(slot, [item] + getattr(self._library, slot))

    def _commit(self, slot: str, value: Any) -> None:
        staged = replace(self._library, **{
            slot: list(value) if isinstance(value, list) else value,
        })
        try:
            self._port.save(slot, staged.encode_slot(slot))
        except SnapshotStoreError as e:
            logger.error("Failed to persist slot", extra={"slot": slot, "error": str(e)})
            raise StorageError(f"Could not save '{slot}': {e}") from e
        self._library = staged
        self._read_only.discard(slot)
        self._notify(slot)

    def _notify(self, slot: str) -> None:
        for listener in list(self._listeners):
            listener(slot)

    @staticmethod
    def _check_slot(slot: str) -> None:
        if slot not in slots.ALL_SLOTS:
            raise ValidationError(f"Unknown slot: {slot}")
