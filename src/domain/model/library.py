"""Study library — the learner's persisted lists and language selection.

Also defines the backup document shape shared by export/import and
the snapshot slots.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from domain.model.errors import ImportFormatError
from domain.model.journal import JournalEntry
from domain.model.language import DEFAULT_LANGUAGE
from domain.model.study_items import GrammarItem, SentenceItem
from domain.model.vocabulary import VocabItem

# ── Slot names ───────────────────────────────────────────

VOCAB = 'vocab'
SENTENCES = 'sentences'
GRAMMAR = 'grammar'
JOURNALS = 'journals'
LANGUAGE = 'language'

LIST_SLOTS = (VOCAB, SENTENCES, GRAMMAR, JOURNALS)
ALL_SLOTS = LIST_SLOTS + (LANGUAGE,)

_DECODERS: dict[str, Callable[[dict[str, Any]], Any]] = {
    VOCAB: VocabItem.from_dict,
    SENTENCES: SentenceItem.from_dict,
    GRAMMAR: GrammarItem.from_dict,
    JOURNALS: JournalEntry.from_dict,
}


@dataclass
class StudyLibrary:
    """In-memory state of every persisted slot. Lists are newest-first."""
    vocab: list[VocabItem] = field(default_factory=list)
    sentences: list[SentenceItem] = field(default_factory=list)
    grammar: list[GrammarItem] = field(default_factory=list)
    journals: list[JournalEntry] = field(default_factory=list)
    language: str = DEFAULT_LANGUAGE.name

    def encode_slot(self, slot: str) -> Any:
        """Encode one slot to its JSON-compatible form."""
        if slot == LANGUAGE:
            return self.language
        return [item.to_dict() for item in getattr(self, slot)]

    def to_backup(self) -> dict[str, list[dict[str, Any]]]:
        """The export document: the four lists, without the language."""
        return {slot: self.encode_slot(slot) for slot in LIST_SLOTS}

    @classmethod
    def from_slots(cls, raw: Any) -> tuple['StudyLibrary', list[str]]:
        """Rebuild a library from raw slot values, one slot at a time.

        Missing slots stay empty. A slot that fails to decode also stays
        empty and is reported, so the caller can keep it from being
        overwritten; the other slots load normally.

        Returns:
            Tuple of (library, names of unreadable slots).
        """
        library = cls()
        if not isinstance(raw, dict):
            return library, list(ALL_SLOTS)

        unreadable: list[str] = []
        for slot in LIST_SLOTS:
            if raw.get(slot) is None:
                continue
            try:
                setattr(library, slot, decode_slot(slot, raw[slot]))
            except ImportFormatError:
                unreadable.append(slot)

        language = raw.get(LANGUAGE)
        if isinstance(language, str):
            library.language = language
        elif language is not None:
            unreadable.append(LANGUAGE)
        return library, unreadable


def decode_slot(slot: str, items: Any) -> list[Any]:
    """Decode one list slot.

    Raises:
        ImportFormatError: If the slot is not a list or any item has the wrong shape.
    """
    if not isinstance(items, list):
        raise ImportFormatError(f"Slot '{slot}' must be a list")
    try:
        return [_DECODERS[slot](item) for item in items]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ImportFormatError(f"Malformed item in slot '{slot}': {e}") from e


def decode_lists(raw: dict[str, Any]) -> dict[str, list[Any]]:
    """Decode the list slots present in a backup document, all or nothing.

    Keys that are missing (or null) are left out of the result so callers
    can replace only the slots that were supplied.

    Raises:
        ImportFormatError: If the document or any item has the wrong shape.
    """
    if not isinstance(raw, dict):
        raise ImportFormatError("Backup document must be a JSON object")
    return {
        slot: decode_slot(slot, raw[slot])
        for slot in LIST_SLOTS
        if raw.get(slot) is not None
    }
