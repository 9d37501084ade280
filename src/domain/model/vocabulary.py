"""Vocabulary domain models."""

from dataclasses import dataclass, field, replace
from typing import Any

from domain.model.identity import new_id, now_ms


@dataclass(frozen=True)
class WordDetails:
    """Full dictionary details for a single word (Value Object).

    Returned by the gateway's word-detail task and used to build a VocabItem.
    """
    word: str
    translation: str = ""
    definition: str = ""
    pronunciation: str = ""
    collocations: list[str] = field(default_factory=list)
    context: str = ""
    example: str = ""


@dataclass(frozen=True)
class DictionaryResult:
    """Immutable result of a dictionary lookup (Value Object)."""
    term: str
    definition: str
    pos: str
    related_grammar: str
    related_vocab: list[str]
    example: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "term": self.term,
            "definition": self.definition,
            "pos": self.pos,
            "related_grammar": self.related_grammar,
            "related_vocab": list(self.related_vocab),
            "example": self.example,
        }


@dataclass
class VocabItem:
    """A single vocabulary entry saved by the learner.

    Only ``is_mistake`` and ``is_important`` change after creation.
    """

    id: str
    word: str
    translation: str
    definition: str
    pronunciation: str
    collocations: list[str]
    context: str
    example: str
    language: str
    is_mistake: bool
    is_important: bool
    created_at: int

    @staticmethod
    def create(
        details: WordDetails,
        language: str,
        is_important: bool = False,
        is_mistake: bool = False,
    ) -> 'VocabItem':
        """Factory method — builds a new entry from gateway word details."""
        return VocabItem(
            id=new_id(),
            word=details.word,
            translation=details.translation,
            definition=details.definition,
            pronunciation=details.pronunciation,
            collocations=list(details.collocations),
            context=details.context,
            example=details.example,
            language=language,
            is_mistake=is_mistake,
            is_important=is_important,
            created_at=now_ms(),
        )

    def with_flags(
        self,
        is_important: bool | None = None,
        is_mistake: bool | None = None,
    ) -> 'VocabItem':
        """Return a copy with updated review flags; all other fields are kept."""
        return replace(
            self,
            is_important=self.is_important if is_important is None else is_important,
            is_mistake=self.is_mistake if is_mistake is None else is_mistake,
        )

    def matches(self, term: str) -> bool:
        """Case-insensitive match on word, plain match on translation."""
        return term.lower() in self.word.lower() or term in self.translation

    # ── serialization (backup document / snapshot slots) ──────

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "word": self.word,
            "translation": self.translation,
            "definition": self.definition,
            "pronunciation": self.pronunciation,
            "collocations": list(self.collocations),
            "context": self.context,
            "example": self.example,
            "language": self.language,
            "isMistake": self.is_mistake,
            "isImportant": self.is_important,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'VocabItem':
        return cls(
            id=data["id"],
            word=data["word"],
            translation=data.get("translation", ""),
            definition=data.get("definition", ""),
            pronunciation=data.get("pronunciation", ""),
            collocations=list(data.get("collocations") or []),
            context=data.get("context", ""),
            example=data.get("example", ""),
            language=data["language"],
            is_mistake=bool(data.get("isMistake", False)),
            is_important=bool(data.get("isImportant", False)),
            created_at=int(data["createdAt"]),
        )
