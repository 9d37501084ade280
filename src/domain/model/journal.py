"""Journal domain models."""

from dataclasses import dataclass, field
from typing import Any

from domain.model.identity import new_id, now_ms


@dataclass(frozen=True)
class VocabSuggestion:
    """A word extracted from a journal entry worth learning."""
    word: str
    translation: str = ""
    definition: str = ""
    example: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "word": self.word,
            "translation": self.translation,
            "definition": self.definition,
            "example": self.example,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'VocabSuggestion':
        return cls(
            word=data["word"],
            translation=data.get("translation", ""),
            definition=data.get("definition", ""),
            example=data.get("example", ""),
        )


@dataclass(frozen=True)
class JournalAnalysis:
    """Gateway result for a journal submission (display copy)."""
    optimized: str
    analysis: str
    vocab_suggestions: list[VocabSuggestion] = field(default_factory=list)


@dataclass(frozen=True)
class JournalEntry:
    """A persisted journal submission with its native-ized rewrite."""
    id: str
    original: str
    optimized: str
    analysis: str
    created_at: int
    vocab_suggestions: list[VocabSuggestion] = field(default_factory=list)

    @staticmethod
    def create(original: str, analysis: JournalAnalysis) -> 'JournalEntry':
        """Build the stored copy of an analysis; the suggestion list is not shared."""
        return JournalEntry(
            id=new_id(),
            original=original,
            optimized=analysis.optimized,
            analysis=analysis.analysis,
            vocab_suggestions=list(analysis.vocab_suggestions),
            created_at=now_ms(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "original": self.original,
            "optimized": self.optimized,
            "analysis": self.analysis,
            "vocabSuggestions": [s.to_dict() for s in self.vocab_suggestions],
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'JournalEntry':
        return cls(
            id=data["id"],
            original=data["original"],
            optimized=data.get("optimized", ""),
            analysis=data.get("analysis", ""),
            vocab_suggestions=[
                VocabSuggestion.from_dict(s) for s in data.get("vocabSuggestions") or []
            ],
            created_at=int(data["createdAt"]),
        )
