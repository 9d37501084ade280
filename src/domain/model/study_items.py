"""Sentence and grammar domain models.

Both are immutable after creation: they carry no review flags.
"""

from dataclasses import dataclass, field
from typing import Any

from domain.model.identity import new_id, now_ms


@dataclass(frozen=True)
class SentenceItem:
    """A sentence pattern saved from a tutor conversation."""
    id: str
    original: str
    translation: str
    analysis: str
    language: str
    created_at: int

    @staticmethod
    def create(original: str, translation: str, analysis: str, language: str) -> 'SentenceItem':
        return SentenceItem(
            id=new_id(),
            original=original,
            translation=translation,
            analysis=analysis,
            language=language,
            created_at=now_ms(),
        )

    def matches(self, term: str) -> bool:
        return term in self.original or term in self.translation

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "original": self.original,
            "translation": self.translation,
            "analysis": self.analysis,
            "language": self.language,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'SentenceItem':
        return cls(
            id=data["id"],
            original=data["original"],
            translation=data.get("translation", ""),
            analysis=data.get("analysis", ""),
            language=data["language"],
            created_at=int(data["createdAt"]),
        )


@dataclass(frozen=True)
class GrammarItem:
    """A grammar rule saved from a dictionary lookup."""
    id: str
    rule: str
    explanation: str
    language: str
    created_at: int
    examples: list[str] = field(default_factory=list)

    @staticmethod
    def create(rule: str, explanation: str, examples: list[str], language: str) -> 'GrammarItem':
        return GrammarItem(
            id=new_id(),
            rule=rule,
            explanation=explanation,
            examples=list(examples),
            language=language,
            created_at=now_ms(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "rule": self.rule,
            "explanation": self.explanation,
            "examples": list(self.examples),
            "language": self.language,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'GrammarItem':
        return cls(
            id=data["id"],
            rule=data["rule"],
            explanation=data.get("explanation", ""),
            examples=list(data.get("examples") or []),
            language=data["language"],
            created_at=int(data["createdAt"]),
        )
