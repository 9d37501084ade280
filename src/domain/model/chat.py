"""Conversation domain models — transcript messages and tutor replies."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from domain.model.identity import new_id


class Role(str, Enum):
    USER = 'user'
    ASSISTANT = 'assistant'


@dataclass(frozen=True)
class WordToken:
    """Per-word annotation attached to an assistant message."""
    text: str
    pos: str = ""
    definition: str = ""
    grammar: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "text": self.text,
            "pos": self.pos,
            "def": self.definition,
            "grammar": self.grammar,
        }


@dataclass(frozen=True)
class Correction:
    """Grammar correction of the learner's last utterance."""
    original: str
    suggested: str
    explanation: str

    def to_dict(self) -> dict[str, str]:
        return {
            "original": self.original,
            "suggested": self.suggested,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class TutorReply:
    """Gateway result for one tutor turn."""
    message: str
    native_subtitle: str
    tokens: list[WordToken] = field(default_factory=list)
    correction: Correction | None = None


@dataclass(frozen=True)
class ChatMessage:
    """A single transcript message; transcripts are append-only."""
    id: str
    role: Role
    content: str
    tokens: tuple[WordToken, ...] | None = None
    translation: str | None = None
    correction: Correction | None = None

    @staticmethod
    def from_user(content: str) -> 'ChatMessage':
        return ChatMessage(id=new_id(), role=Role.USER, content=content)

    @staticmethod
    def from_reply(reply: TutorReply) -> 'ChatMessage':
        return ChatMessage(
            id=new_id(),
            role=Role.ASSISTANT,
            content=reply.message,
            tokens=tuple(reply.tokens),
            translation=reply.native_subtitle,
            correction=reply.correction,
        )

    def as_history(self) -> dict[str, str]:
        """Role/content pair passed back to the tutor as prior context."""
        return {"role": self.role.value, "content": self.content}

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "role": self.role.value,
            "content": self.content,
        }
        if self.tokens is not None:
            data["tokens"] = [t.to_dict() for t in self.tokens]
        if self.translation is not None:
            data["translation"] = self.translation
        if self.correction is not None:
            data["correction"] = self.correction.to_dict()
        return data
