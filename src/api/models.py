"""Pydantic models for API request/response."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.model.chat import ChatMessage
from domain.model.journal import JournalAnalysis, JournalEntry
from domain.model.review import ReviewSession
from domain.model.scenario import Scenario
from domain.model.vocabulary import DictionaryResult


# ── settings ─────────────────────────────────────────────

class LanguageRequest(BaseModel):
    language: str = Field(..., min_length=1, max_length=50)


class LanguageResponse(BaseModel):
    language: str
    locale: str
    available: list[str]


class ResetRequest(BaseModel):
    """Factory reset must be confirmed explicitly."""
    confirm: bool = False


class ImportResponse(BaseModel):
    replaced: list[str] = Field(..., description="Slots replaced by the import")


# ── dictionary ───────────────────────────────────────────

class LookupRequest(BaseModel):
    query: str = Field(..., max_length=200, description="Word or grammar point")


class DictionaryResultModel(BaseModel):
    """Lookup result; also the body for promoting a result to the library."""
    term: str
    definition: str
    pos: str
    related_grammar: str = ""
    related_vocab: list[str] = []
    example: str = ""

    @classmethod
    def from_domain(cls, result: DictionaryResult) -> 'DictionaryResultModel':
        return cls(**result.to_dict())

    def to_domain(self) -> DictionaryResult:
        return DictionaryResult(**self.model_dump())


# ── library ──────────────────────────────────────────────

class VocabResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class SentenceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    original: str
    translation: str
    analysis: str
    language: str
    created_at: int


class GrammarResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    rule: str
    explanation: str
    examples: list[str]
    language: str
    created_at: int


class QuickAddRequest(BaseModel):
    word: str = Field(..., max_length=100)


class VocabFlagsRequest(BaseModel):
    """Only the fields that are set are changed."""
    is_important: Optional[bool] = None
    is_mistake: Optional[bool] = None
    toggle_important: bool = False


class StoryRequest(BaseModel):
    ids: list[str]


class StoryResponse(BaseModel):
    story: str


class PendingResponse(BaseModel):
    count: int


# ── review ───────────────────────────────────────────────

class ReviewStartRequest(BaseModel):
    include_vocab: bool = True
    include_sentences: bool = False
    include_grammar: bool = False
    only_important: bool = True
    only_mistakes: bool = False


class GradeRequest(BaseModel):
    remembered: bool


class ReviewCardResponse(BaseModel):
    id: str
    kind: str
    mode_label: str
    front: str
    back: str
    detail: str
    example: str


class ReviewSessionResponse(BaseModel):
    id: str
    state: str
    position: int
    total: int
    flipped: bool
    card: Optional[ReviewCardResponse] = None

    @classmethod
    def from_domain(cls, session: ReviewSession) -> 'ReviewSessionResponse':
        item = session.current_item()
        card = None
        if item is not None:
            card = ReviewCardResponse(
                id=item.id,
                kind=item.kind.value,
                mode_label=item.mode_label,
                front=item.front,
                back=item.back,
                detail=item.detail,
                example=item.example,
            )
        return cls(
            id=session.id,
            state=session.state.value,
            position=session.position,
            total=session.total,
            flipped=session.flipped,
            card=card,
        )


# ── dojo ─────────────────────────────────────────────────

class ScenarioModel(BaseModel):
    id: str
    title: str
    icon: str
    description: str
    cheat_sheet: list[str]
    is_custom: bool

    @classmethod
    def from_domain(cls, scenario: Scenario) -> 'ScenarioModel':
        return cls(
            id=scenario.id,
            title=scenario.title,
            icon=scenario.icon,
            description=scenario.description,
            cheat_sheet=list(scenario.cheat_sheet),
            is_custom=scenario.is_custom,
        )


class DojoSessionResponse(BaseModel):
    id: str
    active_scenario_id: Optional[str] = None
    in_flight: bool = False
    scenarios: list[ScenarioModel]


class CustomScenarioRequest(BaseModel):
    prompt: str = Field(..., max_length=500)


class SelectScenarioRequest(BaseModel):
    scenario_id: str


class MessageRequest(BaseModel):
    text: str = Field(..., max_length=2000)


class WordTokenModel(BaseModel):
    text: str
    pos: str = ""
    definition: str = ""
    grammar: str = ""


class CorrectionModel(BaseModel):
    original: str
    suggested: str
    explanation: str


class ChatMessageModel(BaseModel):
    id: str
    role: str
    content: str
    tokens: Optional[list[WordTokenModel]] = None
    translation: Optional[str] = None
    correction: Optional[CorrectionModel] = None

    @classmethod
    def from_domain(cls, message: ChatMessage) -> 'ChatMessageModel':
        return cls(
            id=message.id,
            role=message.role.value,
            content=message.content,
            tokens=None if message.tokens is None else [
                WordTokenModel(text=t.text, pos=t.pos, definition=t.definition, grammar=t.grammar)
                for t in message.tokens
            ],
            translation=message.translation,
            correction=None if message.correction is None else CorrectionModel(
                original=message.correction.original,
                suggested=message.correction.suggested,
                explanation=message.correction.explanation,
            ),
        )


class TranscriptResponse(BaseModel):
    messages: list[ChatMessageModel]
    cheat_sheet: list[str]


class SaveSentenceRequest(BaseModel):
    message_id: str


# ── journal ──────────────────────────────────────────────

class JournalRequest(BaseModel):
    content: str = Field(..., max_length=5000)


class VocabSuggestionModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    word: str
    translation: str = ""
    definition: str = ""
    example: str = ""


class JournalAnalysisResponse(BaseModel):
    optimized: str
    analysis: str
    vocab_suggestions: list[VocabSuggestionModel]

    @classmethod
    def from_domain(cls, analysis: JournalAnalysis) -> 'JournalAnalysisResponse':
        return cls(
            optimized=analysis.optimized,
            analysis=analysis.analysis,
            vocab_suggestions=[
                VocabSuggestionModel.model_validate(s) for s in analysis.vocab_suggestions
            ],
        )


class JournalEntryResponse(BaseModel):
    id: str
    original: str
    optimized: str
    analysis: str
    vocab_suggestions: list[VocabSuggestionModel]
    created_at: int

    @classmethod
    def from_domain(cls, entry: JournalEntry) -> 'JournalEntryResponse':
        return cls(
            id=entry.id,
            original=entry.original,
            optimized=entry.optimized,
            analysis=entry.analysis,
            vocab_suggestions=[
                VocabSuggestionModel.model_validate(s) for s in entry.vocab_suggestions
            ],
            created_at=entry.created_at,
        )


# ── speech ───────────────────────────────────────────────

class SpeakRequest(BaseModel):
    text: str = Field(..., max_length=1000)


class ListenResponse(BaseModel):
    transcript: Optional[str] = None
