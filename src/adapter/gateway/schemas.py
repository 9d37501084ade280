"""Pydantic response schemas for each gateway task.

The JSON schema of each model is sent with the prompt, and the model
validates the parsed reply before it is converted to a domain object.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.model.chat import Correction, TutorReply, WordToken
from domain.model.journal import JournalAnalysis, VocabSuggestion
from domain.model.scenario import Scenario
from domain.model.vocabulary import DictionaryResult, WordDetails


class DictionaryLookupSchema(BaseModel):
    """Reply schema for word / grammar-point lookup."""
    term: str
    definition: str
    pos: str
    related_grammar: str
    related_vocab: list[str]
    example: str

    def to_domain(self) -> DictionaryResult:
        return DictionaryResult(
            term=self.term,
            definition=self.definition,
            pos=self.pos,
            related_grammar=self.related_grammar,
            related_vocab=list(self.related_vocab),
            example=self.example,
        )


class WordDetailsSchema(BaseModel):
    """Reply schema for a full word-detail fetch."""
    word: str
    translation: str
    definition: str
    pronunciation: str
    collocations: list[str]
    context: str
    example: str

    def to_domain(self) -> WordDetails:
        return WordDetails(**self.model_dump())


class TokenSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    pos: str
    definition: str = Field(..., alias="def")
    grammar: str


class CorrectionSchema(BaseModel):
    original: Optional[str] = None
    suggested: Optional[str] = None
    explanation: Optional[str] = None


class TutorReplySchema(BaseModel):
    """Reply schema for one tutor turn."""
    message: str
    native_subtitle: str
    tokens: list[TokenSchema]
    correction: Optional[CorrectionSchema] = None

    def to_domain(self) -> TutorReply:
        correction = None
        # Models sometimes send an empty object instead of omitting the key
        if self.correction and self.correction.suggested:
            correction = Correction(
                original=self.correction.original or "",
                suggested=self.correction.suggested,
                explanation=self.correction.explanation or "",
            )
        return TutorReply(
            message=self.message,
            native_subtitle=self.native_subtitle,
            tokens=[
                WordToken(text=t.text, pos=t.pos, definition=t.definition, grammar=t.grammar)
                for t in self.tokens
            ],
            correction=correction,
        )


class VocabSuggestionSchema(BaseModel):
    word: str
    translation: str
    definition: str
    example: str


class JournalAnalysisSchema(BaseModel):
    """Reply schema for journal analysis."""
    model_config = ConfigDict(populate_by_name=True)

    optimized: str
    analysis: str
    vocab_suggestions: list[VocabSuggestionSchema] = Field(..., alias="vocabSuggestions")

    def to_domain(self) -> JournalAnalysis:
        return JournalAnalysis(
            optimized=self.optimized,
            analysis=self.analysis,
            vocab_suggestions=[VocabSuggestion(**s.model_dump()) for s in self.vocab_suggestions],
        )


class ScenarioSchema(BaseModel):
    """Reply schema for custom scenario generation."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    icon: str
    description: str
    cheat_sheet: list[str] = Field(..., alias="cheatSheet")

    def to_domain(self) -> Scenario:
        return Scenario.create_custom(
            title=self.title,
            icon=self.icon,
            description=self.description,
            cheat_sheet=list(self.cheat_sheet),
        )


def response_schema(model: type[BaseModel]) -> dict:
    """JSON schema sent to the LLM; uses wire aliases (e.g. "def", "cheatSheet")."""
    return model.model_json_schema(by_alias=True)
