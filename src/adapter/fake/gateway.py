"""In-memory implementation of AIGatewayPort for testing."""

import asyncio

from domain.model.chat import TutorReply
from domain.model.errors import GatewayError
from domain.model.journal import JournalAnalysis
from domain.model.scenario import Scenario
from domain.model.vocabulary import DictionaryResult, WordDetails


class FakeGateway:
    """Fake gateway returning preconfigured results and recording calls.

    Set ``error`` to make every task raise it. Set ``gate`` to an
    ``asyncio.Event`` to hold tutor replies and generated scenarios
    until the event is set.
    """

    def __init__(
        self,
        lookup: DictionaryResult | None = None,
        details: WordDetails | None = None,
        reply: TutorReply | None = None,
        journal: JournalAnalysis | None = None,
        scenario: Scenario | None = None,
        story: str = "Once upon a time.",
        error: Exception | None = None,
    ):
        self.lookup = lookup or DictionaryResult(
            term="word", definition="definition", pos="noun",
            related_grammar="", related_vocab=[], example="example",
        )
        self.details = details
        self.reply = reply or TutorReply(message="こんにちは", native_subtitle="你好")
        self.journal = journal or JournalAnalysis(optimized="optimized", analysis="analysis")
        self.scenario = scenario or Scenario.create_custom(
            title="Airport", icon="fa-plane", description="Check in for a flight.",
            cheat_sheet=["Where is the gate?"],
        )
        self.story = story
        self.error = error
        self.gate: asyncio.Event | None = None
        self.calls: list[tuple[str, dict]] = []

    def _record(self, task: str, **kwargs) -> None:
        self.calls.append((task, kwargs))
        if self.error is not None:
            raise self.error

    async def lookup_term(self, language: str, query: str) -> DictionaryResult:
        self._record("lookup_term", language=language, query=query)
        return self.lookup

    async def word_details(self, language: str, word: str) -> WordDetails:
        self._record("word_details", language=language, word=word)
        return self.details or WordDetails(
            word=word, translation=f"{word} (translated)", definition="definition",
            pronunciation="pronunciation", collocations=[], context="context",
            example="example",
        )

    async def tutor_reply(
        self,
        language: str,
        history: list[dict[str, str]],
        user_message: str,
        scenario_title: str,
    ) -> TutorReply:
        self._record(
            "tutor_reply", language=language, history=list(history),
            user_message=user_message, scenario_title=scenario_title,
        )
        if self.gate is not None:
            await self.gate.wait()
        return self.reply

    async def analyze_journal(self, language: str, content: str) -> JournalAnalysis:
        self._record("analyze_journal", language=language, content=content)
        return self.journal

    async def create_scenario(self, language: str, description: str) -> Scenario:
        self._record("create_scenario", language=language, description=description)
        if self.gate is not None:
            await self.gate.wait()
        return self.scenario

    async def generate_story(self, language: str, words: list[str]) -> str:
        self._record("generate_story", language=language, words=list(words))
        return self.story


def failing_gateway(message: str = "AI request failed") -> FakeGateway:
    """Gateway whose every task raises GatewayError."""
    return FakeGateway(error=GatewayError(message))
