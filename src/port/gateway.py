"""AI gateway port — one method per structured-generation task.

Every method returns a validated domain object or raises
``domain.model.errors.GatewayError``; there is no structured error code.
"""

from typing import Protocol

from domain.model.chat import TutorReply
from domain.model.journal import JournalAnalysis
from domain.model.scenario import Scenario
from domain.model.vocabulary import DictionaryResult, WordDetails


class AIGatewayPort(Protocol):
    """Port for the external AI text/JSON generation service."""

    async def lookup_term(self, language: str, query: str) -> DictionaryResult:
        """Analyze a word or grammar point for a learner of ``language``."""
        ...

    async def word_details(self, language: str, word: str) -> WordDetails:
        """Fetch full dictionary details for a single word."""
        ...

    async def tutor_reply(
        self,
        language: str,
        history: list[dict[str, str]],
        user_message: str,
        scenario_title: str,
    ) -> TutorReply:
        """Generate the tutor's next turn given the prior transcript."""
        ...

    async def analyze_journal(self, language: str, content: str) -> JournalAnalysis:
        """Rewrite a (possibly code-switched) journal entry natively."""
        ...

    async def create_scenario(self, language: str, description: str) -> Scenario:
        """Synthesize a custom practice scenario from free text."""
        ...

    async def generate_story(self, language: str, words: list[str]) -> str:
        """Write a short plain-text story using the given words."""
        ...
