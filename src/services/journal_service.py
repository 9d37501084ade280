"""Journal service — native-ized rewrites of the learner's diary entries."""

import logging

from domain.model import library as slots
from domain.model.errors import EmptyInputError
from domain.model.journal import JournalAnalysis, JournalEntry, VocabSuggestion
from domain.model.vocabulary import VocabItem, WordDetails
from port.gateway import AIGatewayPort
from services.study_store import StudyStore

logger = logging.getLogger(__name__)


class JournalService:
    def __init__(self, gateway: AIGatewayPort, store: StudyStore):
        self.gateway = gateway
        self.store = store

    async def analyze(self, content: str) -> JournalAnalysis:
        """Analyze an entry and persist it.

        The stored JournalEntry and the returned analysis are independent
        copies of the same data.

        Raises:
            EmptyInputError: If the content is blank.
            GatewayError: If the analysis fails; nothing is stored.
        """
        if not content or not content.strip():
            raise EmptyInputError("Journal entry is empty")

        analysis = await self.gateway.analyze_journal(self.store.language, content)

        entry = self.store.add_journal(JournalEntry.create(content, analysis))
        logger.info("Journal entry analyzed", extra={
            "entryId": entry.id, "suggestions": len(entry.vocab_suggestions),
        })
        return JournalAnalysis(
            optimized=analysis.optimized,
            analysis=analysis.analysis,
            vocab_suggestions=list(analysis.vocab_suggestions),
        )

    def entries(self) -> list[JournalEntry]:
        return self.store.get(slots.JOURNALS)

    def save_suggestion(self, suggestion: VocabSuggestion) -> VocabItem:
        """Save a suggested word as an important vocabulary item."""
        if not suggestion.word or not suggestion.word.strip():
            raise EmptyInputError("Suggested word is empty")
        details = WordDetails(
            word=suggestion.word,
            translation=suggestion.translation,
            definition=suggestion.definition,
            example=suggestion.example,
        )
        return self.store.add_vocab(
            VocabItem.create(details, self.store.language, is_important=True)
        )
