"""Dictionary lookup service — AI lookup and promotion into the library.

Pipeline: lookup (gateway) → optional save as vocabulary (second gateway
call for full word details) or as grammar (stored directly).
"""

import logging

from domain.model.errors import EmptyQueryError
from domain.model.study_items import GrammarItem
from domain.model.vocabulary import DictionaryResult, VocabItem
from port.gateway import AIGatewayPort
from services.study_store import StudyStore

logger = logging.getLogger(__name__)


class DictionaryService:
    def __init__(self, gateway: AIGatewayPort, store: StudyStore):
        self.gateway = gateway
        self.store = store

    async def lookup(self, query: str) -> DictionaryResult:
        """Analyze a word or grammar point in the current language.

        Returns the gateway result unmodified.

        Raises:
            EmptyQueryError: If the query is blank.
            GatewayError: If the lookup fails.
        """
        if not query or not query.strip():
            raise EmptyQueryError("Query is empty")

        result = await self.gateway.lookup_term(self.store.language, query.strip())
        logger.debug("Dictionary lookup", extra={"query": query, "term": result.term})
        return result

    async def save_as_vocab(self, result: DictionaryResult) -> VocabItem:
        """Fetch full details for ``result.term`` and save it as an important word."""
        language = self.store.language
        details = await self.gateway.word_details(language, result.term)
        return self.store.add_vocab(VocabItem.create(details, language, is_important=True))

    def save_as_grammar(self, result: DictionaryResult) -> GrammarItem:
        item = GrammarItem.create(
            rule=result.term,
            explanation=result.definition,
            examples=[result.example],
            language=self.store.language,
        )
        return self.store.add_grammar(item)
