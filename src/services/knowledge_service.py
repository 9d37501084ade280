"""Knowledge base service — the learner's word book.

Quick-add, search, flag toggles, deletion and story generation over the
current language's library.
"""

import logging

from domain.model import library as slots
from domain.model.errors import EmptyInputError, ValidationError
from domain.model.study_items import SentenceItem
from domain.model.vocabulary import VocabItem
from port.gateway import AIGatewayPort
from services.study_store import StudyStore

logger = logging.getLogger(__name__)

# Minimum number of selected words for story generation
MIN_STORY_WORDS = 3


class KnowledgeService:
    def __init__(self, gateway: AIGatewayPort, store: StudyStore):
        self.gateway = gateway
        self.store = store

    async def quick_add(self, word: str) -> VocabItem:
        """Look up a word and add it (not flagged important)."""
        if not word or not word.strip():
            raise EmptyInputError("Word is empty")
        language = self.store.language
        details = await self.gateway.word_details(language, word.strip())
        return self.store.add_vocab(VocabItem.create(details, language))

    def search(self, term: str = "") -> tuple[list[VocabItem], list[SentenceItem]]:
        """Current-language vocab and sentences containing ``term``."""
        vocab = self.store.items_for_language(slots.VOCAB)
        sentences = self.store.items_for_language(slots.SENTENCES)
        if not term:
            return vocab, sentences
        return (
            [v for v in vocab if v.matches(term)],
            [s for s in sentences if s.matches(term)],
        )

    def toggle_important(self, item_id: str) -> VocabItem:
        item = self.store.find_vocab(item_id)
        return self.store.update_vocab_flags(item_id, is_important=not item.is_important)

    def set_important(self, item_id: str, value: bool) -> VocabItem:
        return self.store.update_vocab_flags(item_id, is_important=value)

    def set_mistake(self, item_id: str, value: bool) -> VocabItem:
        return self.store.update_vocab_flags(item_id, is_mistake=value)

    def delete(self, kind: str, item_id: str) -> None:
        self.store.delete(kind, item_id)

    async def generate_story(self, ids: list[str]) -> str:
        """Write a short story using the selected vocabulary words.

        Raises:
            ValidationError: If fewer than three known words are selected.
            GatewayError: If generation fails.
        """
        selected = set(ids)
        words = [v.word for v in self.store.get(slots.VOCAB) if v.id in selected]
        if len(words) < MIN_STORY_WORDS:
            raise ValidationError(f"Select at least {MIN_STORY_WORDS} words for a story")

        story = await self.gateway.generate_story(self.store.language, words)
        logger.info("Story generated", extra={"words": len(words)})
        return story

    def pending_review_count(self) -> int:
        return self.store.pending_review_count()
