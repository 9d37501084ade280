"""Review service — runs flashcard sessions over the learner's library.

The engine itself holds no session state; sessions are passed in and
mutated in place. Grading is the only operation with a persisted side
effect (clearing a vocabulary item's mistake flag).
"""

import logging
import random

from domain.model import library as slots
from domain.model.errors import NotFoundError
from domain.model.review import (
    ReviewableItem,
    ReviewConfig,
    ReviewKind,
    ReviewSession,
    ReviewState,
    build_pool,
)
from domain.model.study_items import GrammarItem, SentenceItem
from domain.model.vocabulary import VocabItem
from services.study_store import StudyStore

logger = logging.getLogger(__name__)


class ReviewEngine:
    def __init__(self, store: StudyStore, rng: random.Random | None = None):
        self.store = store
        self.rng = rng

    @staticmethod
    def configure(
        include_vocab: bool = True,
        include_sentences: bool = False,
        include_grammar: bool = False,
        only_important: bool = True,
        only_mistakes: bool = False,
    ) -> ReviewConfig:
        return ReviewConfig(
            include_vocab=include_vocab,
            include_sentences=include_sentences,
            include_grammar=include_grammar,
            only_important=only_important,
            only_mistakes=only_mistakes,
        )

    def start(
        self,
        config: ReviewConfig,
        vocab: list[VocabItem] | None = None,
        sentences: list[SentenceItem] | None = None,
        grammar: list[GrammarItem] | None = None,
    ) -> ReviewSession:
        """Build the pool and start a session.

        Pools default to the store's items for the current language.
        """
        if vocab is None:
            vocab = self.store.items_for_language(slots.VOCAB)
        if sentences is None:
            sentences = self.store.items_for_language(slots.SENTENCES)
        if grammar is None:
            grammar = self.store.items_for_language(slots.GRAMMAR)

        pool = build_pool(config, vocab, sentences, grammar, rng=self.rng)
        session = ReviewSession.start(config, pool)
        logger.info("Review session started", extra={
            "sessionId": session.id,
            "total": session.total,
            "state": session.state.value,
        })
        return session

    @staticmethod
    def current_item(session: ReviewSession) -> ReviewableItem | None:
        return session.current_item()

    @staticmethod
    def flip(session: ReviewSession) -> bool:
        session.flip()
        return session.flipped

    def grade(self, session: ReviewSession, remembered: bool) -> ReviewableItem:
        """Grade the current card and advance.

        The mistake flag is persisted before the cursor moves, so a failed
        write leaves the session on the same card.

        Raises:
            SessionStateError: If the session is not in progress.
            StorageError: If clearing the mistake flag could not be saved.
        """
        current = session.current_item()
        if current is not None and remembered and current.kind is ReviewKind.VOCAB:
            try:
                self.store.update_vocab_flags(current.id, is_mistake=False)
            except NotFoundError:
                # Deleted from the library after the pool was built
                logger.info("Graded item no longer in library", extra={
                    "sessionId": session.id, "itemId": current.id,
                })
        graded = session.advance()
        if session.state is ReviewState.COMPLETED:
            logger.info("Review session completed", extra={
                "sessionId": session.id, "total": session.total,
            })
        return graded

    @staticmethod
    def reset() -> ReviewConfig:
        """Discard the current session; returns the default configuration."""
        return ReviewConfig()
