# domain/model/review.py

"""Review session domain model — reviewable pool and flip/grade state machine.

State machine::

    CONFIGURING → IN_PROGRESS → COMPLETED
                └──────────────→ EMPTY

COMPLETED and EMPTY are terminal; returning to CONFIGURING means
discarding the session and starting over.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from domain.model.errors import SessionStateError
from domain.model.identity import new_id
from domain.model.study_items import GrammarItem, SentenceItem
from domain.model.vocabulary import VocabItem


class ReviewState(str, Enum):
    """Enumeration of review session states."""
    CONFIGURING = 'configuring'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    EMPTY = 'empty'


class ReviewKind(str, Enum):
    """Discriminant of the reviewable item union."""
    VOCAB = 'vocab'
    SENTENCE = 'sentence'
    GRAMMAR = 'grammar'


# Card mode labels shown above the flashcard
MODE_LABELS = {
    ReviewKind.VOCAB: '單詞模式',
    ReviewKind.SENTENCE: '句型模式',
    ReviewKind.GRAMMAR: '語法模式',
}


@dataclass(frozen=True)
class ReviewConfig:
    """Operator-chosen pool filters."""
    include_vocab: bool = True
    include_sentences: bool = False
    include_grammar: bool = False
    only_important: bool = True
    only_mistakes: bool = False


# ── Reviewable item (tagged union) ───────────────────────


StudyItem = Union[VocabItem, SentenceItem, GrammarItem]


@dataclass(frozen=True)
class ReviewableItem:
    """A vocab, sentence or grammar item tagged with its kind."""
    kind: ReviewKind
    item: StudyItem

    @classmethod
    def of(cls, item: StudyItem) -> ReviewableItem:
        if isinstance(item, VocabItem):
            return cls(ReviewKind.VOCAB, item)
        if isinstance(item, SentenceItem):
            return cls(ReviewKind.SENTENCE, item)
        if isinstance(item, GrammarItem):
            return cls(ReviewKind.GRAMMAR, item)
        raise TypeError(f"Not a reviewable item: {type(item).__name__}")

    @property
    def id(self) -> str:
        return self.item.id

    @property
    def is_important(self) -> bool:
        # Only vocabulary carries review flags
        return self.kind is ReviewKind.VOCAB and self.item.is_important

    @property
    def is_mistake(self) -> bool:
        return self.kind is ReviewKind.VOCAB and self.item.is_mistake

    @property
    def mode_label(self) -> str:
        return MODE_LABELS[self.kind]

    # ── flashcard faces ──────────────────────────────────

    @property
    def front(self) -> str:
        if self.kind is ReviewKind.VOCAB:
            return self.item.word
        if self.kind is ReviewKind.SENTENCE:
            return self.item.original
        return self.item.rule

    @property
    def back(self) -> str:
        if self.kind is ReviewKind.GRAMMAR:
            return '語法解析'
        return self.item.translation

    @property
    def detail(self) -> str:
        if self.kind is ReviewKind.VOCAB:
            return self.item.definition
        if self.kind is ReviewKind.GRAMMAR:
            return self.item.explanation
        return ""

    @property
    def example(self) -> str:
        if self.kind is ReviewKind.VOCAB:
            return self.item.example
        if self.kind is ReviewKind.SENTENCE:
            return self.item.analysis
        return ""


def build_pool(
    config: ReviewConfig,
    vocab: list[VocabItem],
    sentences: list[SentenceItem],
    grammar: list[GrammarItem],
    rng: random.Random | None = None,
) -> list[ReviewableItem]:
    """Build the filtered, shuffled review pool.

    Grammar items have no importance flag and always pass the
    only_important filter. Sentence and grammar items never pass
    only_mistakes.
    """
    pool: list[ReviewableItem] = []
    if config.include_vocab:
        pool.extend(ReviewableItem.of(v) for v in vocab)
    if config.include_sentences:
        pool.extend(ReviewableItem.of(s) for s in sentences)
    if config.include_grammar:
        pool.extend(ReviewableItem.of(g) for g in grammar)

    if config.only_important:
        pool = [i for i in pool if i.is_important or i.kind is ReviewKind.GRAMMAR]
    if config.only_mistakes:
        pool = [i for i in pool if i.is_mistake]

    (rng or random.Random()).shuffle(pool)
    return pool


# ── Review Session ───────────────────────────────────────


@dataclass
class ReviewSession:
    """A started review session over a fixed pool."""
    config: ReviewConfig
    items: tuple[ReviewableItem, ...]
    state: ReviewState
    id: str = field(default_factory=new_id)
    cursor: int = 0
    flipped: bool = False

    # ── factory ───────────────────────────────────────────

    @staticmethod
    def start(config: ReviewConfig, pool: list[ReviewableItem]) -> ReviewSession:
        """Start a session; an empty pool goes straight to EMPTY."""
        state = ReviewState.IN_PROGRESS if pool else ReviewState.EMPTY
        return ReviewSession(config=config, items=tuple(pool), state=state)

    # ── queries ───────────────────────────────────────────

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def position(self) -> int:
        """1-based position of the current card."""
        return min(self.cursor + 1, self.total)

    @property
    def is_finished(self) -> bool:
        return self.state in (ReviewState.COMPLETED, ReviewState.EMPTY)

    def current_item(self) -> ReviewableItem | None:
        if self.state is not ReviewState.IN_PROGRESS:
            return None
        return self.items[self.cursor]

    # ── state transitions ─────────────────────────────────

    def flip(self) -> None:
        self._require_in_progress("flip")
        self.flipped = not self.flipped

    def advance(self) -> ReviewableItem:
        """Move past the current card and return it."""
        self._require_in_progress("grade")
        graded = self.items[self.cursor]
        self.cursor += 1
        self.flipped = False
        if self.cursor >= self.total:
            self.state = ReviewState.COMPLETED
        return graded

    def _require_in_progress(self, action: str) -> None:
        if self.state is not ReviewState.IN_PROGRESS:
            raise SessionStateError(f"Cannot {action} a session in state '{self.state.value}'")
