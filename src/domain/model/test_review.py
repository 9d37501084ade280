"""Unit tests for the review domain model — pool filters and session state machine.

Tests focus on:
- build_pool include/only filters, including grammar passing only_important
- ReviewableItem flashcard faces per kind
- ReviewSession transitions (IN_PROGRESS → COMPLETED, EMPTY at start)
"""

import random
import unittest

from domain.model.errors import SessionStateError
from domain.model.review import (
    ReviewableItem,
    ReviewConfig,
    ReviewKind,
    ReviewSession,
    ReviewState,
    build_pool,
)
from domain.model.study_items import GrammarItem, SentenceItem
from domain.model.vocabulary import VocabItem, WordDetails


def vocab(word: str, **flags) -> VocabItem:
    return VocabItem.create(
        WordDetails(word=word, translation=f"{word}-t", definition=f"{word}-d", example=f"{word}-e"),
        'Japanese',
        **flags,
    )


SENTENCE = SentenceItem.create('犬が走る', 'The dog runs', 'SVO', 'Japanese')
GRAMMAR = [
    GrammarItem.create('〜は', 'topic marker', ['私は学生です'], 'Japanese'),
    GrammarItem.create('〜が', 'subject marker', ['犬が走る'], 'Japanese'),
]


class TestBuildPool(unittest.TestCase):

    def test_all_includes_off_gives_empty_pool(self):
        config = ReviewConfig(include_vocab=False, only_important=False)

        pool = build_pool(config, [vocab('犬')], [SENTENCE], GRAMMAR)

        self.assertEqual(pool, [])

    def test_only_important_keeps_all_grammar(self):
        """Grammar has no importance flag but always passes the filter."""
        config = ReviewConfig(include_vocab=False, include_grammar=True, only_important=True)

        pool = build_pool(config, [], [], GRAMMAR)

        self.assertEqual(sorted(i.id for i in pool), sorted(g.id for g in GRAMMAR))

    def test_only_important_drops_unflagged_vocab_and_sentences(self):
        important = vocab('犬', is_important=True)
        config = ReviewConfig(include_vocab=True, include_sentences=True, only_important=True)

        pool = build_pool(config, [important, vocab('猫')], [SENTENCE], [])

        self.assertEqual([i.id for i in pool], [important.id])

    def test_only_mistakes_on_sentences_and_grammar_is_empty(self):
        config = ReviewConfig(
            include_vocab=False, include_sentences=True, include_grammar=True,
            only_important=False, only_mistakes=True,
        )

        pool = build_pool(config, [], [SENTENCE], GRAMMAR)

        self.assertEqual(pool, [])

    def test_only_mistakes_keeps_flagged_vocab(self):
        mistake = vocab('犬', is_mistake=True)
        config = ReviewConfig(only_important=False, only_mistakes=True)

        pool = build_pool(config, [mistake, vocab('猫', is_important=True)], [], [])

        self.assertEqual([i.id for i in pool], [mistake.id])

    def test_shuffle_uses_injected_rng(self):
        items = [vocab(str(n), is_important=True) for n in range(20)]
        config = ReviewConfig()

        first = build_pool(config, items, [], [], rng=random.Random(42))
        second = build_pool(config, items, [], [], rng=random.Random(42))

        self.assertEqual([i.id for i in first], [i.id for i in second])
        self.assertEqual(sorted(i.id for i in first), sorted(v.id for v in items))


class TestReviewableItem(unittest.TestCase):

    def test_vocab_faces(self):
        item = ReviewableItem.of(vocab('犬'))

        self.assertEqual(item.kind, ReviewKind.VOCAB)
        self.assertEqual((item.front, item.back, item.detail, item.example),
                         ('犬', '犬-t', '犬-d', '犬-e'))
        self.assertEqual(item.mode_label, '單詞模式')

    def test_sentence_faces(self):
        item = ReviewableItem.of(SENTENCE)

        self.assertEqual(item.kind, ReviewKind.SENTENCE)
        self.assertEqual((item.front, item.back), ('犬が走る', 'The dog runs'))
        self.assertFalse(item.is_important)
        self.assertFalse(item.is_mistake)

    def test_grammar_faces(self):
        item = ReviewableItem.of(GRAMMAR[0])

        self.assertEqual(item.kind, ReviewKind.GRAMMAR)
        self.assertEqual(item.front, '〜は')
        self.assertEqual(item.back, '語法解析')
        self.assertEqual(item.detail, 'topic marker')

    def test_unknown_type_raises(self):
        with self.assertRaises(TypeError):
            ReviewableItem.of("not an item")


class TestReviewSession(unittest.TestCase):

    def test_empty_pool_starts_empty(self):
        session = ReviewSession.start(ReviewConfig(), [])

        self.assertEqual(session.state, ReviewState.EMPTY)
        self.assertTrue(session.is_finished)
        self.assertIsNone(session.current_item())
        with self.assertRaises(SessionStateError):
            session.advance()

    def test_n_items_complete_after_n_advances(self):
        pool = [ReviewableItem.of(vocab(w)) for w in ('一', '二', '三')]
        session = ReviewSession.start(ReviewConfig(), pool)

        graded = [session.advance().id for _ in range(3)]

        self.assertEqual(graded, [i.id for i in pool])
        self.assertEqual(session.state, ReviewState.COMPLETED)
        self.assertIsNone(session.current_item())
        self.assertEqual(session.position, 3)

    def test_flip_toggles_and_advance_resets(self):
        pool = [ReviewableItem.of(vocab(w)) for w in ('一', '二')]
        session = ReviewSession.start(ReviewConfig(), pool)

        session.flip()
        self.assertTrue(session.flipped)
        session.flip()
        self.assertFalse(session.flipped)
        session.flip()
        session.advance()

        self.assertFalse(session.flipped)
        self.assertEqual(session.position, 2)

    def test_flip_after_completion_raises(self):
        session = ReviewSession.start(ReviewConfig(), [ReviewableItem.of(vocab('一'))])
        session.advance()

        with self.assertRaises(SessionStateError):
            session.flip()


if __name__ == '__main__':
    unittest.main()
