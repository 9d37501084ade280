"""Tests for review session routes."""

import unittest

from api.tests.route_case import RouteTestCase
from domain.model.study_items import GrammarItem
from domain.model.vocabulary import VocabItem, WordDetails


class TestReviewRoutes(RouteTestCase):

    def _add(self, word: str, **flags) -> VocabItem:
        return self.store.add_vocab(
            VocabItem.create(WordDetails(word=word, translation=f"{word}!"), "Japanese", **flags)
        )

    def test_start_with_empty_pool(self):
        response = self.client.post("/review/sessions", json={})

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data["state"], "empty")
        self.assertEqual(data["total"], 0)
        self.assertIsNone(data["card"])

    def test_full_session_flow(self):
        item = self._add("犬", is_important=True, is_mistake=True)

        session = self.client.post("/review/sessions", json={}).json()
        self.assertEqual(session["state"], "in_progress")
        self.assertEqual(session["card"]["front"], "犬")
        self.assertEqual(session["card"]["mode_label"], "單詞模式")

        flipped = self.client.post(f"/review/sessions/{session['id']}/flip").json()
        self.assertTrue(flipped["flipped"])

        graded = self.client.post(
            f"/review/sessions/{session['id']}/grade", json={"remembered": True},
        ).json()
        self.assertEqual(graded["state"], "completed")
        self.assertFalse(self.store.find_vocab(item.id).is_mistake)

        again = self.client.post(
            f"/review/sessions/{session['id']}/grade", json={"remembered": True},
        )
        self.assertEqual(again.status_code, 409)

    def test_grammar_passes_only_important(self):
        self.store.add_grammar(GrammarItem.create("〜が", "subject", [], "Japanese"))

        data = self.client.post("/review/sessions", json={
            "include_vocab": False, "include_grammar": True, "only_important": True,
        }).json()

        self.assertEqual(data["total"], 1)
        self.assertEqual(data["card"]["back"], "語法解析")

    def test_get_and_discard(self):
        self._add("犬", is_important=True)
        session_id = self.client.post("/review/sessions", json={}).json()["id"]

        self.assertEqual(self.client.get(f"/review/sessions/{session_id}").status_code, 200)
        self.assertEqual(self.client.delete(f"/review/sessions/{session_id}").status_code, 204)
        self.assertEqual(self.client.get(f"/review/sessions/{session_id}").status_code, 404)


if __name__ == '__main__':
    unittest.main()
