"""Tests for conversation (dojo) routes."""

import unittest

from api.tests.route_case import RouteTestCase
from domain.model.chat import Correction, TutorReply, WordToken
from domain.model.errors import GatewayError


class TestDojoRoutes(RouteTestCase):

    def setUp(self):
        super().setUp()
        self.gateway.reply = TutorReply(
            message="ご注文は？",
            native_subtitle="要點什麼？",
            tokens=[WordToken(text="ご注文", pos="noun", definition="order")],
            correction=Correction(original="a", suggested="b", explanation="c"),
        )
        self.session_id = self.client.post("/dojo/sessions").json()["id"]

    def test_create_session_lists_built_ins(self):
        data = self.client.get(f"/dojo/sessions/{self.session_id}/scenarios").json()

        self.assertEqual([s["id"] for s in data], ["coffee", "checkin", "emergency", "casual"])

    def test_new_session_is_idle(self):
        response = self.client.post("/dojo/sessions")

        self.assertFalse(response.json()["in_flight"])

    def test_end_session(self):
        response = self.client.delete(f"/dojo/sessions/{self.session_id}")

        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.client.get(f"/dojo/sessions/{self.session_id}/messages").status_code, 404)
        self.assertEqual(self.client.delete(f"/dojo/sessions/{self.session_id}").status_code, 404)

    def test_unknown_session_is_404(self):
        response = self.client.get("/dojo/sessions/nope/messages")

        self.assertEqual(response.status_code, 404)

    def test_send_without_scenario_is_400(self):
        response = self.client.post(
            f"/dojo/sessions/{self.session_id}/messages", json={"text": "hi"},
        )

        self.assertEqual(response.status_code, 400)

    def test_chat_flow(self):
        selected = self.client.put(
            f"/dojo/sessions/{self.session_id}/scenario", json={"scenario_id": "coffee"},
        ).json()
        self.assertEqual(selected["active_scenario_id"], "coffee")

        reply = self.client.post(
            f"/dojo/sessions/{self.session_id}/messages", json={"text": "コーヒー"},
        )
        self.assertEqual(reply.status_code, 200)
        self.assertEqual(reply.json()["role"], "assistant")
        self.assertEqual(reply.json()["tokens"][0]["definition"], "order")
        self.assertEqual(reply.json()["correction"]["suggested"], "b")

        transcript = self.client.get(f"/dojo/sessions/{self.session_id}/messages").json()
        self.assertEqual([m["role"] for m in transcript["messages"]], ["user", "assistant"])
        self.assertTrue(transcript["cheat_sheet"])

        saved = self.client.post(
            f"/dojo/sessions/{self.session_id}/sentences/save",
            json={"message_id": reply.json()["id"]},
        )
        self.assertEqual(saved.status_code, 200)
        self.assertEqual(saved.json()["analysis"], "From Dojo Chat")

    def test_blank_message_is_400(self):
        self.client.put(f"/dojo/sessions/{self.session_id}/scenario", json={"scenario_id": "coffee"})

        response = self.client.post(f"/dojo/sessions/{self.session_id}/messages", json={"text": " "})

        self.assertEqual(response.status_code, 400)

    def test_gateway_failure_is_502_and_keeps_user_message(self):
        self.client.put(f"/dojo/sessions/{self.session_id}/scenario", json={"scenario_id": "coffee"})
        self.gateway.error = GatewayError("AI request failed")

        response = self.client.post(f"/dojo/sessions/{self.session_id}/messages", json={"text": "hi"})

        self.assertEqual(response.status_code, 502)
        transcript = self.client.get(f"/dojo/sessions/{self.session_id}/messages").json()
        self.assertEqual([m["content"] for m in transcript["messages"]], ["hi"])

    def test_custom_scenario(self):
        response = self.client.post(
            f"/dojo/sessions/{self.session_id}/scenarios", json={"prompt": "airport"},
        )

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.json()["is_custom"])
        scenarios = self.client.get(f"/dojo/sessions/{self.session_id}/scenarios").json()
        self.assertEqual(scenarios[0]["id"], response.json()["id"])

    def test_save_token(self):
        response = self.client.post(
            f"/dojo/sessions/{self.session_id}/tokens/save", json={"text": "注文"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["is_important"])


if __name__ == '__main__':
    unittest.main()
