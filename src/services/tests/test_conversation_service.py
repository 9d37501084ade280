"""Unit tests for ConversationSession."""

import asyncio
import unittest

from adapter.fake.gateway import FakeGateway, failing_gateway
from adapter.fake.snapshot_store import InMemorySnapshotStore
from domain.model.chat import Correction, Role, TutorReply, WordToken
from domain.model.errors import (
    EmptyInputError,
    GatewayError,
    NoScenarioSelectedError,
    NotFoundError,
    RequestInFlightError,
    ValidationError,
)
from domain.model.scenario import BUILT_IN_SCENARIOS
from services.conversation_service import ConversationSession
from services.study_store import StudyStore


def make_store() -> StudyStore:
    store = StudyStore(InMemorySnapshotStore())
    store.load()
    return store


class TestScenarios(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.gateway = FakeGateway()
        self.store = make_store()
        self.session = ConversationSession(self.gateway, self.store)

    def test_starts_with_built_in_scenarios(self):
        self.assertEqual(
            [s.id for s in self.session.scenarios],
            [s.id for s in BUILT_IN_SCENARIOS],
        )
        self.assertIsNone(self.session.active)
        self.assertEqual(self.session.cheat_sheet(), [])

    def test_select_scenario(self):
        target = BUILT_IN_SCENARIOS[0]

        selected = self.session.select_scenario(target.id)

        self.assertEqual(selected, target)
        self.assertEqual(self.session.cheat_sheet(), list(target.cheat_sheet))

    def test_select_unknown_scenario_raises(self):
        with self.assertRaises(NotFoundError):
            self.session.select_scenario('nope')

    async def test_create_custom_scenario_prepends_and_selects(self):
        scenario = await self.session.create_custom_scenario('At the airport')

        self.assertTrue(scenario.is_custom)
        self.assertTrue(scenario.id.startswith('custom-'))
        self.assertEqual(self.session.scenarios[0], scenario)
        self.assertEqual(self.session.active, scenario)
        self.assertEqual(self.gateway.calls[0][1]['description'], 'At the airport')

    async def test_create_custom_scenario_blank_raises(self):
        with self.assertRaises(EmptyInputError):
            await self.session.create_custom_scenario('   ')
        self.assertEqual(self.gateway.calls, [])

    async def test_create_custom_scenario_failure_adds_nothing(self):
        session = ConversationSession(failing_gateway(), self.store)

        with self.assertRaises(GatewayError):
            await session.create_custom_scenario('At the airport')

        self.assertEqual(len(session.scenarios), len(BUILT_IN_SCENARIOS))
        self.assertIsNone(session.active)


class TestSendMessage(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        reply = TutorReply(
            message='いらっしゃいませ',
            native_subtitle='歡迎光臨',
            tokens=[WordToken(text='いらっしゃいませ', pos='phrase', definition='welcome')],
            correction=Correction(original='コーヒーをください', suggested='コーヒーをお願いします',
                                  explanation='more polite'),
        )
        self.gateway = FakeGateway(reply=reply)
        self.store = make_store()
        self.session = ConversationSession(self.gateway, self.store)
        self.session.select_scenario('coffee')

    async def test_blank_message_appends_nothing(self):
        with self.assertRaises(EmptyInputError):
            await self.session.send_message('')

        self.assertEqual(self.session.transcript(), [])
        self.assertEqual(self.gateway.calls, [])

    async def test_no_scenario_selected_raises(self):
        session = ConversationSession(self.gateway, self.store)

        with self.assertRaises(NoScenarioSelectedError):
            await session.send_message('hello')

    async def test_send_appends_user_and_assistant(self):
        reply = await self.session.send_message('コーヒーをください')

        transcript = self.session.transcript()
        self.assertEqual([m.role for m in transcript], [Role.USER, Role.ASSISTANT])
        self.assertEqual(transcript[0].content, 'コーヒーをください')
        self.assertEqual(reply.content, 'いらっしゃいませ')
        self.assertEqual(reply.translation, '歡迎光臨')
        self.assertEqual(reply.correction.suggested, 'コーヒーをお願いします')
        self.assertEqual(len(reply.tokens), 1)

    async def test_send_passes_prior_transcript_and_scenario(self):
        await self.session.send_message('first')
        await self.session.send_message('second')

        _, kwargs = self.gateway.calls[-1]
        self.assertEqual(kwargs['user_message'], 'second')
        self.assertEqual(kwargs['history'], [
            {'role': 'user', 'content': 'first'},
            {'role': 'assistant', 'content': 'いらっしゃいませ'},
        ])
        self.assertEqual(kwargs['scenario_title'], self.session.active.title)
        self.assertEqual(kwargs['language'], 'Japanese')

    async def test_failure_keeps_user_message_and_session_usable(self):
        self.gateway.error = GatewayError('boom')

        with self.assertRaises(GatewayError):
            await self.session.send_message('hello')

        transcript = self.session.transcript()
        self.assertEqual(len(transcript), 1)
        self.assertEqual(transcript[0].content, 'hello')
        self.assertFalse(self.session.in_flight)

        self.gateway.error = None
        await self.session.send_message('again')
        self.assertEqual(len(self.session.transcript()), 3)

    async def test_second_send_while_in_flight_is_rejected(self):
        self.gateway.gate = asyncio.Event()
        first = asyncio.create_task(self.session.send_message('one'))
        await asyncio.sleep(0)

        with self.assertRaises(RequestInFlightError):
            await self.session.send_message('two')
        with self.assertRaises(EmptyInputError):
            await self.session.send_message('two')

        self.gateway.gate.set()
        await first
        self.assertEqual(
            [m.content for m in self.session.transcript()],
            ['one', 'いらっしゃいませ'],
        )

    async def test_selecting_scenario_starts_fresh_transcript(self):
        await self.session.send_message('hello')

        self.session.select_scenario('casual')

        self.assertEqual(self.session.transcript(), [])

    async def test_scenario_change_while_in_flight_is_rejected(self):
        self.gateway.gate = asyncio.Event()
        pending = asyncio.create_task(self.session.send_message('コーヒーをください'))
        await asyncio.sleep(0)

        with self.assertRaises(RequestInFlightError):
            self.session.select_scenario('checkin')
        with self.assertRaises(RequestInFlightError):
            await self.session.create_custom_scenario('At the airport')

        self.gateway.gate.set()
        await pending
        self.assertEqual(self.session.active.id, 'coffee')
        self.assertEqual(
            [m.role for m in self.session.transcript()],
            [Role.USER, Role.ASSISTANT],
        )

    async def test_reply_stays_with_transcript_it_answers(self):
        self.gateway.gate = asyncio.Event()
        creating = asyncio.create_task(self.session.create_custom_scenario('At the airport'))
        await asyncio.sleep(0)
        sending = asyncio.create_task(self.session.send_message('hello'))
        await asyncio.sleep(0)

        self.gateway.gate.set()
        scenario = await creating
        await sending

        self.assertEqual(self.session.active, scenario)
        self.assertEqual(self.session.transcript(), [])


class TestSaving(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.gateway = FakeGateway()
        self.store = make_store()
        self.session = ConversationSession(self.gateway, self.store)
        self.session.select_scenario('coffee')

    async def test_save_token_stores_important_vocab(self):
        item = await self.session.save_token(WordToken(text='コーヒー'))

        self.assertEqual(item.word, 'コーヒー')
        self.assertTrue(item.is_important)
        self.assertFalse(item.is_mistake)
        self.assertEqual(item.language, 'Japanese')
        self.assertEqual(self.store.get('vocab'), [item])

    async def test_save_sentence_stores_assistant_message(self):
        reply = await self.session.send_message('hello')

        item = self.session.save_sentence(reply.id)

        self.assertEqual(item.original, reply.content)
        self.assertEqual(item.translation, reply.translation)
        self.assertEqual(item.analysis, 'From Dojo Chat')
        self.assertEqual(self.store.get('sentences'), [item])

    async def test_save_sentence_rejects_user_message(self):
        await self.session.send_message('hello')
        user_message = self.session.transcript()[0]

        with self.assertRaises(ValidationError):
            self.session.save_sentence(user_message.id)


if __name__ == '__main__':
    unittest.main()
