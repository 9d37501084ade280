"""Unit tests for domain-error → HTTP mapping and the session registry."""

import unittest

from adapter.fake.gateway import FakeGateway
from adapter.fake.snapshot_store import InMemorySnapshotStore
from api.errors import to_http
from api.sessions import SessionRegistry
from domain.model.errors import (
    DomainError,
    EmptyInputError,
    EmptyQueryError,
    GatewayError,
    ImportFormatError,
    NotFoundError,
    RecognitionBusyError,
    RequestInFlightError,
    SessionStateError,
    StorageError,
    UnsupportedCapabilityError,
    ValidationError,
)
from domain.model.review import ReviewConfig, ReviewSession
from services.conversation_service import ConversationSession
from services.study_store import StudyStore


class TestToHttp(unittest.TestCase):

    def test_status_codes(self):
        cases = [
            (EmptyInputError("x"), 400),
            (EmptyQueryError("x"), 400),
            (RequestInFlightError("x"), 409),
            (GatewayError("x"), 502),
            (ImportFormatError("x"), 400),
            (UnsupportedCapabilityError("x"), 501),
            (RecognitionBusyError("x"), 409),
            (NotFoundError("x"), 404),
            (ValidationError("x"), 400),
            (SessionStateError("x"), 409),
            (StorageError("x"), 503),
            (DomainError("x"), 500),
        ]
        for error, expected in cases:
            with self.subTest(error=type(error).__name__):
                self.assertEqual(to_http(error).status_code, expected)

    def test_detail_is_message(self):
        self.assertEqual(to_http(NotFoundError("Scenario not found: x")).detail, "Scenario not found: x")


class TestSessionRegistry(unittest.TestCase):

    def setUp(self):
        self.registry = SessionRegistry()

    def test_review_lifecycle(self):
        session = self.registry.add_review(ReviewSession.start(ReviewConfig(), []))

        self.assertIs(self.registry.get_review(session.id), session)
        self.registry.discard_review(session.id)
        with self.assertRaises(NotFoundError):
            self.registry.get_review(session.id)
        with self.assertRaises(NotFoundError):
            self.registry.discard_review(session.id)

    def test_conversation_and_clear(self):
        store = StudyStore(InMemorySnapshotStore())
        session = self.registry.add_conversation(ConversationSession(FakeGateway(), store))

        self.assertIs(self.registry.get_conversation(session.id), session)
        self.registry.clear()
        with self.assertRaises(NotFoundError):
            self.registry.get_conversation(session.id)

    def test_discard_conversation(self):
        store = StudyStore(InMemorySnapshotStore())
        session = self.registry.add_conversation(ConversationSession(FakeGateway(), store))

        self.registry.discard_conversation(session.id)

        self.assertEqual(self.registry.conversation_count(), 0)
        with self.assertRaises(NotFoundError):
            self.registry.discard_conversation(session.id)


class TestSessionExpiry(unittest.TestCase):

    def setUp(self):
        self.now = [0.0]
        self.store = StudyStore(InMemorySnapshotStore())

    def make_registry(self, **kwargs) -> SessionRegistry:
        return SessionRegistry(clock=lambda: self.now[0], **kwargs)

    def test_idle_session_expires(self):
        registry = self.make_registry(ttl_seconds=10)
        session = registry.add_conversation(ConversationSession(FakeGateway(), self.store))

        self.now[0] = 8
        self.assertIs(registry.get_conversation(session.id), session)
        self.now[0] = 16
        self.assertIs(registry.get_conversation(session.id), session)
        self.now[0] = 27

        with self.assertRaises(NotFoundError):
            registry.get_conversation(session.id)
        self.assertEqual(registry.conversation_count(), 0)

    def test_expired_sessions_pruned_on_add(self):
        registry = self.make_registry(ttl_seconds=10)
        registry.add_conversation(ConversationSession(FakeGateway(), self.store))
        self.now[0] = 11

        registry.add_conversation(ConversationSession(FakeGateway(), self.store))

        self.assertEqual(registry.conversation_count(), 1)

    def test_capacity_drops_least_recently_used(self):
        registry = self.make_registry(max_sessions=2)
        first = registry.add_conversation(ConversationSession(FakeGateway(), self.store))
        second = registry.add_conversation(ConversationSession(FakeGateway(), self.store))
        registry.get_conversation(first.id)

        third = registry.add_conversation(ConversationSession(FakeGateway(), self.store))

        self.assertEqual(registry.conversation_count(), 2)
        self.assertIs(registry.get_conversation(first.id), first)
        self.assertIs(registry.get_conversation(third.id), third)
        with self.assertRaises(NotFoundError):
            registry.get_conversation(second.id)

    def test_finished_reviews_dropped_when_new_review_starts(self):
        registry = self.make_registry()
        finished = registry.add_review(ReviewSession.start(ReviewConfig(), []))

        registry.add_review(ReviewSession.start(ReviewConfig(), []))

        self.assertEqual(registry.review_count(), 1)
        with self.assertRaises(NotFoundError):
            registry.get_review(finished.id)


if __name__ == '__main__':
    unittest.main()
