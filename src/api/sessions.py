"""In-memory registry of live review and conversation sessions.

Sessions are per-process and never persisted. Entries expire after
SESSION_TTL_SECONDS without access, and each kind is capped at
MAX_SESSIONS (least recently used dropped first). Finished review
sessions are dropped whenever a new review starts.
"""

import logging
import time
from collections import OrderedDict
from typing import Callable, Generic, TypeVar

from domain.model.errors import NotFoundError
from domain.model.review import ReviewSession
from services.conversation_service import ConversationSession

logger = logging.getLogger(__name__)

SESSION_TTL_SECONDS = 2 * 60 * 60
MAX_SESSIONS = 200

S = TypeVar("S")


class _SessionTable(Generic[S]):
    """Session id → (session, last access), kept in access order."""

    def __init__(self, kind: str, ttl_seconds: float, max_sessions: int,
                 clock: Callable[[], float]):
        self.kind = kind
        self.ttl_seconds = ttl_seconds
        self.max_sessions = max_sessions
        self._clock = clock
        self._entries: OrderedDict[str, tuple[S, float]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, session_id: str, session: S) -> S:
        self.prune()
        self._entries[session_id] = (session, self._clock())
        while len(self._entries) > self.max_sessions:
            evicted, _ = self._entries.popitem(last=False)
            logger.info("Session evicted (capacity)", extra={"kind": self.kind, "sessionId": evicted})
        return session

    def get(self, session_id: str) -> S:
        entry = self._entries.get(session_id)
        if entry is None or self._expired(entry[1]):
            self._entries.pop(session_id, None)
            raise NotFoundError(f"{self.kind.capitalize()} session not found: {session_id}")
        session = entry[0]
        self._entries[session_id] = (session, self._clock())
        self._entries.move_to_end(session_id)
        return session

    def discard(self, session_id: str) -> None:
        if self._entries.pop(session_id, None) is None:
            raise NotFoundError(f"{self.kind.capitalize()} session not found: {session_id}")

    def prune(self, should_drop: Callable[[S], bool] | None = None) -> None:
        """Drop expired entries, plus any for which ``should_drop`` is true."""
        stale = [
            session_id for session_id, (session, touched) in self._entries.items()
            if self._expired(touched) or (should_drop is not None and should_drop(session))
        ]
        for session_id in stale:
            del self._entries[session_id]
        if stale:
            logger.debug("Sessions pruned", extra={"kind": self.kind, "count": len(stale)})

    def clear(self) -> None:
        self._entries.clear()

    def _expired(self, touched: float) -> bool:
        return self._clock() - touched > self.ttl_seconds


class SessionRegistry:
    def __init__(
        self,
        ttl_seconds: float = SESSION_TTL_SECONDS,
        max_sessions: int = MAX_SESSIONS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._reviews: _SessionTable[ReviewSession] = _SessionTable(
            "review", ttl_seconds, max_sessions, clock,
        )
        self._conversations: _SessionTable[ConversationSession] = _SessionTable(
            "conversation", ttl_seconds, max_sessions, clock,
        )

    # ── review ────────────────────────────────────────────

    def add_review(self, session: ReviewSession) -> ReviewSession:
        self._reviews.prune(lambda s: s.is_finished)
        return self._reviews.add(session.id, session)

    def get_review(self, session_id: str) -> ReviewSession:
        return self._reviews.get(session_id)

    def discard_review(self, session_id: str) -> None:
        self._reviews.discard(session_id)

    def review_count(self) -> int:
        return len(self._reviews)

    # ── conversation ──────────────────────────────────────

    def add_conversation(self, session: ConversationSession) -> ConversationSession:
        return self._conversations.add(session.id, session)

    def get_conversation(self, session_id: str) -> ConversationSession:
        return self._conversations.get(session_id)

    def discard_conversation(self, session_id: str) -> None:
        self._conversations.discard(session_id)

    def conversation_count(self) -> int:
        return len(self._conversations)

    def clear(self) -> None:
        self._reviews.clear()
        self._conversations.clear()
