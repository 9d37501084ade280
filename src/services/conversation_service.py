"""Conversation service — scenario-based tutor chat ("Dojo").

A ConversationSession owns a working list of scenarios (built-ins plus
custom ones generated during the session) and an append-only transcript.
Neither is persisted; only words and sentences the learner saves reach
the study store.
"""

import logging

from domain.model.chat import ChatMessage, Role, WordToken
from domain.model.errors import (
    EmptyInputError,
    NoScenarioSelectedError,
    NotFoundError,
    RequestInFlightError,
    ValidationError,
)
from domain.model.identity import new_id
from domain.model.scenario import BUILT_IN_SCENARIOS, Scenario
from domain.model.study_items import SentenceItem
from domain.model.vocabulary import VocabItem
from port.gateway import AIGatewayPort
from services.study_store import StudyStore

logger = logging.getLogger(__name__)

SAVED_SENTENCE_ANALYSIS = "From Dojo Chat"


class ConversationSession:
    """One chat session; at most one tutor request is in flight at a time."""

    def __init__(self, gateway: AIGatewayPort, store: StudyStore):
        self.id = new_id()
        self.gateway = gateway
        self.store = store
        self.scenarios: list[Scenario] = list(BUILT_IN_SCENARIOS)
        self.active: Scenario | None = None
        self._transcript: list[ChatMessage] = []
        self._in_flight = False

    # ── queries ───────────────────────────────────────────

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def transcript(self) -> list[ChatMessage]:
        return list(self._transcript)

    def cheat_sheet(self) -> list[str]:
        if self.active is None:
            return []
        return list(self.active.cheat_sheet)

    def find_message(self, message_id: str) -> ChatMessage:
        for message in self._transcript:
            if message.id == message_id:
                return message
        raise NotFoundError(f"Message not found: {message_id}")

    # ── scenarios ─────────────────────────────────────────

    def select_scenario(self, scenario_id: str) -> Scenario:
        """Activate a scenario and start a fresh transcript.

        Raises:
            RequestInFlightError: If a tutor reply is still pending.
            NotFoundError: If the id is not in the working list.
        """
        self._require_idle("change the scenario")
        for scenario in self.scenarios:
            if scenario.id == scenario_id:
                self.active = scenario
                self._transcript = []
                return scenario
        raise NotFoundError(f"Scenario not found: {scenario_id}")

    async def create_custom_scenario(self, prompt: str) -> Scenario:
        """Generate a scenario from free text, prepend it and select it.

        Raises:
            EmptyInputError: If the prompt is blank.
            RequestInFlightError: If a tutor reply is still pending.
            GatewayError: If generation fails; the working list is unchanged.
        """
        if not prompt or not prompt.strip():
            raise EmptyInputError("Scenario description is empty")
        self._require_idle("change the scenario")

        scenario = await self.gateway.create_scenario(self.store.language, prompt.strip())

        self.scenarios.insert(0, scenario)
        self.active = scenario
        self._transcript = []
        logger.info("Custom scenario created", extra={
            "sessionId": self.id, "scenarioId": scenario.id, "title": scenario.title,
        })
        return scenario

    # ── chat ──────────────────────────────────────────────

    async def send_message(self, text: str) -> ChatMessage:
        """Send a learner message and append the tutor's reply.

        The user message is appended before the gateway call and stays in
        the transcript if the call fails.

        Raises:
            EmptyInputError: If the text is blank.
            RequestInFlightError: If a reply is still pending.
            NoScenarioSelectedError: If no scenario is active.
            GatewayError: If the tutor reply fails.
        """
        if not text or not text.strip():
            raise EmptyInputError("Message is empty")
        self._require_idle("send a message")
        if self.active is None:
            raise NoScenarioSelectedError("Select a scenario before chatting")

        # The reply belongs to the transcript the user message went into
        transcript = self._transcript
        history = [m.as_history() for m in transcript]
        transcript.append(ChatMessage.from_user(text))

        self._in_flight = True
        try:
            reply = await self.gateway.tutor_reply(
                self.store.language, history, text, self.active.title,
            )
        except Exception as e:
            logger.warning("Tutor reply failed", extra={
                "sessionId": self.id, "error": str(e),
            })
            raise
        finally:
            self._in_flight = False

        message = ChatMessage.from_reply(reply)
        transcript.append(message)
        return message

    # ── saving to the library ─────────────────────────────

    async def save_token(self, token: WordToken) -> VocabItem:
        """Fetch full details for a tapped word and save it as important."""
        if not token.text or not token.text.strip():
            raise EmptyInputError("Word is empty")
        language = self.store.language
        details = await self.gateway.word_details(language, token.text.strip())
        return self.store.add_vocab(VocabItem.create(details, language, is_important=True))

    def save_sentence(self, message_id: str) -> SentenceItem:
        """Save an assistant message as a sentence item."""
        message = self.find_message(message_id)
        if message.role is not Role.ASSISTANT:
            raise ValidationError("Only tutor messages can be saved as sentences")
        item = SentenceItem.create(
            original=message.content,
            translation=message.translation or "",
            analysis=SAVED_SENTENCE_ANALYSIS,
            language=self.store.language,
        )
        return self.store.add_sentence(item)

    def _require_idle(self, action: str) -> None:
        if self._in_flight:
            raise RequestInFlightError(f"Cannot {action} while a reply is pending")
