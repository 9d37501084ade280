"""Conversation ("Dojo") API routes.

Endpoints:
- POST /dojo/sessions: New conversation session
- DELETE /dojo/sessions/{id}: End a conversation session
- GET/POST /dojo/sessions/{id}/scenarios: Working scenario list / create custom
- PUT /dojo/sessions/{id}/scenario: Select a scenario
- GET/POST /dojo/sessions/{id}/messages: Transcript / send a message
- POST /dojo/sessions/{id}/tokens/save: Save a tapped word as vocabulary
- POST /dojo/sessions/{id}/sentences/save: Save a tutor message as a sentence
"""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_gateway, get_session_registry, get_store
from api.errors import to_http
from api.models import (
    ChatMessageModel,
    CustomScenarioRequest,
    DojoSessionResponse,
    MessageRequest,
    SaveSentenceRequest,
    ScenarioModel,
    SelectScenarioRequest,
    SentenceResponse,
    TranscriptResponse,
    VocabResponse,
    WordTokenModel,
)
from api.sessions import SessionRegistry
from domain.model.chat import WordToken
from domain.model.errors import DomainError
from port.gateway import AIGatewayPort
from services.conversation_service import ConversationSession
from services.study_store import StudyStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dojo/sessions", tags=["dojo"])


def _session_response(session: ConversationSession) -> DojoSessionResponse:
    return DojoSessionResponse(
        id=session.id,
        active_scenario_id=session.active.id if session.active else None,
        in_flight=session.in_flight,
        scenarios=[ScenarioModel.from_domain(s) for s in session.scenarios],
    )


def _get(registry: SessionRegistry, session_id: str) -> ConversationSession:
    try:
        return registry.get_conversation(session_id)
    except DomainError as e:
        raise to_http(e) from e


@router.post("", response_model=DojoSessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    gateway: AIGatewayPort = Depends(get_gateway),
    store: StudyStore = Depends(get_store),
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = registry.add_conversation(ConversationSession(gateway, store))
    logger.info("Conversation session created", extra={"sessionId": session.id})
    return _session_response(session)


@router.get("/{session_id}/scenarios", response_model=list[ScenarioModel])
async def list_scenarios(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = _get(registry, session_id)
    return [ScenarioModel.from_domain(s) for s in session.scenarios]


@router.post("/{session_id}/scenarios", response_model=ScenarioModel,
             status_code=status.HTTP_201_CREATED)
async def create_custom_scenario(
    session_id: str,
    request: CustomScenarioRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = _get(registry, session_id)
    try:
        scenario = await session.create_custom_scenario(request.prompt)
    except DomainError as e:
        raise to_http(e) from e
    return ScenarioModel.from_domain(scenario)


@router.put("/{session_id}/scenario", response_model=DojoSessionResponse)
async def select_scenario(
    session_id: str,
    request: SelectScenarioRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = _get(registry, session_id)
    try:
        session.select_scenario(request.scenario_id)
    except DomainError as e:
        raise to_http(e) from e
    return _session_response(session)


@router.get("/{session_id}/messages", response_model=TranscriptResponse)
async def get_transcript(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = _get(registry, session_id)
    return TranscriptResponse(
        messages=[ChatMessageModel.from_domain(m) for m in session.transcript()],
        cheat_sheet=session.cheat_sheet(),
    )


@router.post("/{session_id}/messages", response_model=ChatMessageModel)
async def send_message(
    session_id: str,
    request: MessageRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Send a message; returns the tutor's reply."""
    session = _get(registry, session_id)
    try:
        reply = await session.send_message(request.text)
    except DomainError as e:
        raise to_http(e) from e
    return ChatMessageModel.from_domain(reply)


@router.post("/{session_id}/tokens/save", response_model=VocabResponse)
async def save_token(
    session_id: str,
    request: WordTokenModel,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = _get(registry, session_id)
    token = WordToken(
        text=request.text, pos=request.pos, definition=request.definition, grammar=request.grammar,
    )
    try:
        item = await session.save_token(token)
    except DomainError as e:
        raise to_http(e) from e
    return VocabResponse.model_validate(item)


@router.post("/{session_id}/sentences/save", response_model=SentenceResponse)
async def save_sentence(
    session_id: str,
    request: SaveSentenceRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = _get(registry, session_id)
    try:
        item = session.save_sentence(request.message_id)
    except DomainError as e:
        raise to_http(e) from e
    return SentenceResponse.model_validate(item)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def end_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    try:
        registry.discard_conversation(session_id)
    except DomainError as e:
        raise to_http(e) from e
    logger.info("Conversation session ended", extra={"sessionId": session_id})
