"""FastAPI dependency factories.

Stateful objects (the study store, speech service and session registry)
are created once per process; request-scoped services are cheap wrappers
around them. Tests replace any of these via ``app.dependency_overrides``.
"""

import logging

from fastapi import Depends

from adapter.external.litellm import LiteLLMAdapter
from adapter.gateway.llm_gateway import LLMGateway
from adapter.mongodb.connection import DATABASE_NAME, get_mongodb_client
from adapter.mongodb.snapshot_store import MongoSnapshotStore
from adapter.speech.google_recognizer import GoogleSpeechRecognizer
from adapter.speech.gtts_synthesizer import GTTSSynthesizer
from adapter.storage.json_file_store import JsonFileSnapshotStore
from api.sessions import SessionRegistry
from port.gateway import AIGatewayPort
from port.llm import LLMPort
from port.snapshot_store import SnapshotStorePort
from services.dictionary_service import DictionaryService
from services.journal_service import JournalService
from services.knowledge_service import KnowledgeService
from services.review_service import ReviewEngine
from services.speech_service import SpeechService
from services.study_store import StudyStore
from utils import settings

logger = logging.getLogger(__name__)

_store: StudyStore | None = None
_speech_service: SpeechService | None = None
_registry = SessionRegistry()


def get_snapshot_port() -> SnapshotStorePort:
    """MongoDB when configured and reachable, otherwise the JSON file."""
    if settings.mongo_enabled():
        client = get_mongodb_client()
        if client is not None:
            return MongoSnapshotStore(client[DATABASE_NAME])
        logger.warning("MongoDB unavailable, falling back to JSON file store")
    return JsonFileSnapshotStore(settings.data_dir())


def get_store() -> StudyStore:
    global _store
    if _store is None:
        _store = StudyStore(get_snapshot_port())
        _store.load()
    return _store


def get_llm_port() -> LLMPort:
    return LiteLLMAdapter()


def get_gateway(llm: LLMPort = Depends(get_llm_port)) -> AIGatewayPort:
    return LLMGateway(
        llm,
        model=settings.llm_model(),
        timeout=settings.llm_timeout(),
        system_language=settings.system_language(),
    )


def get_session_registry() -> SessionRegistry:
    return _registry


def get_speech_service(store: StudyStore = Depends(get_store)) -> SpeechService:
    global _speech_service
    if _speech_service is None:
        recognizer = GoogleSpeechRecognizer() if settings.speech_recognition_enabled() else None
        _speech_service = SpeechService(GTTSSynthesizer(), store, recognizer)
    return _speech_service


def get_dictionary_service(
    gateway: AIGatewayPort = Depends(get_gateway),
    store: StudyStore = Depends(get_store),
) -> DictionaryService:
    return DictionaryService(gateway, store)


def get_journal_service(
    gateway: AIGatewayPort = Depends(get_gateway),
    store: StudyStore = Depends(get_store),
) -> JournalService:
    return JournalService(gateway, store)


def get_knowledge_service(
    gateway: AIGatewayPort = Depends(get_gateway),
    store: StudyStore = Depends(get_store),
) -> KnowledgeService:
    return KnowledgeService(gateway, store)


def get_review_engine(store: StudyStore = Depends(get_store)) -> ReviewEngine:
    return ReviewEngine(store)
