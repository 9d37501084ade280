"""Settings API routes: language selection, backup and factory reset.

Endpoints:
- GET/PUT /settings/language: Current target language
- GET /settings/export: Backup document with the four lists
- POST /settings/import: Replace the slots present in a backup
- POST /settings/reset: Clear everything (requires {"confirm": true})
"""

import logging

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_session_registry, get_store
from api.errors import to_http
from api.models import ImportResponse, LanguageRequest, LanguageResponse, ResetRequest
from api.sessions import SessionRegistry
from domain.model.errors import DomainError, ValidationError
from domain.model.language import LANGUAGES, locale_for
from services.study_store import StudyStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


def _language_response(store: StudyStore) -> LanguageResponse:
    return LanguageResponse(
        language=store.language,
        locale=locale_for(store.language),
        available=list(LANGUAGES),
    )


@router.get("/language", response_model=LanguageResponse)
async def get_language(store: StudyStore = Depends(get_store)):
    return _language_response(store)


@router.put("/language", response_model=LanguageResponse)
async def set_language(
    request: LanguageRequest,
    store: StudyStore = Depends(get_store),
):
    """Switch the target language; saved items keep their own language."""
    try:
        store.set_language(request.language)
    except DomainError as e:
        raise to_http(e) from e
    logger.info("Language changed", extra={"language": request.language})
    return _language_response(store)


@router.get("/export")
async def export_backup(store: StudyStore = Depends(get_store)):
    """Backup document bundling vocab, sentences, grammar and journals."""
    return store.export_backup()


@router.post("/import", response_model=ImportResponse)
async def import_backup(
    request: Request,
    store: StudyStore = Depends(get_store),
):
    """Import a backup document sent as the raw JSON body."""
    body = await request.body()
    try:
        replaced = store.import_backup(body)
    except DomainError as e:
        raise to_http(e) from e
    return ImportResponse(replaced=replaced)


@router.post("/reset")
async def factory_reset(
    request: ResetRequest,
    store: StudyStore = Depends(get_store),
    registry: SessionRegistry = Depends(get_session_registry),
):
    if not request.confirm:
        raise to_http(ValidationError("Factory reset must be confirmed"))
    try:
        store.factory_reset()
    except DomainError as e:
        raise to_http(e) from e
    registry.clear()
    return {"status": "reset"}
