"""Journal API routes.

Endpoints:
- POST /journal/analyze: Native-ize an entry and store it
- GET /journal: Stored entries, newest first
- POST /journal/suggestions/save: Save a suggested word as vocabulary
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_journal_service
from api.errors import to_http
from api.models import (
    JournalAnalysisResponse,
    JournalEntryResponse,
    JournalRequest,
    VocabResponse,
    VocabSuggestionModel,
)
from domain.model.errors import DomainError
from domain.model.journal import VocabSuggestion
from services.journal_service import JournalService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/journal", tags=["journal"])


@router.post("/analyze", response_model=JournalAnalysisResponse)
async def analyze(
    request: JournalRequest,
    service: JournalService = Depends(get_journal_service),
):
    try:
        analysis = await service.analyze(request.content)
    except DomainError as e:
        raise to_http(e) from e
    return JournalAnalysisResponse.from_domain(analysis)


@router.get("", response_model=list[JournalEntryResponse])
async def list_entries(service: JournalService = Depends(get_journal_service)):
    return [JournalEntryResponse.from_domain(e) for e in service.entries()]


@router.post("/suggestions/save", response_model=VocabResponse)
async def save_suggestion(
    request: VocabSuggestionModel,
    service: JournalService = Depends(get_journal_service),
):
    try:
        item = service.save_suggestion(VocabSuggestion(**request.model_dump()))
    except DomainError as e:
        raise to_http(e) from e
    return VocabResponse.model_validate(item)
