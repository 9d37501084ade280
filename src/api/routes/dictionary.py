"""Dictionary API routes.

Endpoints:
- POST /dictionary/lookup: AI analysis of a word or grammar point
- POST /dictionary/save-vocab: Save a lookup result as a vocabulary item
- POST /dictionary/save-grammar: Save a lookup result as a grammar item
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_dictionary_service
from api.errors import to_http
from api.models import DictionaryResultModel, GrammarResponse, LookupRequest, VocabResponse
from domain.model.errors import DomainError
from services.dictionary_service import DictionaryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dictionary", tags=["dictionary"])


@router.post("/lookup", response_model=DictionaryResultModel)
async def lookup(
    request: LookupRequest,
    service: DictionaryService = Depends(get_dictionary_service),
):
    try:
        result = await service.lookup(request.query)
    except DomainError as e:
        raise to_http(e) from e
    return DictionaryResultModel.from_domain(result)


@router.post("/save-vocab", response_model=VocabResponse)
async def save_vocab(
    request: DictionaryResultModel,
    service: DictionaryService = Depends(get_dictionary_service),
):
    try:
        item = await service.save_as_vocab(request.to_domain())
    except DomainError as e:
        raise to_http(e) from e
    logger.info("Vocabulary saved from dictionary", extra={"vocabId": item.id, "word": item.word})
    return VocabResponse.model_validate(item)


@router.post("/save-grammar", response_model=GrammarResponse)
async def save_grammar(
    request: DictionaryResultModel,
    service: DictionaryService = Depends(get_dictionary_service),
):
    try:
        item = service.save_as_grammar(request.to_domain())
    except DomainError as e:
        raise to_http(e) from e
    return GrammarResponse.model_validate(item)
