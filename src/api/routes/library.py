"""Library (knowledge base) API routes.

Endpoints:
- GET /library/vocab, /library/sentences, /library/grammar: Current-language lists (optional ?q=)
- POST /library/vocab: Quick-add a word
- PATCH /library/vocab/{id}: Set or toggle review flags
- DELETE /library/{kind}/{id}: Delete an item
- POST /library/story: Story from selected words
- GET /library/pending: Pending review count
"""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_knowledge_service, get_store
from api.errors import to_http
from api.models import (
    GrammarResponse,
    PendingResponse,
    QuickAddRequest,
    SentenceResponse,
    StoryRequest,
    StoryResponse,
    VocabFlagsRequest,
    VocabResponse,
)
from domain.model import library as slots
from domain.model.errors import DomainError
from services.knowledge_service import KnowledgeService
from services.study_store import StudyStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/library", tags=["library"])


@router.get("/vocab", response_model=list[VocabResponse])
async def list_vocab(
    q: str = "",
    service: KnowledgeService = Depends(get_knowledge_service),
):
    vocab, _ = service.search(q)
    return [VocabResponse.model_validate(v) for v in vocab]


@router.get("/sentences", response_model=list[SentenceResponse])
async def list_sentences(
    q: str = "",
    service: KnowledgeService = Depends(get_knowledge_service),
):
    _, sentences = service.search(q)
    return [SentenceResponse.model_validate(s) for s in sentences]


@router.get("/grammar", response_model=list[GrammarResponse])
async def list_grammar(
    q: str = "",
    store: StudyStore = Depends(get_store),
):
    grammar = store.items_for_language(slots.GRAMMAR)
    if q:
        grammar = [g for g in grammar if q.lower() in g.rule.lower() or q in g.explanation]
    return [GrammarResponse.model_validate(g) for g in grammar]


@router.post("/vocab", response_model=VocabResponse, status_code=status.HTTP_201_CREATED)
async def quick_add(
    request: QuickAddRequest,
    service: KnowledgeService = Depends(get_knowledge_service),
):
    try:
        item = await service.quick_add(request.word)
    except DomainError as e:
        raise to_http(e) from e
    return VocabResponse.model_validate(item)


@router.patch("/vocab/{vocab_id}", response_model=VocabResponse)
async def update_vocab_flags(
    vocab_id: str,
    request: VocabFlagsRequest,
    service: KnowledgeService = Depends(get_knowledge_service),
):
    try:
        item = service.store.find_vocab(vocab_id)
        if request.toggle_important:
            item = service.toggle_important(vocab_id)
        if request.is_important is not None:
            item = service.set_important(vocab_id, request.is_important)
        if request.is_mistake is not None:
            item = service.set_mistake(vocab_id, request.is_mistake)
    except DomainError as e:
        raise to_http(e) from e
    return VocabResponse.model_validate(item)


@router.delete("/{kind}/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    kind: str,
    item_id: str,
    service: KnowledgeService = Depends(get_knowledge_service),
):
    try:
        service.delete(kind, item_id)
    except DomainError as e:
        raise to_http(e) from e
    logger.info("Library item deleted", extra={"kind": kind, "itemId": item_id})


@router.post("/story", response_model=StoryResponse)
async def generate_story(
    request: StoryRequest,
    service: KnowledgeService = Depends(get_knowledge_service),
):
    try:
        story = await service.generate_story(request.ids)
    except DomainError as e:
        raise to_http(e) from e
    return StoryResponse(story=story)


@router.get("/pending", response_model=PendingResponse)
async def pending_review_count(
    service: KnowledgeService = Depends(get_knowledge_service),
):
    return PendingResponse(count=service.pending_review_count())
