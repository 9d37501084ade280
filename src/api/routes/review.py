"""Review (flashcard) API routes.

Endpoints:
- POST /review/sessions: Start a session from pool filters
- GET /review/sessions/{id}: Current card and progress
- POST /review/sessions/{id}/flip: Turn the card over
- POST /review/sessions/{id}/grade: Grade the card and advance
- DELETE /review/sessions/{id}: Discard the session
"""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_review_engine, get_session_registry
from api.errors import to_http
from api.models import GradeRequest, ReviewSessionResponse, ReviewStartRequest
from api.sessions import SessionRegistry
from domain.model.errors import DomainError
from services.review_service import ReviewEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/review/sessions", tags=["review"])


@router.post("", response_model=ReviewSessionResponse, status_code=status.HTTP_201_CREATED)
async def start_session(
    request: ReviewStartRequest,
    engine: ReviewEngine = Depends(get_review_engine),
    registry: SessionRegistry = Depends(get_session_registry),
):
    config = engine.configure(**request.model_dump())
    session = registry.add_review(engine.start(config))
    return ReviewSessionResponse.from_domain(session)


@router.get("/{session_id}", response_model=ReviewSessionResponse)
async def get_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    try:
        session = registry.get_review(session_id)
    except DomainError as e:
        raise to_http(e) from e
    return ReviewSessionResponse.from_domain(session)


@router.post("/{session_id}/flip", response_model=ReviewSessionResponse)
async def flip_card(
    session_id: str,
    engine: ReviewEngine = Depends(get_review_engine),
    registry: SessionRegistry = Depends(get_session_registry),
):
    try:
        session = registry.get_review(session_id)
        engine.flip(session)
    except DomainError as e:
        raise to_http(e) from e
    return ReviewSessionResponse.from_domain(session)


@router.post("/{session_id}/grade", response_model=ReviewSessionResponse)
async def grade_card(
    session_id: str,
    request: GradeRequest,
    engine: ReviewEngine = Depends(get_review_engine),
    registry: SessionRegistry = Depends(get_session_registry),
):
    try:
        session = registry.get_review(session_id)
        engine.grade(session, request.remembered)
    except DomainError as e:
        raise to_http(e) from e
    return ReviewSessionResponse.from_domain(session)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    try:
        registry.discard_review(session_id)
    except DomainError as e:
        raise to_http(e) from e
