"""Speech API routes.

Endpoints:
- POST /speech/speak: MP3 audio for a text in the current language
- POST /speech/listen: Transcript of an uploaded WAV/AIFF/FLAC clip (raw body)
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from api.dependencies import get_speech_service
from api.errors import to_http
from api.models import ListenResponse, SpeakRequest
from domain.model.errors import DomainError
from services.speech_service import SpeechService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/speech", tags=["speech"])


@router.post("/speak")
async def speak(
    request: SpeakRequest,
    service: SpeechService = Depends(get_speech_service),
):
    """MP3 audio; 204 when a newer utterance superseded this one."""
    try:
        audio = await service.speak(request.text)
    except DomainError as e:
        raise to_http(e) from e
    if audio is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return Response(content=audio, media_type="audio/mpeg")


@router.post("/listen", response_model=ListenResponse)
async def listen(
    request: Request,
    service: SpeechService = Depends(get_speech_service),
):
    audio = await request.body()
    try:
        transcript = await service.listen(audio)
    except DomainError as e:
        raise to_http(e) from e
    return ListenResponse(transcript=transcript)
