"""Speech service — text-to-speech playback and single-shot recognition.

Provider calls are blocking and run in a worker thread. At most one
utterance is active: starting a new one cancels the previous one, and a
superseded utterance's audio is discarded. At most one recognition runs
at a time.
"""

import asyncio
import logging

from domain.model.errors import (
    EmptyInputError,
    GatewayError,
    RecognitionBusyError,
    UnsupportedCapabilityError,
)
from domain.model.language import locale_for
from port.speech import SpeechError, SpeechRecognitionPort, SpeechSynthesisPort
from services.study_store import StudyStore

logger = logging.getLogger(__name__)

# Logged once per process when recognition is unavailable
_unsupported_warned = False


class SpeechService:
    def __init__(
        self,
        synthesizer: SpeechSynthesisPort,
        store: StudyStore,
        recognizer: SpeechRecognitionPort | None = None,
    ):
        self.synthesizer = synthesizer
        self.recognizer = recognizer
        self.store = store
        self._generation = 0
        self._listening = False

    @property
    def listening(self) -> bool:
        return self._listening

    async def speak(self, text: str) -> bytes | None:
        """Synthesize ``text`` in the current language's locale.

        Returns:
            MP3 bytes, or None if a newer utterance superseded this one
            while it was being synthesized.
        """
        if not text or not text.strip():
            raise EmptyInputError("Nothing to speak")

        self.synthesizer.cancel()
        self._generation += 1
        generation = self._generation
        locale = locale_for(self.store.language)

        try:
            audio = await asyncio.to_thread(self.synthesizer.synthesize, text, locale)
        except SpeechError as e:
            raise GatewayError(f"Speech synthesis failed: {e}") from e

        if generation != self._generation:
            logger.debug("Utterance superseded", extra={"generation": generation})
            return None
        return audio

    async def listen(self, audio: bytes) -> str | None:
        """Transcribe one recorded clip; returns at most one final transcript.

        Raises:
            UnsupportedCapabilityError: If no recognizer is configured.
            RecognitionBusyError: If a recognition is already running.
        """
        global _unsupported_warned
        if self.recognizer is None:
            if not _unsupported_warned:
                logger.warning("Speech recognition is not available on this server")
                _unsupported_warned = True
            raise UnsupportedCapabilityError("Speech recognition is not supported")
        if self._listening:
            raise RecognitionBusyError("Speech recognition is already running")
        if not audio:
            raise EmptyInputError("Audio clip is empty")

        self._listening = True
        try:
            return await asyncio.to_thread(
                self.recognizer.transcribe, audio, locale_for(self.store.language),
            )
        except SpeechError as e:
            raise GatewayError(f"Speech recognition failed: {e}") from e
        finally:
            self._listening = False
