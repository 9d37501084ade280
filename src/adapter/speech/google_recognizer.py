"""SpeechRecognition adapter — implements SpeechRecognitionPort.

Transcribes a WAV/AIFF/FLAC clip with the Google Web Speech API.
"""

import io
import logging

import speech_recognition as sr

from port.speech import SpeechError

logger = logging.getLogger(__name__)


class GoogleSpeechRecognizer:
    def __init__(self):
        self.recognizer = sr.Recognizer()

    def transcribe(self, audio: bytes, locale: str) -> str | None:
        try:
            with sr.AudioFile(io.BytesIO(audio)) as source:
                audio_data = self.recognizer.record(source)
        except ValueError as e:
            raise SpeechError(f"Unsupported audio format: {e}") from e

        try:
            text = self.recognizer.recognize_google(audio_data, language=locale)
        except sr.UnknownValueError:
            logger.info("Speech was not understood", extra={"locale": locale})
            return None
        except sr.RequestError as e:
            logger.error("Speech recognition request failed", extra={
                "locale": locale, "error": str(e),
            })
            raise SpeechError(str(e)) from e

        return text or None
