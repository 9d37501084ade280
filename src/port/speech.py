"""Speech ports — outbound interfaces for synthesis and recognition."""

from typing import Protocol


class SpeechSynthesisPort(Protocol):
    """Port for text-to-speech engines."""

    def synthesize(self, text: str, locale: str) -> bytes:
        """Render ``text`` as MP3 audio in the given locale (e.g. "ja-JP")."""
        ...

    def cancel(self) -> None:
        """Stop any in-progress utterance. No-op when idle."""
        ...


class SpeechRecognitionPort(Protocol):
    """Port for single-shot speech-to-text engines."""

    def transcribe(self, audio: bytes, locale: str) -> str | None:
        """Return the final transcript, or None if nothing was recognized."""
        ...


class SpeechError(Exception):
    """Speech provider failed (network or decoding error)."""
