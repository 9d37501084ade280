"""In-memory implementations of the speech ports for testing."""


class FakeSpeechSynthesizer:
    def __init__(self):
        self.spoken: list[tuple[str, str]] = []
        self.cancel_count = 0

    def synthesize(self, text: str, locale: str) -> bytes:
        self.spoken.append((text, locale))
        return f"{locale}:{text}".encode("utf-8")

    def cancel(self) -> None:
        self.cancel_count += 1


class FakeSpeechRecognizer:
    def __init__(self, transcript: str | None = "hello"):
        self.transcript = transcript
        self.calls: list[tuple[bytes, str]] = []

    def transcribe(self, audio: bytes, locale: str) -> str | None:
        self.calls.append((audio, locale))
        return self.transcript
