"""Unit tests for SpeechService."""

import asyncio
import unittest
from unittest.mock import MagicMock

from adapter.fake.snapshot_store import InMemorySnapshotStore
from adapter.fake.speech import FakeSpeechRecognizer, FakeSpeechSynthesizer
from domain.model.errors import (
    EmptyInputError,
    GatewayError,
    RecognitionBusyError,
    UnsupportedCapabilityError,
)
from port.speech import SpeechError
from services import speech_service
from services.speech_service import SpeechService
from services.study_store import StudyStore


class TestSpeak(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.store = StudyStore(InMemorySnapshotStore())
        self.store.load()
        self.synth = FakeSpeechSynthesizer()
        self.service = SpeechService(self.synth, self.store)

    async def test_speak_uses_current_language_locale(self):
        self.store.set_language("Korean")

        audio = await self.service.speak("안녕하세요")

        self.assertEqual(audio, "ko-KR:안녕하세요".encode("utf-8"))
        self.assertEqual(self.synth.spoken, [("안녕하세요", "ko-KR")])

    async def test_speak_cancels_previous_utterance(self):
        await self.service.speak("一")
        await self.service.speak("二")

        self.assertEqual(self.synth.cancel_count, 2)

    async def test_superseded_utterance_returns_none(self):
        first = asyncio.create_task(self.service.speak("一"))
        second = asyncio.create_task(self.service.speak("二"))

        results = await asyncio.gather(first, second)

        self.assertIsNone(results[0])
        self.assertEqual(results[1], "ja-JP:二".encode("utf-8"))

    async def test_blank_text_raises(self):
        with self.assertRaises(EmptyInputError):
            await self.service.speak(" ")

    async def test_provider_error_becomes_gateway_error(self):
        synth = MagicMock()
        synth.synthesize.side_effect = SpeechError("offline")
        service = SpeechService(synth, self.store)

        with self.assertRaises(GatewayError):
            await service.speak("一")


class TestListen(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.store = StudyStore(InMemorySnapshotStore())
        self.store.load()

    async def test_listen_returns_transcript(self):
        recognizer = FakeSpeechRecognizer(transcript="こんにちは")
        service = SpeechService(FakeSpeechSynthesizer(), self.store, recognizer)

        text = await service.listen(b"RIFF")

        self.assertEqual(text, "こんにちは")
        self.assertEqual(recognizer.calls, [(b"RIFF", "ja-JP")])
        self.assertFalse(service.listening)

    async def test_unsupported_warns_once(self):
        service = SpeechService(FakeSpeechSynthesizer(), self.store)
        speech_service._unsupported_warned = False

        with self.assertLogs("services.speech_service", level="WARNING") as logs:
            for _ in range(3):
                with self.assertRaises(UnsupportedCapabilityError):
                    await service.listen(b"RIFF")

        self.assertEqual(len(logs.records), 1)

    async def test_listen_while_listening_is_rejected(self):
        service = SpeechService(FakeSpeechSynthesizer(), self.store, FakeSpeechRecognizer())
        service._listening = True

        with self.assertRaises(RecognitionBusyError):
            await service.listen(b"RIFF")

    async def test_empty_audio_raises(self):
        service = SpeechService(FakeSpeechSynthesizer(), self.store, FakeSpeechRecognizer())

        with self.assertRaises(EmptyInputError):
            await service.listen(b"")


if __name__ == '__main__':
    unittest.main()
