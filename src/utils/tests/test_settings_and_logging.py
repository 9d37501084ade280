"""Unit tests for environment settings and the JSON log formatter."""

import json
import logging
import os
import unittest
from pathlib import Path
from unittest.mock import patch

from utils import settings
from utils.logging import JSONFormatter


class TestSettings(unittest.TestCase):

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        self.assertEqual(settings.llm_model(), "gemini/gemini-2.5-flash")
        self.assertEqual(settings.llm_timeout(), 30.0)
        self.assertEqual(settings.data_dir(), Path("~/.polyglot").expanduser())
        self.assertEqual(settings.system_language(), "Traditional Chinese")
        self.assertFalse(settings.mongo_enabled())
        self.assertTrue(settings.speech_recognition_enabled())
        self.assertEqual(settings.cors_origins(), "*")
        self.assertEqual(settings.port(), 8000)

    @patch.dict(os.environ, {
        "POLYGLOT_LLM_MODEL": "openai/gpt-4.1-mini",
        "POLYGLOT_LLM_TIMEOUT": "12.5",
        "POLYGLOT_DATA_DIR": "/tmp/polyglot-test",
        "MONGO_URL": "mongodb://localhost:27017",
        "POLYGLOT_SPEECH_RECOGNITION": "0",
        "CORS_ORIGINS": "https://a.example, https://b.example",
    }, clear=True)
    def test_overrides(self):
        self.assertEqual(settings.llm_model(), "openai/gpt-4.1-mini")
        self.assertEqual(settings.llm_timeout(), 12.5)
        self.assertEqual(settings.data_dir(), Path("/tmp/polyglot-test"))
        self.assertTrue(settings.mongo_enabled())
        self.assertFalse(settings.speech_recognition_enabled())
        self.assertEqual(settings.cors_origins(), ["https://a.example", "https://b.example"])

    @patch.dict(os.environ, {"POLYGLOT_LLM_TIMEOUT": "soon"}, clear=True)
    def test_invalid_timeout_falls_back(self):
        self.assertEqual(settings.llm_timeout(), 30.0)


class TestJSONFormatter(unittest.TestCase):

    def test_extra_fields_and_unicode(self):
        record = logging.LogRecord(
            name="services.study_store", level=logging.INFO, pathname=__file__,
            lineno=1, msg="Saved %s", args=("犬",), exc_info=None,
        )
        record.sessionId = "abc"

        data = json.loads(JSONFormatter().format(record))

        self.assertEqual(data["message"], "Saved 犬")
        self.assertEqual(data["level"], "INFO")
        self.assertEqual(data["logger"], "services.study_store")
        self.assertEqual(data["sessionId"], "abc")
        self.assertIn("犬", JSONFormatter().format(record))

    def test_non_serializable_extra_is_stringified(self):
        record = logging.LogRecord(
            name="x", level=logging.WARNING, pathname=__file__,
            lineno=1, msg="path", args=(), exc_info=None,
        )
        record.path = Path("/tmp/a")

        data = json.loads(JSONFormatter().format(record))

        self.assertEqual(data["path"], "/tmp/a")


if __name__ == '__main__':
    unittest.main()
