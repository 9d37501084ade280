"""Runtime configuration read from environment variables.

Values are read on each call so a ``.env`` loaded at startup (or a
patched environment in tests) is always honored.
"""

import os
from pathlib import Path

from adapter.gateway.llm_gateway import DEFAULT_MODEL, DEFAULT_TIMEOUT_SECONDS
from utils.prompts import DEFAULT_SYSTEM_LANGUAGE

DEFAULT_DATA_DIR = "~/.polyglot"
DEFAULT_PORT = 8000


def llm_model() -> str:
    return os.getenv("POLYGLOT_LLM_MODEL", DEFAULT_MODEL)


def llm_timeout() -> float:
    raw = os.getenv("POLYGLOT_LLM_TIMEOUT")
    try:
        return float(raw) if raw else DEFAULT_TIMEOUT_SECONDS
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS


def data_dir() -> Path:
    """Directory holding the JSON snapshot file."""
    return Path(os.getenv("POLYGLOT_DATA_DIR", DEFAULT_DATA_DIR)).expanduser()


def system_language() -> str:
    """Language used for explanations and subtitles."""
    return os.getenv("POLYGLOT_SYSTEM_LANGUAGE", DEFAULT_SYSTEM_LANGUAGE)


def mongo_enabled() -> bool:
    return bool(os.getenv("MONGO_URL"))


def speech_recognition_enabled() -> bool:
    """POLYGLOT_SPEECH_RECOGNITION=0 turns transcription off."""
    return os.getenv("POLYGLOT_SPEECH_RECOGNITION", "1").lower() not in ("0", "false", "no")


def cors_origins() -> str | list[str]:
    """"*" or an explicit list parsed from a comma-separated CORS_ORIGINS."""
    raw = os.getenv("CORS_ORIGINS", "*")
    if raw.strip() == "*":
        return "*"
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def port() -> int:
    return int(os.getenv("PORT", DEFAULT_PORT))
