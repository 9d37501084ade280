"""Language Value Object.

Encapsulates the target languages a learner can study and the
speech locale used for synthesis and recognition.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    """Immutable value object representing a supported target language."""

    name: str
    code: str
    locale: str
    flag: str = ""

    @property
    def speech_lang(self) -> str:
        """Two-letter language tag accepted by gTTS (e.g. "ja")."""
        return self.locale.split("-")[0]


# ── Language instances ────────────────────────────────────────

FINNISH = Language(name="Finnish", code="fi", locale="fi-FI", flag="🇫🇮")
GERMAN = Language(name="German", code="de", locale="de-DE", flag="🇩🇪")
JAPANESE = Language(name="Japanese", code="ja", locale="ja-JP", flag="🇯🇵")
SWEDISH = Language(name="Swedish", code="sv", locale="sv-SE", flag="🇸🇪")
KOREAN = Language(name="Korean", code="ko", locale="ko-KR", flag="🇰🇷")
ENGLISH = Language(name="English", code="en", locale="en-US", flag="🇺🇸")

DEFAULT_LANGUAGE = JAPANESE
FALLBACK_LOCALE = "en-US"


# ── Registry ──────────────────────────────────────────────────

LANGUAGES: dict[str, Language] = {
    lang.name: lang
    for lang in (
        FINNISH, GERMAN, JAPANESE, SWEDISH, KOREAN, ENGLISH,
    )
}


def get_language(name: str) -> Language | None:
    """Look up a Language by its full name (e.g., "Japanese").

    Returns None for unsupported or unknown language names.
    """
    return LANGUAGES.get(name)


def locale_for(name: str) -> str:
    """Speech locale for a language name, falling back to en-US."""
    lang = get_language(name)
    return lang.locale if lang else FALLBACK_LOCALE
