"""Prompt templates for LLM interactions.

Each builder returns the prompt text for one gateway task. The JSON
schema the reply must follow is appended by the gateway adapter.
"""

import json

DEFAULT_SYSTEM_LANGUAGE = "Traditional Chinese"


def build_dictionary_lookup_prompt(
    language: str, query: str, system_language: str = DEFAULT_SYSTEM_LANGUAGE,
) -> str:
    """Build prompt for analyzing a word or a grammar point.

    Args:
        language: Target language being learned (e.g., "Japanese").
        query: Word or grammar point typed by the learner.
        system_language: Language used for explanations.
    """
    return f"""Analyze the input: "{query}" for a {language} learner.
If it's a word, provide definition, POS, related grammar rules, and example sentences.
If it's a grammar point, explain it and list related vocabulary.
System language: {system_language}."""


def build_word_details_prompt(language: str, word: str) -> str:
    """Build prompt for full dictionary details of a single word."""
    return f"""Detail analysis of {language} word: "{word}".
Include translation, definition, pronunciation, common collocations,
usage context, and one example sentence."""


def build_tutor_system_prompt(language: str, scenario_title: str) -> str:
    """Build the system instruction for a scenario roleplay tutor.

    Learner input is omni-lingual: a mix of Chinese, English and the
    target language.
    """
    return f"""You are a native {language} tutor. Scene: {scenario_title}.
User input is Omni-Lingual (Mixed CN/EN/{language}).
Response logic:
1. If user practices {language}: Roleplay + Correction.
2. If user asks for help (CN/EN): Translate + Explain + Continue roleplay.
Split your message into tokens (word by word) with part of speech, gloss and grammar note.
Only include "correction" when the user's {language} needs a grammar correction.
Return JSON strictly matching the provided schema."""


def build_journal_prompt(
    language: str, content: str, system_language: str = DEFAULT_SYSTEM_LANGUAGE,
) -> str:
    """Build prompt for native-izing a mixed-language journal entry."""
    return f"""Process this journal for a {language} learner.
Input: "{content}" (Mixed languages).
Provide:
1. Optimized Native Version.
2. Detailed analysis (Grammar or translation choices).
3. Related vocabulary.
System language: {system_language}."""


def build_scenario_prompt(language: str, description: str) -> str:
    """Build prompt for generating a custom practice scenario."""
    return f"""Create a {language} practice scenario for: "{description}".
Give it a short title, a Font Awesome icon name (e.g. "fa-plane"),
a one-sentence description, and a cheat sheet of 4 useful phrases."""


def build_story_prompt(language: str, words: list[str]) -> str:
    """Build prompt for a short story reusing saved vocabulary."""
    return (
        f"Write a short {language} story using these words: {', '.join(words)}. "
        "Return plain text story."
    )


def with_json_schema(prompt: str, schema: dict) -> str:
    """Append the response schema and a JSON-only instruction to a prompt."""
    return (
        f"{prompt}\n\n"
        "Respond with JSON only, no explanation, matching this JSON schema:\n"
        f"{json.dumps(schema, ensure_ascii=False)}"
    )
