"""LLM gateway adapter — implements AIGatewayPort on top of LLMPort.

Each task builds a prompt, appends the task's JSON schema, calls the
LLM, repairs/parses the JSON reply and validates it against the schema.
Any failure along the way surfaces as GatewayError.
"""

import logging
from typing import TypeVar

from json_repair import repair_json
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from adapter.gateway.schemas import (
    DictionaryLookupSchema,
    JournalAnalysisSchema,
    ScenarioSchema,
    TutorReplySchema,
    WordDetailsSchema,
    response_schema,
)
from domain.model.chat import TutorReply
from domain.model.errors import GatewayError
from domain.model.journal import JournalAnalysis
from domain.model.scenario import Scenario
from domain.model.vocabulary import DictionaryResult, WordDetails
from port.llm import ChatMessage, LLMError, LLMPort
from utils.prompts import (
    DEFAULT_SYSTEM_LANGUAGE,
    build_dictionary_lookup_prompt,
    build_journal_prompt,
    build_scenario_prompt,
    build_story_prompt,
    build_tutor_system_prompt,
    build_word_details_prompt,
    with_json_schema,
)

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

DEFAULT_MODEL = "gemini/gemini-2.5-flash"
DEFAULT_TIMEOUT_SECONDS = 30.0
JSON_RESPONSE_FORMAT = {"type": "json_object"}


class LLMGateway:
    """AI gateway backed by an LLM port."""

    def __init__(
        self,
        llm: LLMPort,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        system_language: str = DEFAULT_SYSTEM_LANGUAGE,
    ):
        self.llm = llm
        self.model = model
        self.timeout = timeout
        self.system_language = system_language

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    async def lookup_term(self, language: str, query: str) -> DictionaryResult:
        prompt = build_dictionary_lookup_prompt(language, query, self.system_language)
        parsed = await self._generate_json(
            "lookup_term", DictionaryLookupSchema, _user_prompt(prompt, DictionaryLookupSchema),
        )
        return parsed.to_domain()

    async def word_details(self, language: str, word: str) -> WordDetails:
        prompt = build_word_details_prompt(language, word)
        parsed = await self._generate_json(
            "word_details", WordDetailsSchema, _user_prompt(prompt, WordDetailsSchema),
        )
        return parsed.to_domain()

    async def tutor_reply(
        self,
        language: str,
        history: list[dict[str, str]],
        user_message: str,
        scenario_title: str,
    ) -> TutorReply:
        system = with_json_schema(
            build_tutor_system_prompt(language, scenario_title),
            response_schema(TutorReplySchema),
        )
        messages = [{"role": "system", "content": system}]
        messages.extend({"role": h["role"], "content": h["content"]} for h in history)
        messages.append({"role": "user", "content": user_message})

        parsed = await self._generate_json("tutor_reply", TutorReplySchema, messages)
        return parsed.to_domain()

    async def analyze_journal(self, language: str, content: str) -> JournalAnalysis:
        prompt = build_journal_prompt(language, content, self.system_language)
        parsed = await self._generate_json(
            "analyze_journal", JournalAnalysisSchema, _user_prompt(prompt, JournalAnalysisSchema),
        )
        return parsed.to_domain()

    async def create_scenario(self, language: str, description: str) -> Scenario:
        prompt = build_scenario_prompt(language, description)
        parsed = await self._generate_json(
            "create_scenario", ScenarioSchema, _user_prompt(prompt, ScenarioSchema),
        )
        return parsed.to_domain()

    async def generate_story(self, language: str, words: list[str]) -> str:
        prompt = build_story_prompt(language, words)
        return await self._call("generate_story", [{"role": "user", "content": prompt}])

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    async def _call(self, task: str, messages: list[ChatMessage], **kwargs) -> str:
        """Call the LLM, converting every failure to GatewayError."""
        try:
            content, stats = await self.llm.call(
                messages=messages,
                model=self.model,
                timeout=self.timeout,
                **kwargs,
            )
        except LLMError as e:
            logger.warning("Gateway call failed", extra={
                "task": task, "model": self.model, "kind": type(e).__name__, "error": str(e),
            })
            raise GatewayError(e.reason) from e
        except Exception as e:
            logger.warning("Gateway call failed", extra={
                "task": task, "model": self.model, "error": str(e),
            })
            raise GatewayError(f"{LLMError.reason}: {e}") from e

        logger.info("Gateway call completed", extra={
            "task": task, "model": stats.model, "total_tokens": stats.total_tokens,
        })
        return content

    async def _generate_json(
        self,
        task: str,
        schema: type[SchemaT],
        messages: list[ChatMessage],
    ) -> SchemaT:
        content = await self._call(task, messages, response_format=JSON_RESPONSE_FORMAT)

        parsed = repair_json(content, return_objects=True)
        if not isinstance(parsed, dict):
            logger.warning("Gateway reply is not a JSON object", extra={
                "task": task, "content_preview": content[:200],
            })
            raise GatewayError("AI returned unparsable data")

        try:
            return schema.model_validate(parsed)
        except SchemaValidationError as e:
            logger.warning("Gateway reply does not match schema", extra={
                "task": task, "errors": e.error_count(),
                "content_preview": content[:200],
            })
            raise GatewayError("AI returned data that does not match the expected schema") from e


def _user_prompt(prompt: str, schema: type[BaseModel]) -> list[ChatMessage]:
    return [{"role": "user", "content": with_json_schema(prompt, response_schema(schema))}]
