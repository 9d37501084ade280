"""LiteLLM adapter — implements LLMPort on top of litellm.acompletion.

Every AI feature (lookup, tutor reply, journal review, scenario builder,
story) goes through this one call, so provider failures are translated
here into the port's LLMError family.
"""

import logging

import litellm
from litellm import acompletion, completion_cost

from domain.model.token_usage import LLMCallResult
from port.llm import ChatMessage, LLMAuthError, LLMError, LLMRateLimitError, LLMTimeoutError

litellm.suppress_debug_info = True
logging.getLogger("LiteLLM").setLevel(logging.CRITICAL)

logger = logging.getLogger(__name__)

# Checked in order; APIError is the broadest
_ERROR_MAP: tuple[tuple[type[Exception], type[LLMError]], ...] = (
    (litellm.Timeout, LLMTimeoutError),
    (litellm.AuthenticationError, LLMAuthError),
    (litellm.RateLimitError, LLMRateLimitError),
    (litellm.APIError, LLMError),
)


def _extract_provider_from_model(model: str) -> str | None:
    """Provider name from a LiteLLM model id.

    "gemini/gemini-2.5-flash" -> "gemini"; bare "gpt-4o" -> "openai".
    Returns None when the id carries no recognizable provider.
    """
    if "/" in model:
        return model.split("/", 1)[0]
    if model.startswith("gemini-"):
        return "gemini"
    if model.startswith(("gpt-", "o1", "o3")):
        return "openai"
    return None


def _translate(error: Exception) -> LLMError | None:
    for source, target in _ERROR_MAP:
        if isinstance(error, source):
            return target(str(error))
    return None


def _first_content(response) -> str:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return ""
    message = choices[0].message
    return (message.content or "").strip() if message else ""


def _estimate_cost(response, model: str) -> float:
    try:
        return completion_cost(completion_response=response)
    except Exception as e:
        # Unpriced models (local, preview) have no cost table entry
        logger.debug("Cost estimate unavailable", extra={"model": model, "error": str(e)})
        return 0.0


class LiteLLMAdapter:
    """LLMPort backed by LiteLLM."""

    async def call(
        self,
        messages: list[ChatMessage],
        model: str = "gemini/gemini-2.5-flash",
        timeout: float = 30.0,
        **kwargs,
    ) -> tuple[str, LLMCallResult]:
        """Send a chat completion and return (content, stats).

        Args:
            messages: Chat messages; a leading 'system' entry carries the
                tutor or dictionary instruction.
            model: LiteLLM model identifier.
            timeout: Request timeout in seconds.
            **kwargs: Passed through to acompletion (response_format, temperature).

        Raises:
            ValueError: If messages is empty.
            LLMError (or a subclass): Provider failure.
            RuntimeError: If the reply has no text.
        """
        if not messages:
            raise ValueError("messages list cannot be empty")

        try:
            response = await acompletion(
                model=model,
                messages=messages,
                timeout=timeout,
                drop_params=True,
                **kwargs,
            )
        except Exception as e:
            translated = _translate(e)
            if translated is None:
                raise
            raise translated from e

        content = _first_content(response)
        if not content:
            logger.error("No content in LLM response", extra={
                "model": model,
                "response_id": getattr(response, "id", None),
            })
            raise RuntimeError("No content returned from LLM")

        usage = getattr(response, "usage", None)
        stats = LLMCallResult(
            model=model,
            prompt_tokens=usage.prompt_tokens if usage else 0,
            completion_tokens=usage.completion_tokens if usage else 0,
            total_tokens=usage.total_tokens if usage else 0,
            estimated_cost=_estimate_cost(response, model),
            provider=_extract_provider_from_model(model),
        )

        logger.debug("LLM call completed", extra={
            "model": model,
            "provider": stats.provider,
            "total_tokens": stats.total_tokens,
            "estimated_cost": stats.estimated_cost,
        })
        return content, stats
