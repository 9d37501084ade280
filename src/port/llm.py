"""LLM port — chat-completion calls made by the AI gateway.

Adapters translate provider exceptions into the LLMError family below.
The gateway turns each into a GatewayError whose message is the error's
``reason``, so the learner sees why a request failed without any
provider detail leaking through.
"""

from typing import Protocol

from domain.model.token_usage import LLMCallResult

# {"role": "system" | "user" | "assistant", "content": ...}
ChatMessage = dict[str, str]


class LLMError(Exception):
    reason = "AI request failed"


class LLMTimeoutError(LLMError):
    reason = "AI request timed out"


class LLMRateLimitError(LLMError):
    reason = "AI provider is rate limiting requests, try again shortly"


class LLMAuthError(LLMError):
    reason = "AI provider rejected the configured credentials"


class LLMPort(Protocol):
    async def call(
        self,
        messages: list[ChatMessage],
        *,
        model: str,
        timeout: float,
        **kwargs,
    ) -> tuple[str, LLMCallResult]:
        """Return the first choice's text and the call's token usage.

        Raises:
            LLMError: Or a subclass, for provider failures.
            ValueError: If ``messages`` is empty.
            RuntimeError: If the provider returned no content.
        """
        ...
