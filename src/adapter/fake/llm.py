"""In-memory implementation of LLMPort for testing."""

from domain.model.token_usage import LLMCallResult
from port.llm import ChatMessage


class FakeLLMAdapter:
    """Fake LLM adapter that returns preconfigured responses.

    ``responses`` are returned in order (the last one repeats); set
    ``error`` to make every call raise it.
    """

    def __init__(
        self,
        response: str = "{}",
        responses: list[str] | None = None,
        error: Exception | None = None,
        stats: LLMCallResult | None = None,
    ):
        self.responses = list(responses) if responses else [response]
        self.error = error
        self._stats = stats
        self.calls: list[dict] = []

    async def call(
        self,
        messages: list[ChatMessage],
        model: str = "gemini/gemini-2.5-flash",
        timeout: float = 30.0,
        **kwargs,
    ) -> tuple[str, LLMCallResult]:
        self.calls.append({
            "messages": messages,
            "model": model,
            "timeout": timeout,
            **kwargs,
        })
        if self.error is not None:
            raise self.error
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        stats = self._stats or LLMCallResult(
            model=model,
            prompt_tokens=10,
            completion_tokens=5,
            total_tokens=15,
            estimated_cost=0.0001,
        )
        return response, stats
