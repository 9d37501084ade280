"""Domain model for LLM call results."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LLMCallResult:
    """Result from a single LLM API call (Value Object).

    Attributes:
        model: The model name used for the API call.
        prompt_tokens: Number of tokens in the prompt/input.
        completion_tokens: Number of tokens in the completion/output.
        total_tokens: Total tokens used (prompt + completion).
        estimated_cost: Estimated cost in USD based on model pricing.
        provider: Optional provider name (e.g., "openai", "gemini").
    """
    model: str
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    estimated_cost: float
    provider: str | None = field(default=None)
