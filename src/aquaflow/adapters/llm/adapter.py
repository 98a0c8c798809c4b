"""LLM Adapter protocol and base types.

Defines the interface for LLM providers with support for:
- generate(): Single-turn text completion
- chat(): Multi-turn conversation with a system instruction
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

__all__ = [
    "LLMAdapter",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponse",
    "LLMTimeoutError",
    "Message",
]


class LLMError(Exception):
    """Base exception for LLM operations."""

    pass


class LLMTimeoutError(LLMError):
    """Raised when LLM request times out."""

    pass


class LLMRateLimitError(LLMError):
    """Raised when rate limit is exceeded."""

    pass


@dataclass
class Message:
    """Chat message."""

    role: Literal["system", "user", "assistant"]
    content: str


@dataclass
class LLMResponse:
    """Response from LLM."""

    content: str
    finish_reason: Literal["stop", "length", "error"] = "stop"
    usage: dict[str, int] = field(default_factory=dict)
    model: str = ""
    raw_response: dict[str, Any] = field(default_factory=dict)


class LLMAdapter(Protocol):
    """Protocol for LLM adapters.

    All LLM providers must implement this interface.
    """

    def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float = 60.0,
    ) -> LLMResponse:
        """Generate text completion from prompt.

        Parameters
        ----------
        prompt
            Input prompt
        model
            Model name (provider-specific)
        temperature
            Sampling temperature (0.0-2.0), provider default when None
        max_tokens
            Maximum tokens to generate, provider default when None
        timeout
            Request timeout in seconds

        Raises
        ------
        LLMError
            On API errors
        LLMTimeoutError
            On timeout
        LLMRateLimitError
            On rate limit
        """
        ...

    def chat(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float = 60.0,
    ) -> LLMResponse:
        """Multi-turn chat conversation.

        A leading "system" message becomes the system instruction.
        """
        ...
