"""LLM Adapter module for AquaFlow insights.

Provides a provider-agnostic interface for LLM interactions with support for:
- Text generation
- Chat conversations with a system instruction
- Gemini over HTTP
"""

from .adapter import LLMAdapter, LLMError, LLMRateLimitError, LLMResponse, LLMTimeoutError, Message
from .gemini_adapter import GeminiAdapter

__all__ = [
    "GeminiAdapter",
    "LLMAdapter",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponse",
    "LLMTimeoutError",
    "Message",
]
