"""Gemini LLM adapter implementation.

Direct Generative Language API integration over HTTP.
"""

from __future__ import annotations

from typing import Any

import httpx

from .adapter import LLMError, LLMRateLimitError, LLMResponse, LLMTimeoutError, Message

__all__ = ["GeminiAdapter"]

_FINISH_REASONS = {"STOP": "stop", "MAX_TOKENS": "length"}


class GeminiAdapter:
    """Gemini API adapter."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        default_model: str = "gemini-3-pro-preview",
    ) -> None:
        """Initialize Gemini adapter.

        Parameters
        ----------
        api_key
            Gemini API key
        base_url
            API base URL
        default_model
            Default model to use
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.default_model = default_model

    def _make_headers(self) -> dict[str, str]:
        return {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    def _messages_to_gemini(self, messages: list[Message]) -> tuple[str, list[dict[str, Any]]]:
        """Convert Message objects to Gemini format.

        Returns
        -------
        tuple[str, list[dict]]
            (system_instruction, contents)
        """
        system_instruction = ""
        contents = []

        for msg in messages:
            if msg.role == "system":
                system_instruction = msg.content
            else:
                role = "model" if msg.role == "assistant" else "user"
                contents.append({"role": role, "parts": [{"text": msg.content}]})

        return system_instruction, contents

    def _parse_response(self, response_data: dict[str, Any]) -> LLMResponse:
        candidates = response_data.get("candidates") or [{}]
        candidate = candidates[0]
        parts = (candidate.get("content") or {}).get("parts", [])
        text_content = "".join(part.get("text", "") for part in parts)

        usage = response_data.get("usageMetadata", {})

        return LLMResponse(
            content=text_content,
            finish_reason=_FINISH_REASONS.get(candidate.get("finishReason", "STOP"), "error"),  # type: ignore
            usage={
                "prompt_tokens": usage.get("promptTokenCount", 0),
                "completion_tokens": usage.get("candidatesTokenCount", 0),
                "total_tokens": usage.get("totalTokenCount", 0),
            },
            model=response_data.get("modelVersion", ""),
            raw_response=response_data,
        )

    def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float = 60.0,
    ) -> LLMResponse:
        """Generate text completion from prompt."""
        messages = [Message(role="user", content=prompt)]
        return self.chat(messages, model=model, temperature=temperature, max_tokens=max_tokens, timeout=timeout)

    def chat(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float = 60.0,
    ) -> LLMResponse:
        """Multi-turn chat conversation."""
        model = model or self.default_model

        system_instruction, contents = self._messages_to_gemini(messages)

        payload: dict[str, Any] = {"contents": contents}

        generation_config: dict[str, Any] = {}
        if temperature is not None:
            generation_config["temperature"] = temperature
        if max_tokens is not None:
            generation_config["maxOutputTokens"] = max_tokens
        if generation_config:
            payload["generationConfig"] = generation_config

        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}

        try:
            with httpx.Client(timeout=timeout) as client:
                response = client.post(
                    f"{self.base_url}/models/{model}:generateContent",
                    headers=self._make_headers(),
                    json=payload,
                )

            if response.status_code == 429:
                raise LLMRateLimitError("Gemini rate limit exceeded")

            if response.status_code >= 400:
                error_msg = response.text
                try:
                    error_data = response.json()
                    error_msg = error_data.get("error", {}).get("message", error_msg)
                except ValueError:
                    pass
                raise LLMError(f"Gemini API error ({response.status_code}): {error_msg}")

            try:
                return self._parse_response(response.json())
            except (ValueError, KeyError, AttributeError, TypeError) as e:
                raise LLMError(f"Malformed Gemini response: {e}") from e

        except httpx.TimeoutException as e:
            raise LLMTimeoutError(f"Gemini request timed out after {timeout}s") from e
        except httpx.HTTPError as e:
            raise LLMError(f"Gemini HTTP error: {e}") from e
