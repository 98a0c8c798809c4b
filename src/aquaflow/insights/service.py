"""Pattern analysis of the log through a hosted language model.

The service never touches stored data. Model failures are logged and
answered with a fixed fallback message instead of an exception.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Sequence

from ..adapters.llm import LLMAdapter, LLMError, Message
from ..core.models import LogEntry, UserSettings
from ..core.time import get_current_time
from ..observability.loguru_config import get_logger, timing_context
from .prompts import EMPTY_ANSWER, FAILURE_FALLBACK, NOT_ENOUGH_DATA, REPORT_REQUEST, SYSTEM_PROMPT

__all__ = [
    "MAX_CONTEXT_ENTRIES",
    "MIN_ENTRIES",
    "InsightsService",
    "compact_logs",
]

MIN_ENTRIES = 3
MAX_CONTEXT_ENTRIES = 100

log = get_logger("insights")


def compact_logs(entries: Sequence[LogEntry], limit: int = MAX_CONTEXT_ENTRIES) -> str:
    """First ``limit`` entries as compact JSON with short keys."""
    rows = [{"t": e.type.value, "a": e.amount, "ts": e.timestamp, "n": e.notes} for e in entries[:limit]]
    return json.dumps(rows, separators=(",", ":"), ensure_ascii=False)


class InsightsService:
    """Summary reports and follow-up questions about the user's log.

    Each call is independent; the chat history only grows on successful
    answers.
    """

    def __init__(
        self,
        adapter: LLMAdapter,
        settings: UserSettings,
        *,
        model: str | None = None,
        timeout: float = 60.0,
        timezone_str: str | None = None,
    ) -> None:
        self.adapter = adapter
        self.settings = settings
        self.model = model
        self.timeout = timeout
        self.timezone_str = timezone_str
        self.history: list[Message] = []

    def build_system_instruction(self, entries: Sequence[LogEntry], now: datetime | None = None) -> str:
        now = now or get_current_time(self.timezone_str)
        return SYSTEM_PROMPT.format(
            age=self.settings.age,
            sex=self.settings.sex.value,
            logs_json=compact_logs(entries),
            current_date=now.strftime("%Y-%m-%d"),
        )

    def _complete(self, messages: list[Message], operation: str) -> str | None:
        try:
            with timing_context(operation, component="insights", messages=len(messages)):
                response = self.adapter.chat(messages, model=self.model, timeout=self.timeout)
        except LLMError as exc:
            log.warning("Insights request failed: {error}", error=str(exc), operation=operation)
            return None
        return response.content or EMPTY_ANSWER

    def generate_report(self, entries: Sequence[LogEntry], now: datetime | None = None) -> str:
        """Full analysis of the log."""
        if len(entries) < MIN_ENTRIES:
            return NOT_ENOUGH_DATA

        messages = [
            Message(role="system", content=self.build_system_instruction(entries, now)),
            Message(role="user", content=REPORT_REQUEST),
        ]
        answer = self._complete(messages, "insights_report")
        return FAILURE_FALLBACK if answer is None else answer

    def ask(self, entries: Sequence[LogEntry], question: str, now: datetime | None = None) -> str:
        """Answer a follow-up question with the conversation so far."""
        if len(entries) < MIN_ENTRIES:
            return NOT_ENOUGH_DATA

        messages = [
            Message(role="system", content=self.build_system_instruction(entries, now)),
            *self.history,
            Message(role="user", content=question),
        ]
        answer = self._complete(messages, "insights_question")
        if answer is None:
            return FAILURE_FALLBACK

        self.history.extend([Message(role="user", content=question), Message(role="assistant", content=answer)])
        return answer
