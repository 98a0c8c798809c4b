"""AI insights over the hydration log."""

from .prompts import EMPTY_ANSWER, FAILURE_FALLBACK, NOT_ENOUGH_DATA
from .service import MAX_CONTEXT_ENTRIES, MIN_ENTRIES, InsightsService, compact_logs

__all__ = [
    "EMPTY_ANSWER",
    "FAILURE_FALLBACK",
    "MAX_CONTEXT_ENTRIES",
    "MIN_ENTRIES",
    "NOT_ENOUGH_DATA",
    "InsightsService",
    "compact_logs",
]
