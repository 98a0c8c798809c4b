"""Loguru configuration with timing helpers.

This module provides centralized loguru configuration with:
- Coloured console output on stderr
- Optional structured JSONL files, one main file plus one per component
- Context manager and decorator for timing operations

Components: storage, engine, insights, cli.
"""

from __future__ import annotations

import functools
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = [
    "COMPONENTS",
    "configure_loguru",
    "get_logger",
    "log_timing",
    "timing_context",
]

F = TypeVar("F", bound=Callable[..., Any])

COMPONENTS = ("storage", "engine", "insights", "cli")


def configure_loguru(
    *,
    log_dir: Path | None = None,
    level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "10 days",
    enable_console: bool = True,
) -> None:
    """Configure loguru sinks.

    Parameters
    ----------
    log_dir
        Directory for JSONL log files (no file sinks when None)
    level
        Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    rotation
        Log rotation policy (e.g., "10 MB", "1 day")
    retention
        Log retention policy (e.g., "10 days", "1 week")
    enable_console
        Enable console output

    Example
    -------
    >>> from aquaflow.observability.loguru_config import configure_loguru
    >>> configure_loguru(log_dir=Path("logs"), level="DEBUG")
    """
    logger.remove()

    if enable_console:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[component]}</cyan> | "
            "<level>{message}</level>",
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / "aquaflow.jsonl",
            format="{message}",
            level=level,
            rotation=rotation,
            retention=retention,
            serialize=True,
            backtrace=True,
            diagnose=False,
        )

        for component in COMPONENTS:
            logger.add(
                log_dir / f"{component}.jsonl",
                format="{message}",
                level=level,
                rotation=rotation,
                retention=retention,
                serialize=True,
                filter=lambda record, comp=component: record["extra"].get("component") == comp,
            )

    logger.bind(component="aquaflow").debug("Loguru configured", log_dir=str(log_dir), level=level)


# Records logged before configure_loguru() still need the component key for the
# console format above.
logger.configure(extra={"component": "aquaflow"})


def get_logger(component: str = "aquaflow") -> Any:
    """Get logger instance bound to a component."""
    return logger.bind(component=component)


@contextmanager
def timing_context(
    operation: str,
    *,
    component: str = "aquaflow",
    **metadata: Any,
) -> Generator[dict[str, Any], None, None]:
    """Log start and end of an operation with its duration.

    Yields
    ------
    dict
        Context dictionary that can be updated with additional data

    Example
    -------
    >>> with timing_context("import_entries", component="storage") as ctx:
    ...     ctx["added"] = journal.import_entries(entries)
    """
    start_ns = time.perf_counter_ns()
    context: dict[str, Any] = {**metadata}
    bound = logger.bind(component=component, timing=True, operation=operation)

    bound.debug(f"START: {operation}", phase="start", **metadata)
    try:
        yield context
    finally:
        duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
        bound.debug(f"END: {operation}", phase="end", duration_ms=duration_ms, **context)


def log_timing(component: str = "aquaflow") -> Callable[[F], F]:
    """Decorator for automatic function timing.

    Example
    -------
    >>> @log_timing(component="insights")
    ... def generate_report(self):
    ...     ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with timing_context(f"{func.__module__}.{func.__name__}", component=component):
                return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator
