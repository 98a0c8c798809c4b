#!/usr/bin/env python3
"""Common CLI utilities: JSON output, stable exit codes and error mapping."""

from __future__ import annotations

import functools
import json
import traceback
import uuid
from enum import IntEnum
from typing import Any, Callable

import click

from ..adapters.llm import LLMError
from ..config.settings import ConfigError, Settings
from ..core.preferences import PreferenceError
from ..core.validation import ValidationError
from ..observability.loguru_config import get_logger
from ..storage import EntryJournal, EntryNotFoundError, SnapshotStore, StorageError

__all__ = [
    "CLIContext",
    "ExitCode",
    "cli_command",
    "exit_code_for",
    "handle_cli_error",
    "handle_cli_success",
]

log = get_logger("cli")


class ExitCode(IntEnum):
    """Stable exit codes for CLI commands."""

    SUCCESS = 0  # Successful execution
    VALIDATION_ERROR = 2  # Rejected input
    CONFLICT_IDEMPOTENT = 3  # Nothing to do or unknown target
    IO_ERROR = 5  # Storage or file error
    CONFIG_ERROR = 6  # Configuration error
    UNKNOWN_ERROR = 7  # Unknown/unexpected error


class CLIContext:
    """Per-invocation state shared by all commands."""

    def __init__(
        self,
        settings: Settings,
        json_output: bool = False,
        trace_id: str | None = None,
        verbose: bool = False,
    ):
        """Initialize CLI context.

        Args:
            settings: Loaded application settings
            json_output: Enable JSON output mode
            trace_id: Trace ID for correlation
            verbose: Print tracebacks on errors
        """
        self.settings = settings
        self.json_output = json_output
        self.trace_id = trace_id or f"trace-{uuid.uuid4().hex[:12]}"
        self.verbose = verbose
        self._journal: EntryJournal | None = None

    @property
    def store(self) -> SnapshotStore:
        return self.journal.store

    @property
    def journal(self) -> EntryJournal:
        if self._journal is None:
            self._journal = EntryJournal(SnapshotStore(self.settings.data_dir))
        return self._journal

    def output(
        self,
        data: Any,
        status: str = "success",
        error: str | None = None,
        meta: dict[str, Any] | None = None,
        text: str | None = None,
    ) -> None:
        """Output result in appropriate format.

        Args:
            data: Result data
            status: Status ("success", "error", "warning")
            error: Error message if status is error
            meta: Additional metadata
            text: Preformatted human-readable output
        """
        if self.json_output:
            result: dict[str, Any] = {"status": status, "trace_id": self.trace_id}

            if error:
                result["error"] = error
            else:
                result["data"] = data

            if meta:
                result["meta"] = meta

            click.echo(json.dumps(result, ensure_ascii=False, indent=2))
            return

        if status == "error":
            click.echo(f"Error: {error}", err=True)
        elif text is not None:
            click.echo(text)
        elif status == "warning":
            click.echo(f"Warning: {data}")
        elif isinstance(data, dict):
            for key, value in data.items():
                click.echo(f"{key}: {value}")
        elif isinstance(data, list):
            for item in data:
                click.echo(f"  - {item}")
        else:
            click.echo(data)

    def confirm(self, message: str, yes: bool = False) -> bool:
        """Ask for confirmation (or auto-confirm with --yes)."""
        if yes:
            return True

        if self.json_output:
            raise click.ClickException("Cannot confirm in --json mode. Use --yes for non-interactive execution.")

        return click.confirm(message)


def exit_code_for(exc: BaseException) -> ExitCode:
    """Map a domain exception to its exit code."""
    if isinstance(exc, (ValidationError, PreferenceError, ValueError, IndexError)):
        return ExitCode.VALIDATION_ERROR
    if isinstance(exc, EntryNotFoundError):
        return ExitCode.CONFLICT_IDEMPOTENT
    if isinstance(exc, (StorageError, OSError)):
        return ExitCode.IO_ERROR
    if isinstance(exc, ConfigError):
        return ExitCode.CONFIG_ERROR
    if isinstance(exc, LLMError):
        return ExitCode.IO_ERROR
    return ExitCode.UNKNOWN_ERROR


def handle_cli_error(ctx: CLIContext, exc: Exception, cmd: str) -> int:
    """Report an error and return the matching exit code.

    Args:
        ctx: CLI context
        exc: Exception to handle
        cmd: Command name (e.g. "log.add")

    Returns:
        Appropriate exit code
    """
    exit_code = exit_code_for(exc)
    error_msg = str(exc)

    if exit_code == ExitCode.UNKNOWN_ERROR:
        log.exception("Command failed", command=cmd, trace_id=ctx.trace_id)
    else:
        log.warning(
            "Command rejected: {error}",
            error=error_msg,
            command=cmd,
            error_type=type(exc).__name__,
            exit_code=int(exit_code),
            trace_id=ctx.trace_id,
        )

    ctx.output(None, status="error", error=error_msg, meta={"exit_code": int(exit_code)})

    if ctx.verbose and not ctx.json_output:
        click.echo("\nTraceback:", err=True)
        click.echo(traceback.format_exc(), err=True)

    return int(exit_code)


def handle_cli_success(
    ctx: CLIContext,
    data: Any,
    cmd: str,
    meta: dict[str, Any] | None = None,
    text: str | None = None,
) -> int:
    """Output a result and return the success code."""
    log.debug("Command finished", command=cmd, trace_id=ctx.trace_id)
    ctx.output(data, status="success", meta=meta, text=text)
    return int(ExitCode.SUCCESS)


def cli_command(cmd: str) -> Callable[[Callable[..., int]], Callable[..., int]]:
    """Inject the CLIContext and turn errors into exit codes.

    A non-zero result exits the click context with that code, so both
    ``main()`` and the console script report it.
    """

    def decorator(func: Callable[..., int]) -> Callable[..., int]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            click_ctx = click.get_current_context()
            ctx = click_ctx.find_object(CLIContext)
            if ctx is None:
                raise click.UsageError("Command must be run through the aquaflow group")

            try:
                code = func(ctx, *args, **kwargs)
            except (click.ClickException, click.exceptions.Abort):
                raise
            except Exception as exc:
                code = handle_cli_error(ctx, exc, cmd)

            if code:
                click_ctx.exit(code)
            return code

        return wrapper

    return decorator
