#!/usr/bin/env python3
"""CLI module for AI insights on the log"""

from __future__ import annotations

import click

from ..adapters.llm import GeminiAdapter
from ..config.settings import ConfigError
from ..insights import InsightsService
from .cli_common import CLIContext, cli_command, handle_cli_success

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def build_service(ctx: CLIContext) -> InsightsService:
    """Insights service for the configured model.

    Raises
    ------
    ConfigError
        If no API key is configured
    """
    config = ctx.settings
    if not config.insights_enabled:
        raise ConfigError("GEMINI_API_KEY is not set; insights are disabled")

    adapter = GeminiAdapter(
        config.gemini_api_key,
        base_url=config.gemini_base_url,
        default_model=config.gemini_model,
    )
    return InsightsService(
        adapter,
        ctx.store.load_settings(),
        model=config.gemini_model,
        timeout=config.llm_timeout,
    )


@click.group(
    context_settings=CONTEXT_SETTINGS,
    help="Ask the AI analyst about intake and voiding patterns",
)
def cli() -> None:
    """Root command for insights."""


@cli.command("report")
@cli_command("insights.report")
def report_command(ctx: CLIContext) -> int:
    """Generate a pattern report for the whole log."""
    service = build_service(ctx)
    answer = service.generate_report(ctx.journal.entries)
    return handle_cli_success(ctx, {"answer": answer}, "insights.report", text=answer)


@cli.command("ask")
@click.argument("question")
@cli_command("insights.ask")
def ask_command(ctx: CLIContext, question: str) -> int:
    """Ask a single question about the log."""
    service = build_service(ctx)
    answer = service.ask(ctx.journal.entries, question)
    return handle_cli_success(ctx, {"question": question, "answer": answer}, "insights.ask", text=answer)


@cli.command("chat")
@cli_command("insights.chat")
def chat_command(ctx: CLIContext) -> int:
    """Interactive conversation; an empty line ends it."""
    if ctx.json_output:
        raise click.UsageError("chat is interactive and cannot be used with --json")

    service = build_service(ctx)
    entries = ctx.journal.entries

    while True:
        question = click.prompt("You", default="", show_default=False).strip()
        if not question:
            break
        click.echo(f"\nAquaFlow AI: {service.ask(entries, question)}\n")

    return 0
