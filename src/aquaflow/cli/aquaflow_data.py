#!/usr/bin/env python3
"""CLI module for importing entries and managing sample data"""

from __future__ import annotations

from pathlib import Path

import click

from ..core.sample_data import generate_sample_entries
from ..core.time import get_current_time
from ..storage.snapshot import read_import_file
from .cli_common import CLIContext, ExitCode, cli_command, handle_cli_success

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.command(
    context_settings=CONTEXT_SETTINGS,
    help="Merge entries from a JSON file, skipping duplicates",
)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@cli_command("import")
def import_cli(ctx: CLIContext, path: Path) -> int:
    """Import entries from PATH."""
    incoming = read_import_file(path)
    added = ctx.journal.import_entries(incoming)

    data = {"path": str(path), "read": len(incoming), "added": added, "skipped": len(incoming) - added}
    if added == 0:
        ctx.output(data, status="warning", text=f"Nothing new to import from {path} ({len(incoming)} duplicates)")
        return int(ExitCode.CONFLICT_IDEMPOTENT)

    return handle_cli_success(
        ctx,
        data,
        "import",
        text=f"Imported {added} of {len(incoming)} entries from {path}",
    )


@click.group(
    context_settings=CONTEXT_SETTINGS,
    help="Generate or clear sample entries",
)
def sample_cli() -> None:
    """Root command for sample data."""


@sample_cli.command("generate")
@click.option("--days", type=click.IntRange(min=1), default=30, show_default=True, help="Number of days to fill")
@cli_command("sample.generate")
def generate_command(ctx: CLIContext, days: int) -> int:
    """Fill the log with random sample entries."""
    samples = generate_sample_entries(get_current_time(), days=days)
    added = ctx.journal.bulk_add(samples)
    return handle_cli_success(
        ctx,
        {"added": added, "days": days},
        "sample.generate",
        text=f"Generated {added} sample entries over {days} days",
    )


@sample_cli.command("clear")
@cli_command("sample.clear")
def clear_command(ctx: CLIContext) -> int:
    """Remove every sample entry."""
    removed = ctx.journal.remove_sample_entries()
    if removed == 0:
        ctx.output({"removed": 0}, status="warning", text="No sample entries to remove")
        return int(ExitCode.CONFLICT_IDEMPOTENT)

    return handle_cli_success(ctx, {"removed": removed}, "sample.clear", text=f"Removed {removed} sample entries")
