#!/usr/bin/env python3
"""CLI module for logging intake, output and notes"""

from __future__ import annotations

import click

from ..core.models import NONE_CATEGORY_ID, EntryType, LogEntry, Urgency, UserSettings
from ..core.time import format_utc_iso8601, get_current_time, parse_local_datetime, to_local
from ..core.validation import ValidationError
from .cli_common import CLIContext, ExitCode, cli_command, handle_cli_success

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

ENTRY_TYPES = [t.value for t in EntryType]
URGENCIES = [u.value for u in Urgency]


def resolve_timestamp(value: str | None) -> str:
    """Stored UTC timestamp for user input, or now."""
    if not value:
        return format_utc_iso8601(get_current_time())
    try:
        return format_utc_iso8601(parse_local_datetime(value))
    except ValueError as exc:
        raise ValidationError(f"Invalid time {value!r}, expected 'YYYY-MM-DD HH:MM'") from exc


def resolve_category(settings: UserSettings, value: str | None) -> str:
    """Category id matching an id or a label (case-insensitive)."""
    if not value:
        return NONE_CATEGORY_ID
    for category in settings.intake_categories:
        if value == category.id or value.casefold() == category.label.casefold():
            return category.id
    raise ValidationError(f"Unknown intake category: {value}")


def format_entry(entry: LogEntry, settings: UserSettings) -> str:
    """One listing line: local time, type, amount, category, notes and id."""
    when = to_local(entry.timestamp).strftime("%Y-%m-%d %H:%M")
    parts = [when, f"{entry.type.display_name:<6}"]
    parts.append(f"{entry.amount:>5} ml" if entry.is_volume else " " * 8)
    if entry.type == EntryType.WATER and entry.intake_type_id not in (None, NONE_CATEGORY_ID):
        parts.append(settings.category_label(entry.intake_type_id) or entry.intake_type_id)
    if entry.type == EntryType.URINE and entry.urgency not in (None, Urgency.EMPTY):
        parts.append(f"urgency {entry.urgency.value.lower()}")
    if entry.notes:
        parts.append(entry.notes)
    parts.append(f"[{entry.id}]")
    return "  ".join(parts)


@click.group(
    context_settings=CONTEXT_SETTINGS,
    help="Add, edit and list log entries",
)
def cli() -> None:
    """Root command for log entries."""


@cli.command("add")
@click.argument("entry_type", type=click.Choice(ENTRY_TYPES, case_sensitive=False))
@click.option("--amount", type=int, help="Volume in ml (default from settings)")
@click.option("--notes", default="", help="Free text (required for NOTE)")
@click.option("--category", help="Intake category id or label (WATER only)")
@click.option("--urgency", type=click.Choice(URGENCIES, case_sensitive=False), help="Urgency (URINE only)")
@click.option("--at", "at", help="Local time 'YYYY-MM-DD HH:MM' (default: now)")
@cli_command("log.add")
def add_command(
    ctx: CLIContext,
    entry_type: str,
    amount: int | None,
    notes: str,
    category: str | None,
    urgency: str | None,
    at: str | None,
) -> int:
    """Add an intake, urine or note entry."""
    settings = ctx.store.load_settings()
    entry_type = entry_type.upper()

    if amount is None:
        amount = {
            EntryType.WATER.value: settings.default_water_amount,
            EntryType.URINE.value: settings.default_urine_amount,
        }.get(entry_type, 0)

    entry = ctx.journal.add(
        entry_type,
        amount=amount,
        notes=notes,
        timestamp=resolve_timestamp(at),
        intake_type_id=resolve_category(settings, category) if entry_type == EntryType.WATER.value else None,
        urgency=urgency.upper() if urgency else None,
    )
    return handle_cli_success(ctx, entry.to_dict(), "log.add", text=f"Added {format_entry(entry, settings)}")


@cli.command("quick")
@click.argument("button")
@click.option("--at", "at", help="Local time 'YYYY-MM-DD HH:MM' (default: now)")
@cli_command("log.quick")
def quick_command(ctx: CLIContext, button: str, at: str | None) -> int:
    """Add an entry from a quick button (id or label)."""
    settings = ctx.store.load_settings()
    preset = next(
        (b for b in settings.quick_buttons if button == b.id or button.casefold() == b.label.casefold()),
        None,
    )
    if preset is None:
        raise ValidationError(f"Unknown quick button: {button}")

    entry = ctx.journal.add(
        preset.type.value,
        amount=preset.amount,
        notes=preset.label,
        timestamp=resolve_timestamp(at),
    )
    return handle_cli_success(ctx, entry.to_dict(), "log.quick", text=f"Added {format_entry(entry, settings)}")


@cli.command("edit")
@click.argument("entry_id")
@click.option("--type", "entry_type", type=click.Choice(ENTRY_TYPES, case_sensitive=False), help="New type")
@click.option("--amount", type=int, help="New volume in ml")
@click.option("--notes", help="New notes")
@click.option("--category", help="New intake category id or label")
@click.option("--urgency", type=click.Choice(URGENCIES, case_sensitive=False), help="New urgency")
@click.option("--at", "at", help="New local time 'YYYY-MM-DD HH:MM'")
@cli_command("log.edit")
def edit_command(
    ctx: CLIContext,
    entry_id: str,
    entry_type: str | None,
    amount: int | None,
    notes: str | None,
    category: str | None,
    urgency: str | None,
    at: str | None,
) -> int:
    """Edit an entry; options not given keep their current value."""
    settings = ctx.store.load_settings()
    current = ctx.journal.get(entry_id)

    entry = ctx.journal.update(
        entry_id,
        entry_type.upper() if entry_type else current.type.value,
        amount=amount if amount is not None else current.amount,
        notes=notes if notes is not None else current.notes,
        timestamp=resolve_timestamp(at) if at else current.timestamp,
        intake_type_id=resolve_category(settings, category) if category else current.intake_type_id,
        urgency=urgency.upper() if urgency else current.urgency,
    )
    return handle_cli_success(ctx, entry.to_dict(), "log.edit", text=f"Updated {format_entry(entry, settings)}")


@cli.command("delete")
@click.argument("entry_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@cli_command("log.delete")
def delete_command(ctx: CLIContext, entry_id: str, yes: bool) -> int:
    """Delete an entry."""
    entry = ctx.journal.get(entry_id)

    if not ctx.confirm(f"Delete {entry.type.display_name.lower()} entry {entry_id}?", yes=yes):
        ctx.output("Cancelled", status="warning")
        return int(ExitCode.CONFLICT_IDEMPOTENT)

    ctx.journal.delete(entry_id)
    return handle_cli_success(ctx, {"id": entry_id, "action": "deleted"}, "log.delete", text=f"Deleted {entry_id}")


@cli.command("list")
@click.option("--limit", type=int, default=20, show_default=True, help="Maximum number of entries")
@cli_command("log.list")
def list_command(ctx: CLIContext, limit: int) -> int:
    """List entries, newest first."""
    settings = ctx.store.load_settings()
    entries = ctx.journal.list_entries(limit=limit)

    text = "\n".join(format_entry(e, settings) for e in entries) if entries else "No entries yet."
    return handle_cli_success(
        ctx,
        [e.to_dict() for e in entries],
        "log.list",
        meta={"total": len(ctx.journal.entries)},
        text=text,
    )
