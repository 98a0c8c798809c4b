#!/usr/bin/env python3
"""CLI module for today's dashboard and the monthly calendar"""

from __future__ import annotations

from datetime import date, datetime

import click

from ..core.time import get_current_time
from ..core.validation import ValidationError
from ..rollups.aggregator import calendar_month, dashboard_summary, day_totals, entries_on
from .aquaflow_log import format_entry
from .cli_common import CLIContext, cli_command, handle_cli_success

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

WEEKDAY_HEADER = "Sun Mon Tue Wed Thu Fri Sat"


def parse_month(value: str) -> tuple[int, int]:
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except ValueError as exc:
        raise ValidationError(f"Invalid month {value!r}, expected YYYY-MM") from exc
    return parsed.year, parsed.month


def parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from exc


@click.command(
    context_settings=CONTEXT_SETTINGS,
    help="Show today's intake, output and net balance",
)
@cli_command("today")
def today_cli(ctx: CLIContext) -> int:
    """Show today's dashboard."""
    settings = ctx.store.load_settings()
    summary = dashboard_summary(ctx.journal.entries)

    lines = [
        f"Today: {summary.day:%Y-%m-%d (%A)}",
        "",
        f"  Intake: {summary.intake_total} ml ({summary.intake_count} entries)",
        f"  Urine:  {summary.urine_total} ml ({summary.urine_count} entries)",
        f"  Net:    {summary.net_volume:+d} ml",
    ]
    if summary.entries:
        lines.append("")
        lines.extend(f"  {format_entry(e, settings)}" for e in summary.entries)

    return handle_cli_success(ctx, summary.to_dict(), "today", text="\n".join(lines))


@click.command(
    context_settings=CONTEXT_SETTINGS,
    help="Show daily totals for a month or the entries of one day",
)
@click.option("--month", help="Month to show, YYYY-MM (default: current)")
@click.option("--day", help="Show one day's entries, YYYY-MM-DD")
@cli_command("calendar")
def calendar_cli(ctx: CLIContext, month: str | None, day: str | None) -> int:
    """Show the calendar view."""
    entries = ctx.journal.entries

    if day:
        selected = parse_day(day)
        settings = ctx.store.load_settings()
        day_entries = entries_on(entries, selected)
        totals = day_totals(entries, selected)

        lines = [
            f"{selected:%Y-%m-%d (%A)}: in {totals.intake} ml, out {totals.output} ml, net {totals.net:+d} ml",
        ]
        lines.extend(f"  {format_entry(e, settings)}" for e in day_entries)
        if not day_entries:
            lines.append("  No entries.")

        data = {
            "date": selected.isoformat(),
            **totals.to_dict(),
            "entries": [e.to_dict() for e in day_entries],
        }
        return handle_cli_success(ctx, data, "calendar.day", text="\n".join(lines))

    if month:
        year, month_number = parse_month(month)
    else:
        now = get_current_time()
        year, month_number = now.year, now.month

    weeks = calendar_month(entries, year, month_number)

    lines = [f"{date(year, month_number, 1):%B %Y}", WEEKDAY_HEADER]
    for week in weeks:
        cells = []
        for cell in week:
            mark = "*" if cell.in_month and (cell.totals.intake or cell.totals.output) else " "
            cells.append(f"{cell.date.day:>2}{mark}" if cell.in_month else "   ")
        lines.append(" ".join(cells))

    active = [cell for week in weeks for cell in week if cell.in_month and (cell.totals.intake or cell.totals.output)]
    if active:
        lines.append("")
        for cell in active:
            lines.append(
                f"  {cell.date:%Y-%m-%d}  in {cell.totals.intake:>5} ml  "
                f"out {cell.totals.output:>5} ml  net {cell.totals.net:+d} ml"
            )

    data = {
        "year": year,
        "month": month_number,
        "weeks": [[cell.to_dict() for cell in week] for week in weeks],
    }
    return handle_cli_success(ctx, data, "calendar.month", text="\n".join(lines))
