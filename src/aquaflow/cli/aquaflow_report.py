#!/usr/bin/env python3
"""CLI module for range reports and CSV export"""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

import click

from ..core.time import get_current_time
from ..core.validation import ValidationError, is_valid_time_of_day
from ..observability.loguru_config import get_logger, timing_context
from ..rollups.aggregator import build_report, range_filter
from ..rollups.export import csv_serialize, export_filename
from ..storage.snapshot import atomic_write
from .aquaflow_log import format_entry
from .aquaflow_today import parse_day
from .cli_common import CLIContext, ExitCode, cli_command, handle_cli_success

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
DEFAULT_REPORT_DAYS = 7

log = get_logger("cli")


def range_options(func):
    """Shared --from/--to/--start-time/--end-time/--days options."""
    func = click.option("--days", type=click.IntRange(min=0), help="Last N days up to today (overrides --from/--to)")(func)
    func = click.option("--end-time", default="23:59", show_default=True, help="Latest time of day, HH:MM")(func)
    func = click.option("--start-time", default="00:00", show_default=True, help="Earliest time of day, HH:MM")(func)
    func = click.option("--to", "end", help="Last day, YYYY-MM-DD (default: today)")(func)
    func = click.option("--from", "start", help="First day, YYYY-MM-DD")(func)
    return func


def resolve_range(
    start: str | None,
    end: str | None,
    days: int | None,
    start_time: str,
    end_time: str,
    default_days: int = DEFAULT_REPORT_DAYS,
) -> tuple[date, date]:
    for value in (start_time, end_time):
        if not is_valid_time_of_day(value):
            raise ValidationError(f"Invalid time {value!r}, expected HH:MM")

    today = get_current_time().date()
    if days is not None:
        return today - timedelta(days=days), today

    end_date = parse_day(end) if end else today
    start_date = parse_day(start) if start else end_date - timedelta(days=default_days)
    return start_date, end_date


@click.command(
    context_settings=CONTEXT_SETTINGS,
    help="Summarize a date and time-of-day window",
)
@range_options
@click.option("--entries", "show_entries", is_flag=True, help="Also list the entries in the window")
@cli_command("report")
def report_cli(
    ctx: CLIContext,
    start: str | None,
    end: str | None,
    start_time: str,
    end_time: str,
    days: int | None,
    show_entries: bool,
) -> int:
    """Show averages, the daily trend and the day-part distribution."""
    start_date, end_date = resolve_range(start, end, days, start_time, end_time)
    settings = ctx.store.load_settings()

    with timing_context("build_report", component="engine", start=str(start_date), end=str(end_date)):
        report = build_report(ctx.journal.entries, settings, start_date, end_date, start_time, end_time)

    stats = report.stats
    lines = [
        f"Report {start_date} .. {end_date}, {start_time}-{end_time}",
        f"{len(report.entries)} entries over {report.active_days} active day(s)",
        "",
        "Daily averages:",
        f"  Intake: {stats.avg_intake_per_day} ml ({stats.avg_intake_entries_per_day} entries)",
        f"  Urine:  {stats.avg_urine_per_day} ml ({stats.avg_urine_entries_per_day} entries)",
        f"  Net:    {stats.avg_net_per_day:+d} ml",
        "",
        "Time of day (average per active day):",
    ]
    lines.extend(f"  {b.name:<10} intake {b.intake:>5} ml  urine {b.urine:>5} ml" for b in report.day_parts)
    lines.extend(["", "Daily trend:"])
    lines.extend(
        f"  {p.date:%b %d}  in {p.intake:>5} ml  out {p.output:>5} ml  net {p.net:+d} ml" for p in report.trend
    )

    if show_entries:
        lines.extend(["", "Entries:"])
        lines.extend(f"  {format_entry(e, settings)}" for e in report.entries)

    data = report.to_dict()
    if show_entries:
        data["entries"] = [e.to_dict() for e in report.entries]
    return handle_cli_success(ctx, data, "report", text="\n".join(lines))


@click.command(
    context_settings=CONTEXT_SETTINGS,
    help="Export entries to CSV (all entries unless a window is given)",
)
@range_options
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Target file or directory, '-' for stdout (default: aquaflow_export_<timestamp>.csv)",
)
@cli_command("export")
def export_cli(
    ctx: CLIContext,
    start: str | None,
    end: str | None,
    start_time: str,
    end_time: str,
    days: int | None,
    output: Path | None,
) -> int:
    """Export entries as CSV."""
    settings = ctx.store.load_settings()
    entries = ctx.journal.entries

    if start or end or days is not None or start_time != "00:00" or end_time != "23:59":
        start_date, end_date = resolve_range(start, end, days, start_time, end_time)
        entries = range_filter(entries, start_date, end_date, start_time, end_time)

    if not entries:
        ctx.output("No data to export.", status="warning", text="No data to export.")
        return int(ExitCode.CONFLICT_IDEMPOTENT)

    content = csv_serialize(entries, settings.intake_categories)

    if output is not None and str(output) == "-":
        click.echo(content)
        return int(ExitCode.SUCCESS)

    target = output or Path(export_filename())
    if target.is_dir():
        target = target / export_filename()

    atomic_write(target, content)
    log.info("Exported entries", count=len(entries), path=str(target))
    return handle_cli_success(
        ctx,
        {"path": str(target), "count": len(entries)},
        "export",
        text=f"Exported {len(entries)} entries to {target}",
    )
