#!/usr/bin/env python3
"""Main CLI module for AquaFlow"""

from __future__ import annotations

import dataclasses
import sys
from pathlib import Path

import click

from ..config.settings import ConfigError, load_settings
from ..core.time import set_default_timezone
from ..observability.loguru_config import configure_loguru
from .aquaflow_data import import_cli, sample_cli
from .aquaflow_insights import cli as insights_cli
from .aquaflow_log import cli as log_cli
from .aquaflow_report import export_cli, report_cli
from .aquaflow_settings import cli as settings_cli
from .aquaflow_today import calendar_cli, today_cli
from .cli_common import CLIContext, ExitCode

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
EPILOG = """
Examples:
  # Logging
  aquaflow log add water --amount 300 --category coffee
  aquaflow log add urine --amount 350 --urgency medium
  aquaflow log add note --notes "Headache after lunch"
  aquaflow log quick Glass          # One-tap preset
  aquaflow log list --limit 10

  # Views
  aquaflow today                    # Today's intake, output and net balance
  aquaflow calendar --month 2025-03
  aquaflow report --days 7 --start-time 06:00 --end-time 22:00

  # Data
  aquaflow export --output ~/Downloads
  aquaflow import backup.json
  aquaflow sample generate

  # Insights (needs GEMINI_API_KEY)
  aquaflow insights report
""".strip()


@click.group(
    context_settings=CONTEXT_SETTINGS,
    help="AquaFlow - hydration and voiding tracker",
    epilog=EPILOG,
)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the entry and settings snapshots (env: AQUAFLOW_DATA_DIR)",
)
@click.option("--tz", "timezone", help="IANA timezone for local days (env: AQUAFLOW_TZ)")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON (machine-readable)")
@click.option("--verbose", "-v", is_flag=True, help="Print tracebacks on errors")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, timezone: str | None, json_output: bool, verbose: bool) -> None:
    """Root CLI command."""
    try:
        settings = load_settings()
        overrides = {}
        if data_dir is not None:
            overrides["data_dir"] = data_dir
        if timezone:
            overrides["timezone"] = timezone
        if overrides:
            settings = dataclasses.replace(settings, **overrides)
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        ctx.exit(int(ExitCode.CONFIG_ERROR))

    configure_loguru(log_dir=settings.log_dir, level=settings.log_level)
    set_default_timezone(settings.timezone)

    ctx.obj = CLIContext(settings, json_output=json_output, verbose=verbose)


cli.add_command(log_cli, "log")
cli.add_command(today_cli, "today")
cli.add_command(calendar_cli, "calendar")
cli.add_command(report_cli, "report")
cli.add_command(export_cli, "export")
cli.add_command(import_cli, "import")
cli.add_command(sample_cli, "sample")
cli.add_command(settings_cli, "settings")
cli.add_command(insights_cli, "insights")


def main(args: list[str] | None = None) -> int:
    """CLI entry point returning the exit code."""
    try:
        normalized_args = list(args) if args is not None else None
        result = cli.main(args=normalized_args, prog_name="aquaflow", standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except SystemExit as exc:  # pragma: no cover - click normalizes the exit code
        return int(exc.code) if exc.code is not None else 0
    return int(result) if isinstance(result, int) else 0


if __name__ == "__main__":  # pragma: no cover - executable module
    sys.exit(main())
