#!/usr/bin/env python3
"""CLI module for user preferences: amounts, profile, categories, quick buttons, day parts"""

from __future__ import annotations

from typing import Callable

import click

from ..core import preferences
from ..core.models import DAY_PART_NAMES, EntryType, UserSettings
from .cli_common import CLIContext, cli_command, handle_cli_success

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def format_settings(settings: UserSettings) -> str:
    lines = [
        f"Default water amount: {settings.default_water_amount} ml",
        f"Default urine amount: {settings.default_urine_amount} ml",
        f"Amount increment:     {settings.amount_increment} ml",
        f"Theme:                {settings.theme.value}",
        f"Age:                  {settings.age}",
        f"Sex:                  {settings.sex.value}",
        "",
        "Intake categories:",
    ]
    for index, category in enumerate(settings.intake_categories):
        lock = "" if category.is_deletable else " (fixed)"
        lines.append(f"  {index:>2}. {category.label}{lock} [{category.id}]")

    lines.extend(["", "Quick buttons:"])
    for index, button in enumerate(settings.quick_buttons):
        lines.append(f"  {index:>2}. {button.type.display_name} {button.label} {button.amount} ml [{button.id}]")

    lines.extend(["", "Day parts:"])
    for name, window in settings.day_parts.items():
        lines.append(f"  {name:<10} {window.start}-{window.end}")
    return "\n".join(lines)


def _apply(ctx: CLIContext, cmd: str, edit: Callable[[UserSettings], UserSettings], message: str) -> int:
    """Load, edit and save the settings snapshot as a whole."""
    settings = edit(ctx.store.load_settings())
    ctx.store.save_settings(settings)
    return handle_cli_success(ctx, settings.to_dict(), cmd, text=message)


@click.group(
    context_settings=CONTEXT_SETTINGS,
    help="Show and change preferences",
)
def cli() -> None:
    """Root command for settings."""


@cli.command("show")
@cli_command("settings.show")
def show_command(ctx: CLIContext) -> int:
    """Show current preferences."""
    settings = ctx.store.load_settings()
    return handle_cli_success(ctx, settings.to_dict(), "settings.show", text=format_settings(settings))


@cli.command("set")
@click.argument("key")
@click.argument("value")
@cli_command("settings.set")
def set_command(ctx: CLIContext, key: str, value: str) -> int:
    """Set KEY (default-water-amount, default-urine-amount, amount-increment, theme, age, sex) to VALUE."""
    return _apply(
        ctx,
        "settings.set",
        lambda s: preferences.set_preference(s, key, value),
        f"Set {key} to {value}",
    )


@cli.group("category")
def category_group() -> None:
    """Manage intake categories."""


@category_group.command("add")
@click.argument("label")
@cli_command("settings.category.add")
def category_add(ctx: CLIContext, label: str) -> int:
    """Add a category before "Other"."""
    return _apply(
        ctx,
        "settings.category.add",
        lambda s: preferences.add_intake_category(s, label),
        f"Added category {label.strip()}",
    )


@category_group.command("remove")
@click.argument("category_id")
@cli_command("settings.category.remove")
def category_remove(ctx: CLIContext, category_id: str) -> int:
    """Remove a category by id."""
    return _apply(
        ctx,
        "settings.category.remove",
        lambda s: preferences.remove_intake_category(s, category_id),
        f"Removed category {category_id}",
    )


@category_group.command("move")
@click.argument("from_index", type=int)
@click.argument("to_index", type=int)
@cli_command("settings.category.move")
def category_move(ctx: CLIContext, from_index: int, to_index: int) -> int:
    """Move the category at FROM_INDEX to TO_INDEX."""
    return _apply(
        ctx,
        "settings.category.move",
        lambda s: preferences.move_intake_category(s, from_index, to_index),
        f"Moved category {from_index} -> {to_index}",
    )


@cli.group("button")
def button_group() -> None:
    """Manage quick buttons."""


@button_group.command("add")
@click.argument("entry_type", type=click.Choice([EntryType.WATER.value, EntryType.URINE.value], case_sensitive=False))
@click.argument("label")
@click.argument("amount", type=click.IntRange(min=1))
@cli_command("settings.button.add")
def button_add(ctx: CLIContext, entry_type: str, label: str, amount: int) -> int:
    """Add a quick button."""
    return _apply(
        ctx,
        "settings.button.add",
        lambda s: preferences.add_quick_button(s, entry_type.upper(), label, amount),
        f"Added quick button {label.strip()} ({amount} ml)",
    )


@button_group.command("remove")
@click.argument("button_id")
@cli_command("settings.button.remove")
def button_remove(ctx: CLIContext, button_id: str) -> int:
    """Remove a quick button by id."""
    return _apply(
        ctx,
        "settings.button.remove",
        lambda s: preferences.remove_quick_button(s, button_id),
        f"Removed quick button {button_id}",
    )


@button_group.command("move")
@click.argument("from_index", type=int)
@click.argument("to_index", type=int)
@cli_command("settings.button.move")
def button_move(ctx: CLIContext, from_index: int, to_index: int) -> int:
    """Move the quick button at FROM_INDEX to TO_INDEX."""
    return _apply(
        ctx,
        "settings.button.move",
        lambda s: preferences.move_quick_button(s, from_index, to_index),
        f"Moved quick button {from_index} -> {to_index}",
    )


@cli.command("daypart")
@click.argument("part", type=click.Choice(DAY_PART_NAMES, case_sensitive=False))
@click.argument("start")
@click.argument("end")
@cli_command("settings.daypart")
def daypart_command(ctx: CLIContext, part: str, start: str, end: str) -> int:
    """Set the START-END window (HH:MM) of a day part."""
    return _apply(
        ctx,
        "settings.daypart",
        lambda s: preferences.set_day_part(s, part.lower(), start, end),
        f"Set {part.lower()} to {start}-{end}",
    )
