"""
Diary Conversion Commands
-------------------------

Commands:
    - export: calendar JSON → diary .md
    - import: diary .md → calendar JSON
"""
from __future__ import annotations

import click
from pathlib import Path
from typing import Optional

from timeless.core.config import DiaryConfig
from timeless.core.logging_manager import TimelessLogger, handle_cli_error
from timeless.diary import format_calendar
from timeless.pipeline.json2md import load_calendar_json, write_diary
from timeless.pipeline.md2json import read_diary, write_calendar_json


@click.command("export")
@click.argument("input_json", type=click.Path(dir_okay=False), required=False)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Diary file to write (default: configured diary_path)",
)
@click.option(
    "--timestamp",
    type=str,
    default=None,
    help="lastSavedTimestamp to record, in ms (default: the input's, else now)",
)
@click.option("-f", "--force", is_flag=True, help="Overwrite an existing diary")
@click.option("--dry-run", is_flag=True, help="Print the diary instead of writing it")
@click.pass_context
def export_diary(
    ctx: click.Context,
    input_json: Optional[str],
    output: Optional[str],
    timestamp: Optional[str],
    force: bool,
    dry_run: bool,
) -> None:
    """
    Write a Markdown diary from calendar JSON.

    INPUT_JSON may be a save payload, a load response or a JSON backup.
    """
    logger: TimelessLogger = ctx.obj["logger"]
    config: DiaryConfig = ctx.obj["config"]
    input_path = Path(input_json) if input_json else config.calendar_json
    output_path = Path(output) if output else config.diary_path

    try:
        calendar, file_timestamp = load_calendar_json(input_path)
        resolved = timestamp if timestamp is not None else file_timestamp

        if dry_run:
            click.echo(format_calendar(calendar, resolved), nl=False)
            return

        click.echo(f"📝 Writing diary from {input_path}...")
        result = write_diary(calendar, output_path, resolved, force=force, logger=logger)

        click.echo("\n✅ Export complete:")
        click.echo(f"  Output: {output_path}")
        click.echo(f"  Days: {result.days_written}")
        click.echo(f"  Events: {result.events_written}")
        if result.days_skipped:
            click.echo(f"  Days skipped: {result.days_skipped}")
        click.echo(f"  lastSavedTimestamp: {result.timestamp}")

    except Exception as e:
        handle_cli_error(
            ctx,
            e,
            "export",
            additional_context={"input": str(input_path), "output": str(output_path)},
        )


@click.command("import")
@click.argument("diary_md", type=click.Path(dir_okay=False), required=False)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON file to write (default: configured calendar_json)",
)
@click.option("-f", "--force", is_flag=True, help="Overwrite an existing JSON file")
@click.pass_context
def import_diary(
    ctx: click.Context,
    diary_md: Optional[str],
    output: Optional[str],
    force: bool,
) -> None:
    """Convert a Markdown diary into calendar JSON."""
    logger: TimelessLogger = ctx.obj["logger"]
    config: DiaryConfig = ctx.obj["config"]
    input_path = Path(diary_md) if diary_md else config.diary_path
    output_path = Path(output) if output else config.calendar_json

    try:
        click.echo(f"📖 Reading diary {input_path}...")
        parsed = read_diary(input_path)
        result = write_calendar_json(parsed, output_path, force=force, logger=logger)

        click.echo("\n✅ Import complete:")
        click.echo(f"  Output: {output_path}")
        click.echo(f"  Days: {result.days_written}")
        click.echo(f"  Events: {result.events_written}")
        click.echo(f"  lastSavedTimestamp: {result.timestamp}")

    except Exception as e:
        handle_cli_error(
            ctx,
            e,
            "import",
            additional_context={"input": str(input_path), "output": str(output_path)},
        )


__all__ = ["export_diary", "import_diary"]
