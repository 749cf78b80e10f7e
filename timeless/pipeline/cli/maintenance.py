"""
Maintenance Commands
--------------------

Commands:
    - backup: diary .md → JSON backup envelope or CSV
    - stats: summary of a diary
    - validate: check a diary is in canonical form
"""
from __future__ import annotations

import click
import difflib
import json
from pathlib import Path
from typing import Optional

from timeless.core.config import DiaryConfig
from timeless.core.logging_manager import TimelessLogger, handle_cli_error
from timeless.diary import format_calendar, parse_diary, summarize_calendar
from timeless.pipeline.backup import build_backup, calendar_to_csv, default_backup_name
from timeless.pipeline.md2json import read_diary, read_diary_text


@click.command()
@click.argument("diary_md", type=click.Path(dir_okay=False), required=False)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Backup file (default: dated name in the configured backup_dir)",
)
@click.option("--csv", "as_csv", is_flag=True, help="Write CSV instead of a JSON backup")
@click.pass_context
def backup(
    ctx: click.Context,
    diary_md: Optional[str],
    output: Optional[str],
    as_csv: bool,
) -> None:
    """Back up a diary as a JSON envelope (or CSV)."""
    logger: TimelessLogger = ctx.obj["logger"]
    config: DiaryConfig = ctx.obj["config"]
    input_path = Path(diary_md) if diary_md else config.diary_path
    kind = "csv" if as_csv else "json"
    output_path = Path(output) if output else config.backup_dir / default_backup_name(kind)

    try:
        calendar = read_diary(input_path).calendar_map
        if as_csv:
            content = calendar_to_csv(calendar)
        else:
            content = json.dumps(build_backup(calendar), indent=2, ensure_ascii=False) + "\n"

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        logger.log_operation(
            "backup",
            {"input": str(input_path), "output": str(output_path), "kind": kind},
        )
        click.echo(f"💾 Backup written: {output_path}")

    except Exception as e:
        handle_cli_error(
            ctx,
            e,
            "backup",
            additional_context={"input": str(input_path), "output": str(output_path)},
        )


@click.command()
@click.argument("diary_md", type=click.Path(dir_okay=False), required=False)
@click.option("--json", "as_json", is_flag=True, help="Print statistics as JSON")
@click.pass_context
def stats(ctx: click.Context, diary_md: Optional[str], as_json: bool) -> None:
    """Show days, events, completion and tags of a diary."""
    config: DiaryConfig = ctx.obj["config"]
    input_path = Path(diary_md) if diary_md else config.diary_path

    try:
        parsed = read_diary(input_path)
        summary = summarize_calendar(parsed.calendar_map)

        if as_json:
            click.echo(json.dumps(summary.to_dict(), indent=2, ensure_ascii=False))
            return

        click.echo(f"📊 {input_path}")
        click.echo(f"  {summary.summary()}")
        click.echo(f"  lastSavedTimestamp: {parsed.last_saved_timestamp}")
        for tag, count in summary.tags.most_common(10):
            click.echo(f"  #{tag}: {count}")
        if summary.rollover_keys:
            click.echo(
                f"  ⚠️  {len(summary.rollover_keys)} day(s) name an impossible date: "
                + ", ".join(summary.rollover_keys)
            )

    except Exception as e:
        handle_cli_error(ctx, e, "stats", additional_context={"input": str(input_path)})


@click.command()
@click.argument("diary_md", type=click.Path(dir_okay=False), required=False)
@click.option("--show-diff", is_flag=True, help="Print a diff against the canonical form")
@click.pass_context
def validate(ctx: click.Context, diary_md: Optional[str], show_diff: bool) -> None:
    """
    Check that a diary is in canonical form.

    Parses the diary and formats it again with the same timestamp.
    Exits with status 1 when the result differs from the file.
    """
    logger: TimelessLogger = ctx.obj["logger"]
    config: DiaryConfig = ctx.obj["config"]
    input_path = Path(diary_md) if diary_md else config.diary_path

    try:
        original = read_diary_text(input_path)
        parsed = parse_diary(original)
        canonical = format_calendar(parsed.calendar_map, parsed.last_saved_timestamp)
    except Exception as e:
        handle_cli_error(ctx, e, "validate", additional_context={"input": str(input_path)})
        return

    if canonical == original:
        click.echo(f"✅ {input_path} is canonical")
        return

    logger.log_warning("Diary is not in canonical form", {"input": str(input_path)})
    click.echo(f"⚠️  {input_path} differs from its canonical form")
    if show_diff:
        diff = difflib.unified_diff(
            original.splitlines(keepends=True),
            canonical.splitlines(keepends=True),
            fromfile=str(input_path),
            tofile="canonical",
        )
        click.echo("".join(diff), nl=False)
    ctx.exit(1)


__all__ = ["backup", "stats", "validate"]
