#!/usr/bin/env python3
"""
Timeless Diary CLI
------------------

Command-line interface for converting between the calendar's JSON data
and its Markdown diary document.

Commands:
    - export: calendar JSON → diary .md
    - import: diary .md → calendar JSON
    - backup: diary .md → JSON backup envelope or CSV
    - stats: summary of a diary
    - validate: check a diary is in canonical form

Usage:
    timeless export data/diary/calendar.json -o data/diary/timeless-diary.md
    timeless import data/diary/timeless-diary.md -o calendar.json
    timeless backup --csv
    timeless --config timeless.yaml stats
"""
from __future__ import annotations

import click
from pathlib import Path
from typing import Optional

from timeless.core.cli import setup_logger
from timeless.core.config import load_config
from timeless.core.exceptions import ConfigError


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML configuration file (default: timeless.yaml in the project root)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for log files (overrides the configuration)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    log_dir: Optional[str],
    verbose: bool,
) -> None:
    """Timeless Calendar Diary Tools"""
    ctx.ensure_object(dict)
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.UsageError(str(e)) from e

    resolved_log_dir = Path(log_dir) if log_dir else config.log_dir
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(resolved_log_dir, "diary")


# Import and register commands from submodules
from .diary import export_diary, import_diary
from .maintenance import backup, stats, validate

cli.add_command(export_diary)
cli.add_command(import_diary)
cli.add_command(backup)
cli.add_command(stats)
cli.add_command(validate)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
