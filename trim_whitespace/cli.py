"""
Trims whitespace in text and Markdown files.
Files are rewritten in place unless `--check` or `--stdout` is given.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from .config import ConfigError, build_settings
from .document import trim_for_trigger
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    normalize_filepath,
    read_text,
    write_text_atomic,
)
from .models import TriggerKind

__all__ = ["cli"]

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(package_name="trim-whitespace")
@click.option("--check", is_flag=True, help="Report files that would change; write nothing")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print trimmed text instead of writing")
@click.option(
    "--preserve-code-blocks/--no-preserve-code-blocks",
    default=None,
    help="Leave fenced and inline code untouched",
)
@click.option(
    "--preserve-indented-lists/--no-preserve-indented-lists",
    default=None,
    help="Keep indentation in front of list markers",
)
@click.option(
    "--convert-nbsp/--no-convert-nbsp",
    default=None,
    help="Convert non-breaking spaces to ordinary spaces",
)
@click.option(
    "--keep-trailing-lines",
    type=click.IntRange(min=0),
    help="Line endings to keep at the end of the file",
)
@click.option("--verbose", "-v", is_flag=True, help="Log trim decisions")
@click.argument(
    "filepaths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False)
)
def cli(
    filepaths: tuple[str, ...],
    check: bool = False,
    to_stdout: bool = False,
    preserve_code_blocks: bool | None = None,
    preserve_indented_lists: bool | None = None,
    convert_nbsp: bool | None = None,
    keep_trailing_lines: int | None = None,
    verbose: bool = False,
):
    """
    Entry point for trimming whitespace in one or more files.

    Settings come from the nearest `pyproject.toml` (`[tool.trim-whitespace]`)
    or `.trim-whitespace.toml`, with command-line options taking precedence.

    Raises:
        click.UsageError: If `--check` and `--stdout` are combined.
        click.BadParameter: If a path is unsafe or the configuration is invalid.
        click.ClickException: If a file cannot be read, is too large, or
            changes while it is being trimmed.

    Examples:
        trim-whitespace README.md docs/guide.md --keep-trailing-lines 1
    """
    if check and to_stdout:
        raise click.UsageError("--check and --stdout cannot be used together")

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s [%(name)s] %(message)s")

    base_dir = Path.cwd().resolve()
    try:
        max_file_size = get_max_file_size()
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    needs_trim: list[Path] = []
    for raw_path in filepaths:
        try:
            filepath = normalize_filepath(raw_path, base_dir)
        except ValueError as error:
            raise click.BadParameter(str(error)) from error

        try:
            settings = build_settings(
                filepath.parent,
                preserve_code_blocks=preserve_code_blocks,
                preserve_indented_lists=preserve_indented_lists,
                convert_non_breaking_spaces=convert_nbsp,
                trailing_lines_keep_max=keep_trailing_lines,
            )
        except ConfigError as error:
            raise click.BadParameter(str(error)) from error

        try:
            initial_stat = collect_file_stat(filepath)
            enforce_file_size(initial_stat, max_file_size, filepath)
            content = read_text(filepath)
        except IOError as error:
            raise click.ClickException(str(error)) from error

        result = trim_for_trigger(TriggerKind.SAVE, content, settings)

        if to_stdout:
            click.echo(result.text, nl=False)
            continue

        if not result.changed:
            logger.debug("%s: nothing to trim", filepath)
            continue

        if check:
            needs_trim.append(filepath)
            continue

        try:
            write_text_atomic(filepath, result.text, initial_stat)
        except IOError as error:
            raise click.ClickException(str(error)) from error
        logger.debug("%s: trimmed %d characters", filepath, len(content) - len(result.text))

    if needs_trim:
        for filepath in needs_trim:
            click.echo(f"would trim {filepath}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
