"""
Parses a micron markup file and prints it as HTML or as a JSON document.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .constants import ALIGNMENT_NAMES, THEME_NAMES
from .exceptions import ParseFileError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    get_max_line_length,
    normalize_filepath,
)
from .models import document_to_dict
from .parser import parse_file
from .render import render_html

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="micron-markup")
@click.option("--theme", type=click.Choice(THEME_NAMES), help="Color theme")
@click.option(
    "--align",
    "default_alignment",
    type=click.Choice(ALIGNMENT_NAMES),
    help="Default paragraph alignment",
)
@click.option("--link-scheme", help="Prefix prepended to link urls")
@click.option("--divider-width", type=int, help="Repetitions used for divider fill characters")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "json"]),
    default="html",
    show_default=True,
    help="Output format",
)
@click.option("-v", "--verbose", is_flag=True, help="Log parser diagnostics to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    theme: str | None = None,
    default_alignment: str | None = None,
    link_scheme: str | None = None,
    divider_width: int | None = None,
    output_format: str = "html",
    verbose: bool = False,
):
    """
    Entry point for rendering a micron markup file.

    Args:
        filepath: Path to the markup file to process.
        theme: Override for the color theme.
        default_alignment: Override for the default paragraph alignment.
        link_scheme: Override for the link url prefix.
        divider_width: Override for the divider fill width.
        output_format: ``html`` for a rendered fragment, ``json`` for the
            parsed document.
        verbose: Enable debug logging.

    Raises:
        click.BadParameter: If the path or configuration overrides are invalid.
        click.ClickException: If limits are exceeded or the file cannot be read.

    Examples:
        micron-markup index.mu --theme light --format json
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    base_dir = Path.cwd().resolve()
    try:
        filepath = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(
            filepath.parent,
            theme=theme,
            default_alignment=default_alignment,
            link_scheme=link_scheme,
            divider_width=divider_width,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
        max_line_length = get_max_line_length(default=config.max_line_length)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(filepath), max_file_size, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        document = parse_file(filepath, max_line_length, config)
    except ParseFileError as error:
        raise click.ClickException(str(error)) from error

    if not document.blocks:
        click.echo(f"Warning: {filepath.name} produced an empty document", err=True)

    if output_format == "json":
        click.echo(json.dumps(document_to_dict(document), indent=2))
    else:
        click.echo(render_html(document, config))


if __name__ == "__main__":
    cli()
