#!/usr/bin/env python3
import json
import logging
import sys
from pathlib import Path
from typing import Any, Tuple

import click
from click.core import ParameterSource

from rubydefs.formatting import format_definition
from rubydefs.logger import logger
from rubydefs.parsers import ParsedSource, parse_file
from rubydefs.settings import OutputFormat, OutputSettings, load_settings


def _setup_logging(debug: bool) -> None:
    # Only syntax-error warnings are shown unless --debug is given.
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)
    logging.getLogger().setLevel(level)


def _render_text(parsed: ParsedSource, settings: OutputSettings) -> None:
    for defn in parsed.definitions():
        click.echo(f"Defn: {format_definition(defn, signatures=settings.signatures)}")
    if settings.comments:
        for comment in parsed.comments():
            click.echo(f"C: {comment.start_line}: {parsed.comment_text(comment)}")


def _to_json(parsed: ParsedSource, settings: OutputSettings) -> dict[str, Any]:
    data: dict[str, Any] = {
        "path": parsed.path,
        "definitions": [defn.to_dict() for defn in parsed.definitions()],
    }
    if settings.comments:
        data["comments"] = [
            {"line": c.start_line, "text": parsed.comment_text(c)}
            for c in parsed.comments()
        ]
    return data


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(
        exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path
    ),
)
@click.option(
    "--signatures/--no-signatures",
    default=False,
    help="Print sig parameters and return types next to methods.",
)
@click.option(
    "--comments/--no-comments",
    default=False,
    help="Print the comments of each file after its definitions.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.TEXT.value,
    help="Output format.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug logging.",
)
@click.pass_context
def main(
    ctx: click.Context,
    files: Tuple[Path, ...],
    signatures: bool,
    comments: bool,
    output_format: str,
    debug: bool,
) -> None:
    """
    List the definitions (modules, classes, methods, attributes, props and
    constants) of Ruby FILES, with their Sorbet signatures.
    """
    _setup_logging(debug)

    # Flags given on the command line win over RUBYDEFS_* environment values.
    overrides: dict[str, Any] = {}
    for param, key, value in (
        ("signatures", "signatures", signatures),
        ("comments", "comments", comments),
        ("output_format", "format", OutputFormat(output_format.lower())),
    ):
        if ctx.get_parameter_source(param) == ParameterSource.COMMANDLINE:
            overrides[key] = value
    settings = load_settings(**overrides)

    results = []
    for idx, path in enumerate(files):
        try:
            parsed = parse_file(path)
        except OSError as e:
            raise click.ClickException(f"Cannot read {path}: {e}")

        if settings.format == OutputFormat.JSON:
            results.append(_to_json(parsed, settings))
            continue

        if len(files) > 1:
            if idx:
                click.echo("")
            click.echo(f"==> {path} <==")
        _render_text(parsed, settings)

    if settings.format == OutputFormat.JSON:
        click.echo(json.dumps(results, indent=2))

    logger.debug("Finished", files=len(files))


if __name__ == "__main__":
    main()
