"""CLI command: cascadewind normalize -- print the canonical longhand CSS."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from cascadewind.cli.output import stderr_logging
from cascadewind.normalizer import normalize_css


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
def normalize(stylesheet: str) -> None:
    """Normalize STYLESHEET and print it to stdout.

    Warnings go to stderr; the exit code is 0 even when fragments were
    skipped.
    """
    try:
        source = Path(stylesheet).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        click.echo(f"Could not read {stylesheet}: {exc}", err=True)
        sys.exit(1)

    with stderr_logging():
        result = normalize_css(source)
    click.echo(result.css)
