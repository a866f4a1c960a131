"""CLI command: cascadewind convert -- rewrite a document with utility classes."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from cascadewind.cli.output import stderr_logging
from cascadewind.config import DEFAULT_BREAKPOINTS, Breakpoint, ConverterConfig, parse_breakpoint
from cascadewind.errors import InputError, OracleError
from cascadewind.events import types as events
from cascadewind.events.bus import EventBus
from cascadewind.oracle.base import OracleFactory
from cascadewind.pipeline import Converter

# None means the Chromium-backed oracle; tests swap in a stub factory.
ORACLE_FACTORY: OracleFactory | None = None


def _parse_breakpoints(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> tuple[Breakpoint, ...]:
    try:
        return tuple(parse_breakpoint(raw) for raw in value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


def _progress(event: object) -> None:
    if isinstance(event, events.PhaseCompleted):
        click.echo(f"  {event.phase}: {event.detail}")
    elif isinstance(event, events.BreakpointCompleted):
        click.echo(
            f"  breakpoint {event.breakpoint}: {event.changed_elements} changed, "
            f"{event.attributed_elements} attributed, {event.converted_elements} converted"
        )
    elif isinstance(event, events.TranslationFellBack) and event.dropped:
        click.echo(
            f"  element {event.element_id} at {event.breakpoint}: "
            f"no utility for {', '.join(event.dropped)}",
            err=True,
        )


@click.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", default=None, help="Final document path")
@click.option(
    "--output-dir",
    default="cascadewind-output",
    show_default=True,
    help="Directory for intermediate artifacts and logs",
)
@click.option(
    "--breakpoint",
    "breakpoints",
    multiple=True,
    callback=_parse_breakpoints,
    metavar="NAME=WxH[@MIN]",
    help="Viewport to capture; repeatable (default: default=1280x800)",
)
@click.option("--headed", is_flag=True, help="Show the browser window")
@click.option("--strip-ids", is_flag=True, help="Remove data-element-id from the final document")
@click.option("-v", "--verbose", is_flag=True, help="Log everything to stderr")
def convert(
    document: str,
    stylesheet: str,
    output: str | None,
    output_dir: str,
    breakpoints: tuple[Breakpoint, ...],
    headed: bool,
    strip_ids: bool,
    verbose: bool,
) -> None:
    """Convert DOCUMENT styled by STYLESHEET into a Tailwind document.

    Intermediate snapshots, attribution results and the run log are kept
    under --output-dir.
    """
    try:
        config = ConverterConfig(
            breakpoints=breakpoints or DEFAULT_BREAKPOINTS,
            output_dir=output_dir,
            headless=not headed,
            strip_identities=strip_ids,
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--breakpoint") from exc

    bus = EventBus()
    bus.on_all(_progress)
    converter = Converter(config, oracle_factory=ORACLE_FACTORY, event_bus=bus)

    click.echo(f"Converting {Path(document).name} with {Path(stylesheet).name}")
    with stderr_logging(verbose):
        try:
            report = converter.run(document, stylesheet, output)
        except InputError as exc:
            click.echo(f"Input error: {exc}", err=True)
            sys.exit(1)
        except OracleError as exc:
            click.echo(f"Render oracle error: {exc}", err=True)
            sys.exit(1)

    click.echo()
    click.echo(f"Elements: {report.element_count}, decorated: {report.decorated_elements}")
    if report.warnings:
        click.echo(f"CSS warnings: {len(report.warnings)}")
    click.echo(f"Output: {report.output_path}")
    click.echo(f"Run directory: {report.output_dir}")
