"""cascadewind CLI entry point: Click group with subcommands."""

import click

from cascadewind import __version__


@click.group()
@click.version_option(version=__version__, prog_name="cascadewind")
def cli() -> None:
    """cascadewind - convert a stylesheet into Tailwind utility classes."""


# Import and register subcommands
from cascadewind.cli.convert import convert  # noqa: E402
from cascadewind.cli.normalize import normalize  # noqa: E402

cli.add_command(convert)
cli.add_command(normalize)
