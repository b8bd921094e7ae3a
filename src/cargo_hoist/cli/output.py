"""Output utilities for CLI commands with clear intent.

user_output() is for messages meant for the person at the terminal and goes to
stderr. machine_output() is for results another program may consume and goes
to stdout.
"""

import click

from cargo_hoist.core.binaries import BinaryRecord


def user_output(message: str = "", nl: bool = True) -> None:
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", nl: bool = True) -> None:
    click.echo(message, nl=nl)


def format_record(record: BinaryRecord) -> str:
    """Format a record as ``name: location`` with the name highlighted."""
    return click.style(f"{record.name}: ", fg="blue") + click.style(
        str(record.location), fg="cyan"
    )
