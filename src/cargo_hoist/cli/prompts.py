"""Interactive selection prompts for the hoist command."""

import click
from rich.console import Console
from rich.table import Table

from cargo_hoist.core.binaries import BinaryRecord


def render_records_table(records: list[BinaryRecord], title: str | None = None) -> Table:
    """Build a numbered table of records for selection menus."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="yellow")
    table.add_column("name", style="blue")
    table.add_column("location", style="cyan", overflow="fold")
    for i, record in enumerate(records, start=1):
        table.add_row(str(i), record.name, str(record.location))
    return table


def parse_selection(raw: str, count: int) -> list[int]:
    """Parse a selection like ``1,3-4`` into zero-based indexes.

    ``all`` selects everything. Indexes are returned in ascending order
    without duplicates.

    Raises:
        click.BadParameter: If a token is not a number or range within 1..count
    """
    text = raw.strip().lower()
    if text in ("all", "*"):
        return list(range(count))

    picked: set[int] = set()
    for token in text.replace(" ", ",").split(","):
        if not token:
            continue
        start, sep, end = token.partition("-")
        try:
            first = int(start)
            last = int(end) if sep else first
        except ValueError:
            raise click.BadParameter(f"'{token}' is not a number or range") from None
        if first < 1 or last > count or first > last:
            raise click.BadParameter(f"'{token}' is outside 1-{count}")
        picked.update(range(first - 1, last))
    return sorted(picked)


def prompt_multiselect(records: list[BinaryRecord], console: Console) -> list[BinaryRecord]:
    """Ask the user which of ``records`` to hoist."""
    console.print(render_records_table(records, title="Registered binaries"))
    while True:
        raw = click.prompt(
            "Select binaries to hoist (e.g. 1,3-4 or all)", err=True, default="all"
        )
        try:
            indexes = parse_selection(raw, len(records))
        except click.BadParameter as e:
            click.echo(click.style(f"Invalid selection: {e.message}", fg="red"), err=True)
            continue
        return [records[i] for i in indexes]


def prompt_conflict_choice(
    name: str, records: list[BinaryRecord], console: Console
) -> BinaryRecord:
    """Ask the user which of several same-named binaries to hoist."""
    console.print(render_records_table(records, title=f"Conflicting binaries named '{name}'"))
    choice = click.prompt(
        f"Which '{name}' should be hoisted?",
        type=click.IntRange(1, len(records)),
        err=True,
    )
    return records[choice - 1]
