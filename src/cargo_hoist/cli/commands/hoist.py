import click

from cargo_hoist.cli.core import merge_names, stderr_console
from cargo_hoist.cli.ensure import Ensure, fail, handle_hoist_errors
from cargo_hoist.cli.output import user_output
from cargo_hoist.cli.prompts import (
    prompt_conflict_choice,
    prompt_multiselect,
    render_records_table,
)
from cargo_hoist.core import hoist_ops
from cargo_hoist.core.binaries import BinaryRecord
from cargo_hoist.core.context import HoistContext
from cargo_hoist.core.hoist_ops import ConflictDetected, HoistCompleted, NeedsSelection


def _report_hoisted(records: list[BinaryRecord]) -> None:
    for record in records:
        user_output(
            click.style("Successfully hoisted ", fg="green")
            + click.style(record.name, fg="magenta")
        )


def _resolve_selection(ctx: HoistContext, outcome: NeedsSelection) -> list[BinaryRecord]:
    Ensure.invariant(
        bool(outcome.candidates), "No registered binaries. Run 'cargo-hoist install' first."
    )
    Ensure.invariant(
        ctx.interactive,
        "No binaries specified. Pass binary names, or --all to hoist every registered binary.",
    )
    return prompt_multiselect(outcome.candidates, stderr_console())


def _resolve_conflicts(ctx: HoistContext, outcome: ConflictDetected) -> list[BinaryRecord]:
    console = stderr_console()
    if not ctx.interactive:
        for name, records in outcome.conflicts.items():
            table = render_records_table(records, title=f"Conflicting binaries named '{name}'")
            console.print(table)
        fail(
            f"Found {len(outcome.conflicts)} conflicting binary name(s): "
            f"{', '.join(sorted(outcome.conflicts))}. Run interactively to choose."
        )

    user_output(
        click.style(
            f"Found {len(outcome.conflicts)} conflicting registered binary name(s), "
            "select which binaries to hoist.",
            fg="yellow",
        )
    )
    chosen = [
        prompt_conflict_choice(name, records, console)
        for name, records in outcome.conflicts.items()
    ]
    return outcome.resolved + chosen


@click.command("hoist")
@click.argument("bins", nargs=-1)
@click.option(
    "-b",
    "--binaries",
    multiple=True,
    help="Binary to hoist. Merged with any positional names.",
)
@click.option(
    "--all",
    "select_all",
    is_flag=True,
    help="With no names, hoist every registered binary. Conflicting names still need a choice.",
)
@click.pass_obj
@handle_hoist_errors
def hoist_cmd(
    ctx: HoistContext,
    bins: tuple[str, ...],
    binaries: tuple[str, ...],
    select_all: bool,
) -> None:
    """Copy registered binaries into the current directory."""
    outcome = hoist_ops.hoist(
        ctx.config,
        merge_names(bins, binaries),
        cwd=ctx.cwd,
        select_all=select_all,
    )

    match outcome:
        case HoistCompleted(copied=copied):
            _report_hoisted(copied)
        case NeedsSelection():
            selected = _resolve_selection(ctx, outcome)
            _report_hoisted(hoist_ops.hoist_records(selected, ctx.cwd))
        case ConflictDetected():
            selected = _resolve_conflicts(ctx, outcome)
            _report_hoisted(hoist_ops.hoist_records(selected, ctx.cwd))
