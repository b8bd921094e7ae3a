import click

from cargo_hoist.cli.ensure import handle_hoist_errors
from cargo_hoist.cli.output import format_record, machine_output
from cargo_hoist.core import hoist_ops
from cargo_hoist.core.context import HoistContext


@click.command("find")
@click.argument("binary")
@click.pass_obj
@handle_hoist_errors
def find_cmd(ctx: HoistContext, binary: str) -> None:
    """Search for a binary in the hoist registry."""
    record = hoist_ops.find(ctx.config, binary)
    machine_output(format_record(record))
