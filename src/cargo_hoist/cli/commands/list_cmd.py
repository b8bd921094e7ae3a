import click

from cargo_hoist.cli.ensure import handle_hoist_errors
from cargo_hoist.cli.output import format_record, machine_output
from cargo_hoist.core import hoist_ops
from cargo_hoist.core.context import HoistContext


@click.command("list")
@click.pass_obj
@handle_hoist_errors
def list_cmd(ctx: HoistContext) -> None:
    """List registered binaries."""
    for record in hoist_ops.list_binaries(ctx.config):
        machine_output(format_record(record))
