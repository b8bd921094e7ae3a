import click

from cargo_hoist.cli.ensure import handle_hoist_errors
from cargo_hoist.cli.output import user_output
from cargo_hoist.core import hoist_ops
from cargo_hoist.core.context import HoistContext


@click.command("nuke")
@click.pass_obj
@handle_hoist_errors
def nuke_cmd(ctx: HoistContext) -> None:
    """Wipe the hoist registry."""
    hoist_ops.nuke(ctx.config)
    user_output(click.style("Hoist registry reset", fg="green"))
