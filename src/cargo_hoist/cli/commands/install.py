from pathlib import Path

import click

from cargo_hoist.cli.core import merge_names
from cargo_hoist.cli.ensure import handle_hoist_errors
from cargo_hoist.cli.output import user_output
from cargo_hoist.core import hoist_ops
from cargo_hoist.core.context import HoistContext


@click.command("install")
@click.argument("bins", nargs=-1)
@click.option(
    "-b",
    "--binaries",
    multiple=True,
    help="Binary to register. Merged with any positional names.",
)
@click.option(
    "-p",
    "--project",
    "project_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root to scan (defaults to the current directory).",
)
@click.option("-q", "--quiet", is_flag=True, help="Only print errors.")
@click.pass_obj
@handle_hoist_errors
def install_cmd(
    ctx: HoistContext,
    bins: tuple[str, ...],
    binaries: tuple[str, ...],
    project_root: Path | None,
    quiet: bool,
) -> None:
    """Register a project's built binaries in the hoist registry.

    With no names, every executable under target/<profile>/ is registered.
    """
    result = hoist_ops.install(
        ctx.config,
        project_root=project_root,
        names=merge_names(bins, binaries),
        cwd=ctx.cwd,
    )
    if quiet:
        return

    if not result.saved:
        user_output(click.style("No binaries found in the target directory", fg="yellow"))
        return

    user_output(
        click.style(f"Registered {len(result.discovered)} binaries", fg="green")
        + f" ({len(result.added)} new)"
    )
