import logging
import os
import sys

import click

from cargo_hoist.cli.commands.find import find_cmd
from cargo_hoist.cli.commands.hoist import hoist_cmd
from cargo_hoist.cli.commands.install import install_cmd
from cargo_hoist.cli.commands.list_cmd import list_cmd
from cargo_hoist.cli.commands.nuke import nuke_cmd
from cargo_hoist.cli.ensure import fail
from cargo_hoist.cli.output import user_output
from cargo_hoist.core.context import HoistContext, create_context
from cargo_hoist.core.errors import HookInstallError
from cargo_hoist.core.shell import install_hook, is_hook_installed

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def configure_logging(verbosity: int) -> None:
    """Map the -v count (or HOIST_DEBUG) to a logging level."""
    if os.environ.get("HOIST_DEBUG"):
        level = logging.DEBUG
    else:
        level = LOG_LEVELS[min(verbosity, len(LOG_LEVELS) - 1)]
    logging.basicConfig(level=level, format="[%(levelname)s %(name)s:%(lineno)d] %(message)s")


def _offer_shell_hook(ctx: HoistContext) -> None:
    """Offer the cargo pre-build hook once, on interactive terminals only."""
    if not ctx.interactive or is_hook_installed(ctx.config):
        return

    if not click.confirm(
        "Cargo hoist pre-cargo hook not installed. Do you want to install? "
        "Once installed, this prompt will not bother you again :)",
        default=True,
        err=True,
    ):
        user_output(click.style("Skipping hook installation", fg="yellow"))
        return

    try:
        rc_file = install_hook(ctx.config, ctx.shell)
    except HookInstallError as e:
        fail(str(e))
    except OSError as e:
        fail(f"Failed to install cargo hook: {e}")
    user_output(click.style(f"Installed cargo hook in {rc_file}", fg="green"))
    user_output(f"Run 'source {rc_file}' or open a new shell to activate it.")


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.version_option(package_name="cargo-hoist")
@click.option("-v", "--verbose", "verbosity", count=True, help="Increase log verbosity.")
@click.pass_context
def cli(ctx: click.Context, verbosity: int) -> None:
    """Memoize cargo-built binaries and hoist them into scope."""
    configure_logging(verbosity)

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(interactive=sys.stdin.isatty() and sys.stdout.isatty())

    _offer_shell_hook(ctx.obj)

    if ctx.invoked_subcommand is None:
        ctx.invoke(install_cmd)


cli.add_command(install_cmd)
cli.add_command(install_cmd, name="register")
cli.add_command(hoist_cmd)
cli.add_command(find_cmd)
cli.add_command(find_cmd, name="search")
cli.add_command(list_cmd)
cli.add_command(nuke_cmd)


def main() -> None:
    """CLI entry point used by the `cargo-hoist` console script."""
    cli()
