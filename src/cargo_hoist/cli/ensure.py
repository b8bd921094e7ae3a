"""CLI error handling utilities with styled output.

Domain errors and filesystem errors raised by the core become a red
``Error:`` line on stderr and exit code 1. Anything else is a bug and is left
to propagate with its traceback.
"""

import functools
import logging
from collections.abc import Callable
from typing import NoReturn, ParamSpec, TypeVar

import click

from cargo_hoist.cli.output import user_output
from cargo_hoist.core.errors import HoistError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            fail(error_message)


def fail(error_message: str) -> NoReturn:
    """Print a styled error and exit with code 1."""
    user_output(click.style("Error: ", fg="red") + error_message)
    raise SystemExit(1)


def handle_hoist_errors(func: Callable[P, R]) -> Callable[P, R]:
    """Render HoistError and OSError from a command as a styled error."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except HoistError as e:
            logger.debug("Command failed", exc_info=True)
            fail(str(e))
        except OSError as e:
            logger.debug("Command failed", exc_info=True)
            fail(f"{e.strerror or e}: {e.filename}" if e.filename else str(e))

    return wrapper
