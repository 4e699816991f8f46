"""CLI error handling utilities with styled output.

Ensure asserts invariants with consistent, user-friendly error messages.
error_boundary turns the errors raised by core steps into exit codes.
All errors use a red "Error:" prefix for visual consistency.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import click

from eos_upgrade.cli.output import user_output
from eos_upgrade.core.context import UpgradeContext
from eos_upgrade.core.errors import GateError

logger = logging.getLogger(__name__)


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            user_output(click.style("Error: ", fg="red") + error_message)
            raise SystemExit(1)

    @staticmethod
    def superuser(ctx: UpgradeContext) -> None:
        """Ensure the command runs as root, otherwise exit.

        Raises:
            SystemExit: If not running with root privileges (with exit code 1)
        """
        Ensure.invariant(
            ctx.host.is_superuser(), "This command must be run with root privileges."
        )


@contextmanager
def error_boundary(*, mid_run: bool) -> Iterator[None]:
    """Report errors from core steps and exit with status 1.

    Gate errors mean nothing was changed. With mid_run set, any other
    RuntimeError, OSError or ValueError also warns that the system may be partially migrated.
    """
    try:
        yield
    except GateError as e:
        logger.debug("Gate failed: %s", type(e).__name__)
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(e.exit_code) from e
    except (RuntimeError, OSError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        user_output(click.style("Error: ", fg="red") + str(e))
        if mid_run:
            user_output("The system may be partially migrated.")
        raise SystemExit(1) from e
