"""User-facing progress output."""

import logging
from abc import ABC, abstractmethod

import click

from eos_upgrade.cli.output import user_output

logger = logging.getLogger(__name__)


class UserFeedback(ABC):
    """Reports migration progress to the operator.

    Core steps call ctx.feedback methods instead of echoing directly, so
    tests can capture what an operator would have seen.

    Usage:
        ctx.feedback.info("Removing legacy apps...")
        ctx.feedback.warning("Could not uninstall com.example.App")
        ctx.feedback.success("✓ Repository configuration updated")
    """

    @abstractmethod
    def info(self, message: str) -> None:
        """Show informational message."""

    @abstractmethod
    def success(self, message: str) -> None:
        """Show success message."""

    @abstractmethod
    def warning(self, message: str) -> None:
        """Show a suppressed failure that did not stop the run."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Show error message."""


class InteractiveFeedback(UserFeedback):
    """Feedback written to the terminal."""

    def info(self, message: str) -> None:
        user_output(message)

    def success(self, message: str) -> None:
        """Show success message in green."""
        user_output(click.style(message, fg="green"))

    def warning(self, message: str) -> None:
        """Show warning in yellow and record it in the log."""
        logger.warning(message)
        user_output(click.style("Warning: ", fg="yellow") + message)

    def error(self, message: str) -> None:
        """Show error message in red."""
        user_output(click.style("Error: ", fg="red") + message)
