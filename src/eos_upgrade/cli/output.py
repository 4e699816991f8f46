"""Output utilities for CLI commands with clear intent.

user_output is for everything the operator reads: progress, warnings and
errors. It goes to stderr so stdout stays clean for machine_output.
"""

import click
from rich.console import Console
from rich.panel import Panel


def user_output(message: str = "", nl: bool = True) -> None:
    """Write a message for the operator to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", nl: bool = True) -> None:
    """Write structured output to stdout."""
    click.echo(message, nl=nl)


def warning_panel(title: str, body: str, console: Console | None = None) -> None:
    """Render a bordered warning shown before a confirmation prompt.

    Args:
        title: Panel title
        body: Warning text; may span several lines
        console: Rich Console to print to (defaults to a stderr console)
    """
    if console is None:
        console = Console(stderr=True)
    console.print(Panel(body, title=title, border_style="yellow", padding=(1, 2)))
