"""
CLI Module - Typer-based command-line interface for fitting learners.

This module provides the main CLI application and aggregates commands from submodules.
"""
import logging

import typer

from .learner_commands import fit_command, learners_command, superlearner_command
from .utils import console, show_error, show_info, show_success

# Create main app
app = typer.Typer(
    name="sl-learners",
    help="Fit base learners and super learners from CSV files",
    add_completion=False
)


@app.callback()
def configure(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging"
    )
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


# Register commands
app.command(name="learners")(learners_command)
app.command(name="fit")(fit_command)
app.command(name="superlearner")(superlearner_command)


def main() -> None:
    """Main entry point for the CLI."""
    app()


__all__ = [
    "app",
    "main",
    "console",
    "show_error",
    "show_success",
    "show_info",
]
