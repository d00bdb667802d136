#!/usr/bin/env python3
"""create-rmv-site CLI - Kirby CMS with Tailwind CSS v4, Typography, jQuery and Fancybox."""
from typing import Optional

import typer
from rich.panel import Panel
from rich.text import Text

from rmvsite import __version__
from rmvsite.cli_support import handle_cli_error, print_error, print_info, print_success, print_warning
from rmvsite.core.config import DEFAULT_PROJECT_NAME, ProjectSpec, load_settings
from rmvsite.core.errors import SetupError
from rmvsite.core.logger import console, get_logger, setup_file_logging
from rmvsite.scaffold import SetupSequencer
from rmvsite.scaffold.templates import BANNER

app = typer.Typer(
    name="create-rmv-site",
    help="""Set up a Kirby CMS project with Tailwind CSS v4, Typography plugin,
jQuery, and Fancybox, like Ruby likes it.
""",
    add_completion=False,
)

logger = get_logger(__name__)


def _version_callback(value: bool):
    if value:
        console.print(f"create-rmv-site v{__version__}")
        raise typer.Exit()


@app.command()
def create(
    name: str = typer.Option(DEFAULT_PROJECT_NAME, "--name", "-n", help="Project name"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Settings file (YAML)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write the log to this file"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Clone Kirby Plainkit and wire up the front-end toolchain."""
    setup_file_logging(log_file=log_file, verbose=verbose)

    try:
        settings = load_settings(config)
        project = ProjectSpec.from_name(name)
    except SetupError as e:
        handle_cli_error(e, console, verbose=verbose)

    console.print(BANNER, style="cyan", markup=False, highlight=False)
    print_info(console, f"Setting up Kirby project: {project.name} in {project.project_dir}")

    sequencer = SetupSequencer(settings)
    try:
        sequencer.run(project)
    except KeyboardInterrupt:
        print_warning(console, "Setup cancelled")
        raise typer.Exit(130)
    except SetupError as e:
        print_error(console, "An error occurred during setup")
        handle_cli_error(e, console, verbose=verbose)

    print_success(console, "Project setup complete! Ruby is very proud of you.")
    console.print(Panel(Text(sequencer.summary(project)), border_style="green"))


if __name__ == "__main__":
    app()
