#!/usr/bin/env python3
"""composebake CLI - drive bake builds from existing compose files."""
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from composebake.cli_support import (
    find_compose_file,
    handle_cli_error,
    print_success,
    print_warning,
    setup_file_logging,
)
from composebake.core.logger import get_logger
from composebake.models.bake import Project
from composebake.models.errors import ComposeError
from composebake.services.docker_compose import ComposeTranslator

app = typer.Typer(
    name="composebake",
    help="""composebake - compose services as bake targets

Reads a compose file and prints the equivalent bake definition.

Quick start:
  composebake print docker-compose.yml      # Bake JSON on stdout
  composebake targets docker-compose.yml    # Table of targets
  composebake validate docker-compose.yml   # Check only
""",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def _translate(compose_file: Optional[str], workdir: Optional[Path],
               verbose: bool, log_file: Optional[str]) -> Project:
    setup_file_logging(log_file=log_file, verbose=verbose)
    source = find_compose_file(compose_file)
    translator = ComposeTranslator()
    try:
        return translator.translate_file(source, working_dir=workdir)
    except ComposeError as exc:
        handle_cli_error(exc, console, verbose=verbose)


@app.command("print")
def print_definition(
    compose_file: Optional[str] = typer.Argument(None, help="Path to the compose file"),
    workdir: Optional[Path] = typer.Option(None, "--workdir", "-w", help="Base directory for env_file and secret paths"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file"),
) -> None:
    """Print the bake definition for a compose file as JSON."""
    project = _translate(compose_file, workdir, verbose, log_file)
    typer.echo(json.dumps(project.to_dict(), indent=2))


@app.command("targets")
def list_targets(
    compose_file: Optional[str] = typer.Argument(None, help="Path to the compose file"),
    workdir: Optional[Path] = typer.Option(None, "--workdir", "-w", help="Base directory for env_file and secret paths"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Show the targets a compose file produces."""
    project = _translate(compose_file, workdir, verbose, None)

    if not project.targets:
        print_warning(console, "No service declares a build section")
        return

    table = Table(title="Build Targets", show_header=True)
    table.add_column("Target", style="cyan")
    table.add_column("Context", style="bold")
    table.add_column("Dockerfile", style="blue")
    table.add_column("Tags", style="green")
    table.add_column("Platforms", style="dim")
    for target in project.targets:
        table.add_row(
            target.name,
            target.context or "-",
            target.dockerfile or "-",
            ", ".join(target.tags) or "-",
            ", ".join(target.platforms) or "-",
        )
    console.print(table)


@app.command("validate")
def validate(
    compose_file: Optional[str] = typer.Argument(None, help="Path to the compose file"),
    workdir: Optional[Path] = typer.Option(None, "--workdir", "-w", help="Base directory for env_file and secret paths"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Check that a compose file translates cleanly."""
    project = _translate(compose_file, workdir, verbose, None)
    print_success(console, f"{len(project.targets)} target(s) ready to build")


if __name__ == "__main__":
    app()
