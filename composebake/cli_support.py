"""Shared utilities for composebake CLI modules."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

# Default compose file names, in the order compose itself looks for them
COMPOSE_FILES = [
    "compose.yaml",
    "compose.yml",
    "docker-compose.yml",
    "docker-compose.yaml",
]


def find_compose_file(compose_path: Optional[str] = None) -> str:
    """Locate the compose file to translate."""
    if compose_path:
        return compose_path

    if env_files := os.environ.get("COMPOSE_FILE"):
        return env_files.split(os.pathsep)[0]

    for path in COMPOSE_FILES:
        if Path(path).exists():
            return path

    return "docker-compose.yml"


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Set up logging for CLI commands.

    Args:
        log_file: Path to log file (optional)
        verbose: Enable verbose logging
    """
    from composebake.core.logger import set_verbose
    from composebake.core.logger import setup_file_logging as _setup_file_logging

    set_verbose(verbose)
    if log_file:
        _setup_file_logging(log_file=log_file, verbose=verbose)


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    print_error(console, str(e))
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting."""
    console.print(f"[green]{prefix}[/green] {escape(message)}")


def print_error(console: Console, message: str, prefix: str = "✗") -> None:
    """Print error message with consistent formatting."""
    console.print(f"[red]{prefix}[/red] {escape(message)}")


def print_warning(console: Console, message: str, prefix: str = "⚠") -> None:
    """Print warning message with consistent formatting."""
    console.print(f"[yellow]{prefix}[/yellow] {escape(message)}")
