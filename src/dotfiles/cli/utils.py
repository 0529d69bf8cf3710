# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/dotfiles/cli/utils.py

"""
CLI utility functions shared by the dotfiles commands.

All errors leave the program the same way: "ERROR: <message>" and
"Aborting..." on standard error, then exit status 1.
"""

import functools
from typing import Any, Callable

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from dotfiles.config.manager import DotfilesConfig
from dotfiles.system.exceptions import ConfigError, DotfilesError

console = Console()
err_console = Console(stderr=True)


def report_error(error: Exception) -> None:
    """Print an error in the uniform ERROR / Aborting... format."""
    err_console.print(f"[red]ERROR:[/red] {escape(str(error))}", soft_wrap=True)
    err_console.print("Aborting...", soft_wrap=True)


def handle_operation_error(error: Exception) -> None:
    """Report error and exit with status 1."""
    report_error(error)
    raise typer.Exit(1)


def load_config_with_console(verbose: bool = False, tolerant: bool = False) -> DotfilesConfig:
    """Load the configuration, exiting with an error report on failure.

    With tolerant, an unreadable configuration is logged and replaced by an
    empty one, so commands that rewrite it (init, clone) or never read it
    (help) still run.
    """
    if verbose:
        console.print("[dim]Loading configuration...[/dim]")
    try:
        return DotfilesConfig.load()
    except ConfigError as e:
        if not tolerant:
            handle_operation_error(e)
        logger.warning(f"Ignoring configuration: {e}")
        return DotfilesConfig()


def operation_command(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator turning DotfilesError into the uniform error exit."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except DotfilesError as e:
            handle_operation_error(e)

    return wrapper
