# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/dotfiles/cli/commands/actions.py

"""
Action command handlers.

Handles: init, clone, ignore, attributes, readme and git pass-through
"""

from typing import Sequence

from rich.console import Console
from rich.markup import escape

from dotfiles.config.manager import DotfilesConfig
from dotfiles.core import operations


def init(console: Console, config: DotfilesConfig, path: str = ".") -> None:
    """Initialize an empty dotfiles repository."""
    git_dir = operations.init_repository(config, path)
    console.print(f"[green]✓[/green] Initialized dotfiles repository in {escape(str(git_dir))}")
    console.print(f"[dim]Configuration saved to {escape(str(config.path))}[/dim]")


def clone(console: Console, config: DotfilesConfig, url: str, path: str = operations.DEFAULT_CLONE_PATH) -> None:
    """Clone a dotfiles repository and check it out into the home directory."""
    result = operations.clone_repository(config, url, path)
    console.print(f"[green]✓[/green] Cloned {escape(url)} into {escape(str(result.git_dir))}")
    for name in result.imported:
        console.print(f"[dim]Using {name} from the cloned repository[/dim]")
    if result.backed_up:
        console.print(
            f"[dim]{len(result.backed_up)} existing files saved on branch "
            f"'{operations.BACKUP_BRANCH}'[/dim]"
        )
    if result.empty:
        console.print("[dim]The cloned repository has no commits yet; nothing was checked out[/dim]")
        return
    console.print(f"[green]✓[/green] Checked out '{escape(result.branch)}'")


def ignore(console: Console, config: DotfilesConfig, patterns: Sequence[str] = ()) -> None:
    """Edit or extend the ignore rules tracked as .gitignore."""
    operations.edit_ignore(config, patterns)
    if patterns:
        console.print(f"[dim]Added {len(patterns)} ignore pattern(s)[/dim]")


def attributes(console: Console, config: DotfilesConfig, lines: Sequence[str] = ()) -> None:
    """Edit or extend the attributes tracked as .gitattributes."""
    operations.edit_attributes(config, lines)
    if lines:
        console.print(f"[dim]Added {len(lines)} attribute line(s)[/dim]")


def readme(console: Console, config: DotfilesConfig) -> None:
    """Edit the tracked README.md."""
    operations.edit_readme(config)
    console.print("[dim]README.md staged; commit it with 'dotfiles commit'[/dim]")


def forward(config: DotfilesConfig, args: Sequence[str]) -> int:
    """Run git with args against the dotfiles repository."""
    return operations.forward_command(config, args)
