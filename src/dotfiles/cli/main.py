# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/dotfiles/cli/main.py

"""
CLI dispatcher for dotfiles.

The built-in commands (init, clone, ignore, attributes, readme, help) are
handled here; any other first token is passed, together with everything
after it, unchanged to git running against the dotfiles repository.
"""

# Standard library imports
from importlib.metadata import PackageNotFoundError, version
from typing import Any, List, Optional

# Third-party imports
import click
import typer
from typer.core import TyperGroup

# Local imports
from dotfiles.cli.commands import actions as action_commands
from dotfiles.cli.utils import (
    console,
    handle_operation_error,
    load_config_with_console,
    operation_command,
)
from dotfiles.system.logging_setup import setup_logging

FORWARD_COMMAND = "git-forward"
FORWARD_ARGS = "dotfiles.forward_args"

# Options after the command name belong to the command, and unknown
# options before it are kept for git.
GROUP_CONTEXT = {
    "help_option_names": ["-h", "--help"],
    "ignore_unknown_options": True,
    "allow_interspersed_args": False,
}
PATTERN_CONTEXT = {"ignore_unknown_options": True}
# Commands that run without a readable configuration; init and clone rewrite it.
CONFIG_OPTIONAL_COMMANDS = ("help", "init", "clone")


class PassthroughGroup(TyperGroup):
    """Typer group routing unknown commands to git."""

    def resolve_command(self, ctx: click.Context, args: List[str]) -> Any:
        name = args[0] if args else None
        if name and name != FORWARD_COMMAND and self.get_command(ctx, name) is not None:
            return super().resolve_command(ctx, args)

        # The raw tokens are kept in ctx.meta because click's own parsing
        # would drop a literal "--".
        ctx.meta[FORWARD_ARGS] = list(args)
        return FORWARD_COMMAND, self.get_command(ctx, FORWARD_COMMAND), []


app = typer.Typer(
    cls=PassthroughGroup,
    help="""dotfiles - version control for your home directory

[bold blue]Setup:[/bold blue] init, clone
[bold green]Editing:[/bold green] ignore, attributes, readme

Any other command is run by git against the dotfiles repository,
e.g. 'dotfiles status' or 'dotfiles commit -a'.
""",
    rich_markup_mode="rich",
    context_settings=GROUP_CONTEXT,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        try:
            pkg_version = version("dotfiles")
        except PackageNotFoundError as e:
            handle_operation_error(e)
        console.print(f"dotfiles version {pkg_version}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """dotfiles - keep $HOME under git with the repository stored elsewhere."""
    setup_logging(debug=debug)
    config = load_config_with_console(tolerant=ctx.invoked_subcommand in CONFIG_OPTIONAL_COMMANDS)
    if config.local_log:
        setup_logging(debug=debug, log_dir=config.local_log)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        raise typer.Exit(operation_command(action_commands.forward)(config, []))


# =============================================================================
# SETUP COMMANDS
# =============================================================================

@app.command()
@operation_command
def init(
    ctx: typer.Context,
    path: str = typer.Argument(".", help="Where to create the repository metadata"),
) -> None:
    """[bold blue]Setup[/bold blue]: Create an empty dotfiles repository."""
    action_commands.init(console, ctx.obj, path=path)


@app.command()
@operation_command
def clone(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Repository to clone"),
    path: str = typer.Argument("dotfiles", help="Where to store the repository metadata"),
) -> None:
    """[bold blue]Setup[/bold blue]: Clone a dotfiles repository into your home directory."""
    action_commands.clone(console, ctx.obj, url, path=path)


# =============================================================================
# EDITING COMMANDS
# =============================================================================

@app.command(context_settings=PATTERN_CONTEXT)
@operation_command
def ignore(
    ctx: typer.Context,
    patterns: Optional[List[str]] = typer.Argument(None, help="Patterns to append (opens $EDITOR if none)"),
) -> None:
    """[bold green]Editing[/bold green]: Edit the ignore rules tracked as .gitignore."""
    action_commands.ignore(console, ctx.obj, patterns or [])


@app.command(context_settings=PATTERN_CONTEXT)
@operation_command
def attributes(
    ctx: typer.Context,
    lines: Optional[List[str]] = typer.Argument(None, help="Attribute lines to append (opens $EDITOR if none)"),
) -> None:
    """[bold green]Editing[/bold green]: Edit the attributes tracked as .gitattributes."""
    action_commands.attributes(console, ctx.obj, lines or [])


@app.command()
@operation_command
def readme(ctx: typer.Context) -> None:
    """[bold green]Editing[/bold green]: Edit the repository README.md."""
    action_commands.readme(console, ctx.obj)


@app.command(name="help")
def help_command(ctx: typer.Context) -> None:
    """Show this message and exit."""
    help_text = ctx.parent.get_help()
    if help_text:
        typer.echo(help_text)


@app.command(
    name=FORWARD_COMMAND,
    hidden=True,
    add_help_option=False,
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
def forward(ctx: typer.Context) -> None:
    args = ctx.meta.get(FORWARD_ARGS, ctx.args)
    raise typer.Exit(operation_command(action_commands.forward)(ctx.obj, args))


# =============================================================================
# ENTRY POINT
# =============================================================================

def cli_main() -> None:  # pragma: no cover - entry point
    """Entry point for the dotfiles CLI application."""
    app()


if __name__ == "__main__":  # pragma: no cover
    cli_main()
