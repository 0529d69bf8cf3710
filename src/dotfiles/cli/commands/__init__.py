# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/dotfiles/cli/commands/__init__.py

"""
Command handlers for the dotfiles CLI.

The handlers in actions.py call dotfiles.core.operations and print the
results; the typer wiring lives in dotfiles.cli.main.
"""
