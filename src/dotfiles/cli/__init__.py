# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/dotfiles/cli/__init__.py

"""Command Line Interface package for dotfiles."""

from .main import cli_main as main, app

__all__ = ['main', 'app']
