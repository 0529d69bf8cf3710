# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/dotfiles/config/__init__.py

"""Configuration loading and persistence."""

from .manager import DotfilesConfig, get_config_path

__all__ = ['DotfilesConfig', 'get_config_path']
