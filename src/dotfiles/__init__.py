# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/dotfiles/__init__.py

"""Track home directory dotfiles in a git repository kept outside $HOME."""
