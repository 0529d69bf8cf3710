# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/dotfiles/system/exceptions.py

"""
Dotfiles-specific exception classes.

Every error raised here is reported by the CLI as "ERROR: <message>"
followed by "Aborting..." and a nonzero exit status.
"""

from typing import Optional, Sequence


class DotfilesError(Exception):
    """Base exception for all dotfiles errors."""
    pass


class ConfigError(DotfilesError):
    """Raised when the configuration file is missing, unreadable or invalid."""
    pass


class ResolutionError(DotfilesError):
    """Raised when a path cannot be canonicalized."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class InitError(DotfilesError):
    """Raised when creating the metadata repository fails."""
    pass


class CloneError(DotfilesError):
    """Raised when cloning the remote repository fails."""
    pass


class CheckoutError(DotfilesError):
    """Raised when the final checkout after a clone is blocked."""

    def __init__(self, message: str, branch: Optional[str] = None, recovery_hint: Optional[str] = None):
        self.branch = branch
        self.recovery_hint = recovery_hint
        super().__init__(message)


class EditorError(DotfilesError):
    """Raised when the editor process or an info file operation fails."""
    pass


class GitCommandError(DotfilesError):
    """Raised when a required git invocation exits nonzero."""

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)
