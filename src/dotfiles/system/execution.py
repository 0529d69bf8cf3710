# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/dotfiles/system/execution.py

"""Local process execution with consistent error reporting."""

import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from loguru import logger

from dotfiles.system.exceptions import GitCommandError


@dataclass
class CommandResult:
    """Captured result of a finished command."""
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


class CommandExecutor:
    """Run external commands, capturing or inheriting standard streams."""

    @staticmethod
    def run_local(
        cmd: Sequence[str],
        check: bool = True,
        timeout: Optional[int] = None,
        input_text: Optional[str] = None,
    ) -> CommandResult:
        """Run a command and capture its output.

        Args:
            cmd: Command and arguments
            check: Raise GitCommandError on a nonzero exit status
            timeout: Seconds before subprocess.TimeoutExpired is raised
            input_text: Text passed on standard input

        Returns:
            CommandResult with decoded stdout and stderr

        Raises:
            GitCommandError: If the command fails and check is True
        """
        logger.debug(f"Running: {' '.join(cmd)}")
        kwargs = {"capture_output": True, "text": True, "timeout": timeout}
        if input_text is not None:
            kwargs["input"] = input_text
        try:
            result = subprocess.run(list(cmd), **kwargs)
        except FileNotFoundError as e:
            raise GitCommandError(f"Cannot run '{cmd[0]}': {e}", command=cmd) from e

        command_result = CommandResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
        if check and not command_result.success:
            stderr = (result.stderr or "").strip()
            message = stderr or f"Command failed with exit code {result.returncode}"
            raise GitCommandError(
                f"Local command failed: {message}",
                command=cmd,
                returncode=result.returncode,
                stderr=result.stderr or "",
            )
        return command_result

    @staticmethod
    def run_interactive(cmd: Sequence[str]) -> int:
        """Run a command attached to the terminal and return its exit code."""
        logger.debug(f"Running interactively: {' '.join(cmd)}")
        return subprocess.call(list(cmd))
