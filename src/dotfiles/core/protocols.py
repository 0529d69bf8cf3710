# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/dotfiles/core/protocols.py

"""
Version-control interface used by the dotfiles operations.

The operations in dotfiles.core.operations only talk to git through this
protocol; GitRepository is the real implementation and the test suite
provides an in-memory fake.
"""

from pathlib import Path
from typing import Optional, Protocol, Sequence


class VersionControl(Protocol):
    """Git operations needed to set up and edit a dotfiles repository.

    All methods act on one metadata directory whose working tree is the
    user's home directory. Failing calls raise GitCommandError unless the
    method documents otherwise.
    """

    git_dir: Path
    work_tree: Path

    def init_bare(self) -> None:
        """Create an empty metadata-only repository at git_dir."""
        ...

    def clone_bare(self, url: str) -> None:
        """Clone url as a metadata-only repository into git_dir."""
        ...

    def config_set(self, key: str, value: str) -> None:
        """Set a repository-local configuration value."""
        ...

    def config_get(self, key: str) -> Optional[str]:
        """Read a repository-local configuration value, None if unset."""
        ...

    def hash_object(self, file: Path) -> str:
        """Write file into the object store and return its blob id."""
        ...

    def update_index(self, blob: str, path: str, mode: str = "100644") -> None:
        """Insert blob into the index under path without touching the work tree."""
        ...

    def show(self, rev: str, path: str) -> Optional[str]:
        """Return the content of path at rev, None if it is not tracked there."""
        ...

    def reset_index(self) -> None:
        """Reset the index to HEAD, leaving the work tree alone."""
        ...

    def ls_files(self) -> list[str]:
        """List the paths recorded in the index."""
        ...

    def has_commits(self) -> bool:
        """Whether HEAD points to a commit; false in an empty repository."""
        ...

    def current_branch(self) -> str:
        """Name of the branch HEAD points to."""
        ...

    def create_branch(self, name: str) -> None:
        """Create branch name at HEAD and switch to it."""
        ...

    def checkout(self, ref: Optional[str] = None, paths: Sequence[str] = (), quiet: bool = True) -> None:
        """Check out ref (only paths, when given), or re-sync the work tree when ref is None."""
        ...

    def add(self, paths: Sequence[str]) -> None:
        """Stage paths from the work tree."""
        ...

    def has_staged_changes(self) -> bool:
        """True when the index differs from HEAD."""
        ...

    def commit(self, message: str) -> None:
        """Commit the index."""
        ...

    def forward(self, args: Sequence[str]) -> int:
        """Run an arbitrary git command attached to the terminal."""
        ...
