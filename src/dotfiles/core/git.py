# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/dotfiles/core/git.py

"""Git command-line implementation of the VersionControl protocol."""

import os
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from dotfiles.system.exceptions import GitCommandError
from dotfiles.system.execution import CommandExecutor, CommandResult


DEFAULT_GIT = "git"


def git_executable() -> str:
    """Git binary to run, overridable with DOTFILES_GIT."""
    return os.getenv("DOTFILES_GIT") or DEFAULT_GIT


class GitRepository:
    """A metadata directory whose working tree is the home directory."""

    def __init__(self, git_dir: Path, work_tree: Optional[Path] = None, git: Optional[str] = None):
        self.git_dir = Path(git_dir)
        self.work_tree = Path(work_tree) if work_tree else Path.home()
        self.git = git or git_executable()

    def __repr__(self) -> str:
        return f"GitRepository(git_dir={str(self.git_dir)!r}, work_tree={str(self.work_tree)!r})"

    def _cmd(self, *args: str) -> list[str]:
        return [self.git, f"--git-dir={self.git_dir}", *args]

    def _run(self, *args: str, check: bool = True) -> CommandResult:
        return CommandExecutor.run_local(self._cmd(*args), check=check)

    # ---- Repository creation ----

    def init_bare(self) -> None:
        CommandExecutor.run_local([self.git, "init", "--bare", "--quiet", str(self.git_dir)])

    def clone_bare(self, url: str) -> None:
        CommandExecutor.run_local([self.git, "clone", "--bare", "--quiet", url, str(self.git_dir)])

    # ---- Configuration ----

    def config_set(self, key: str, value: str) -> None:
        self._run("config", "--local", key, value)

    def config_get(self, key: str) -> Optional[str]:
        result = self._run("config", "--local", "--get", key, check=False)
        if not result.success:
            return None
        return result.stdout.strip()

    # ---- Low-level object and index manipulation ----

    def hash_object(self, file: Path) -> str:
        return self._run("hash-object", "-w", "--", str(file)).stdout.strip()

    def update_index(self, blob: str, path: str, mode: str = "100644") -> None:
        self._run("update-index", "--add", "--cacheinfo", f"{mode},{blob},{path}")

    def show(self, rev: str, path: str) -> Optional[str]:
        result = self._run("show", f"{rev}:{path}", check=False)
        if not result.success:
            logger.debug(f"{path} not tracked at {rev}: {result.stderr.strip()}")
            return None
        return result.stdout

    def ls_files(self) -> list[str]:
        result = self._run(f"--work-tree={self.work_tree}", "ls-files", "-z")
        return [path for path in result.stdout.split("\0") if path]

    # ---- Branches and commits ----

    def reset_index(self) -> None:
        self._run(f"--work-tree={self.work_tree}", "reset", "--quiet", "--mixed")

    def has_commits(self) -> bool:
        return self._run("rev-parse", "--verify", "--quiet", "HEAD", check=False).success

    def current_branch(self) -> str:
        return self._run("symbolic-ref", "--short", "HEAD").stdout.strip()

    def create_branch(self, name: str) -> None:
        self._run(f"--work-tree={self.work_tree}", "checkout", "--quiet", "-b", name)

    def checkout(self, ref: Optional[str] = None, paths: Sequence[str] = (), quiet: bool = True) -> None:
        args = [f"--work-tree={self.work_tree}", "checkout"]
        if quiet:
            args.append("--quiet")
        if ref:
            args.append(ref)
        if paths:
            args.extend(["--", *paths])
        self._run(*args)

    def add(self, paths: Sequence[str]) -> None:
        if not paths:
            return
        self._run(f"--work-tree={self.work_tree}", "add", "--", *paths)

    def has_staged_changes(self) -> bool:
        result = self._run("diff", "--cached", "--quiet", check=False)
        if result.returncode not in (0, 1):
            raise GitCommandError(
                f"git diff failed: {result.stderr.strip()}",
                command=self._cmd("diff", "--cached", "--quiet"),
                returncode=result.returncode,
                stderr=result.stderr,
            )
        return result.returncode == 1

    def commit(self, message: str) -> None:
        self._run(f"--work-tree={self.work_tree}", "commit", "--quiet", "-m", message)

    # ---- Pass-through ----

    def forward(self, args: Sequence[str]) -> int:
        try:
            return CommandExecutor.run_interactive(self._cmd(*args))
        except OSError as e:
            raise GitCommandError(f"Cannot run '{self.git}': {e}", command=self._cmd(*args)) from e
