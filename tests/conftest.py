# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# tests/conftest.py

"""
Shared test fixtures for the dotfiles test suite.

FakeGit stands in for GitRepository: it creates FakeRepository objects that
keep HEAD, the index and the object store in memory while still touching
the real info/ files on disk, which is what the operations read and write.
"""

import hashlib
from pathlib import Path
from typing import Optional, Sequence

import pytest

from dotfiles.config.manager import DotfilesConfig
from dotfiles.system.exceptions import GitCommandError


class FakeRepository:
    """In-memory VersionControl implementation."""

    def __init__(self, git_dir: Path, work_tree: Path, factory: "FakeGit"):
        self.git_dir = Path(git_dir)
        self.work_tree = Path(work_tree)
        self.factory = factory
        self.config: dict[str, str] = {}
        self.objects: dict[str, str] = {}
        self.head: dict[str, str] = {}
        self.index: dict[str, str] = {}
        self.modes: dict[str, str] = {}
        self.branch = factory.default_branch
        self.branches: dict[str, dict[str, str]] = {}
        self.commits: list[tuple[str, str, dict[str, str]]] = []
        self.checkouts: list[tuple[Optional[str], tuple[str, ...]]] = []
        self.forwarded: list[list[str]] = []

    def _check(self, operation: str) -> None:
        if operation in self.factory.fail:
            raise GitCommandError(f"fatal: simulated {operation} failure")

    def init_bare(self) -> None:
        self._check("init")
        (self.git_dir / "info").mkdir(parents=True, exist_ok=True)

    def clone_bare(self, url: str) -> None:
        self._check("clone")
        (self.git_dir / "info").mkdir(parents=True, exist_ok=True)
        self.head = dict(self.factory.remote_files)
        self.branches[self.branch] = dict(self.head)

    def config_set(self, key: str, value: str) -> None:
        self.config[key] = value

    def config_get(self, key: str) -> Optional[str]:
        return self.config.get(key)

    def hash_object(self, file: Path) -> str:
        content = Path(file).read_text()
        blob = hashlib.sha1(content.encode()).hexdigest()
        self.objects[blob] = content
        return blob

    def update_index(self, blob: str, path: str, mode: str = "100644") -> None:
        self.index[path] = self.objects[blob]
        self.modes[path] = mode

    def show(self, rev: str, path: str) -> Optional[str]:
        return self.head.get(path)

    def reset_index(self) -> None:
        self.index = dict(self.head)

    def ls_files(self) -> list[str]:
        return sorted(self.index)

    def has_commits(self) -> bool:
        return bool(self.commits) or self.factory.remote_has_commits

    def current_branch(self) -> str:
        return self.branch

    def create_branch(self, name: str) -> None:
        self.branches[name] = dict(self.head)
        self.branch = name

    def checkout(self, ref: Optional[str] = None, paths: Sequence[str] = (), quiet: bool = True) -> None:
        self._check("checkout" if ref else "quiet-checkout")
        self.checkouts.append((ref, tuple(paths)))
        if ref and not paths:
            self.branch = ref
            self.head = dict(self.branches.get(ref, self.head))
            self.index = dict(self.head)
        for rel_path in paths:
            target = self.work_tree / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(self.head[rel_path])

    def add(self, paths: Sequence[str]) -> None:
        for rel_path in paths:
            self.index[rel_path] = (self.work_tree / rel_path).read_text()

    def has_staged_changes(self) -> bool:
        return self.index != self.head

    def commit(self, message: str) -> None:
        self.head = dict(self.index)
        self.branches[self.branch] = dict(self.head)
        self.commits.append((self.branch, message, dict(self.head)))

    def forward(self, args: Sequence[str]) -> int:
        self.forwarded.append(list(args))
        return self.factory.forward_returncode


class FakeGit:
    """Factory standing in for GitRepository; remembers every repository it creates."""

    def __init__(self):
        self.remote_files: dict[str, str] = {}
        self.remote_has_commits = True
        self.fail: set[str] = set()
        self.default_branch = "main"
        self.forward_returncode = 0
        self.repos: list[FakeRepository] = []

    def __call__(self, git_dir: Path, work_tree: Path) -> FakeRepository:
        repo = FakeRepository(git_dir, work_tree, self)
        self.repos.append(repo)
        return repo

    @property
    def repo(self) -> FakeRepository:
        return self.repos[-1]


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point the configuration file at a temporary directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("DOTFILES_CONFIG_HOME", str(config_dir))
    return config_dir


@pytest.fixture
def home(tmp_path):
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    return home_dir


@pytest.fixture
def environ(home):
    """A minimal environment for default ignore list generation."""
    return {"HOME": str(home), "XDG_CONFIG_HOME": str(home / ".config"), "EDITOR": "true"}


@pytest.fixture
def fake_git():
    return FakeGit()


@pytest.fixture
def config(config_home):
    return DotfilesConfig.load()


@pytest.fixture
def initialized(config, tmp_path, home, environ, fake_git):
    """A configuration whose repository was created with init_repository."""
    from dotfiles.core.operations import init_repository

    init_repository(config, tmp_path / "repo.git", home=home, environ=environ, factory=fake_git)
    return config
