# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/dotfiles/core/operations.py

"""
Dotfiles repository operations.

Provides the built-in commands:
- init_repository(): create an empty metadata repository for $HOME
- clone_repository(): clone a dotfiles repository, backing up replaced files
- edit_ignore() / edit_attributes(): edit info/exclude and info/attributes
  and track them as .gitignore and .gitattributes
- edit_readme(): edit the tracked README.md without it living in $HOME
- forward_command(): run any other git command against the repository

Every operation receives the loaded DotfilesConfig explicitly and creates
its VersionControl through a factory so tests can substitute a fake.
"""

import os
import shlex
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

from loguru import logger

from dotfiles.config.manager import DotfilesConfig
from dotfiles.core.git import GitRepository
from dotfiles.core.protocols import VersionControl
from dotfiles.core.templates import (
    GITATTRIBUTES,
    GITIGNORE,
    README,
    REPOSITORY_ONLY_FILES,
    SPARSE_CHECKOUT_PATTERNS,
    default_ignore_patterns,
    render_lines,
)
from dotfiles.system.exceptions import (
    CheckoutError,
    CloneError,
    EditorError,
    GitCommandError,
    InitError,
    ResolutionError,
)
from dotfiles.system.execution import CommandExecutor


DEFAULT_EDITOR = "vi"
DEFAULT_CLONE_PATH = "dotfiles"
BACKUP_BRANCH = "backup-before-clone"
BACKUP_MESSAGE = "Back up files replaced by dotfiles clone"
TRACKED_FILE_MODE = "100644"

# Control file in <git_dir>/info -> name it is tracked under
EXCLUDE_FILE = "exclude"
ATTRIBUTES_FILE = "attributes"
SPARSE_CHECKOUT_FILE = "sparse-checkout"

RepositoryFactory = Callable[[Path, Path], VersionControl]


@dataclass
class CloneResult:
    """Outcome of a successful clone; empty when the remote has no commits."""
    git_dir: Path
    branch: str
    backed_up: list[str] = field(default_factory=list)
    restored: list[str] = field(default_factory=list)
    imported: list[str] = field(default_factory=list)
    empty: bool = False


# ---- Helpers ----

def resolve_path(path: str | os.PathLike) -> Path:
    """Canonicalize path; its parent directory must already exist.

    Raises:
        ResolutionError: If the path cannot be made absolute and symlink free
    """
    try:
        resolved = Path(path).expanduser().resolve(strict=False)
    except (OSError, RuntimeError) as e:
        raise ResolutionError(f"Cannot resolve path '{path}': {e}", path=str(path)) from e
    if not resolved.parent.is_dir():
        raise ResolutionError(
            f"Cannot resolve path '{path}': {resolved.parent} does not exist",
            path=str(path),
        )
    return resolved


def resolve_editor(environ: Mapping[str, str]) -> list[str]:
    """Editor command from $EDITOR (which may carry arguments), else vi."""
    command = shlex.split(environ.get("EDITOR") or "")
    return command or [DEFAULT_EDITOR]


def run_editor(editor: Sequence[str], file: Path) -> None:
    """Open file in editor and block until it exits."""
    try:
        returncode = CommandExecutor.run_interactive([*editor, str(file)])
    except OSError as e:
        raise EditorError(f"Cannot run editor '{editor[0]}': {e}") from e
    if returncode != 0:
        raise EditorError(f"Editor '{editor[0]}' exited with status {returncode}")


def info_path(git_dir: Path, name: str) -> Path:
    return Path(git_dir) / "info" / name


def write_info_file(git_dir: Path, name: str, content: str) -> Path:
    """Replace a control file under <git_dir>/info."""
    target = info_path(git_dir, name)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    logger.debug(f"Wrote {target}")
    return target


def append_lines(file: Path, lines: Sequence[str]) -> None:
    """Append each line to file, keeping existing content line-terminated."""
    file.parent.mkdir(parents=True, exist_ok=True)
    prefix = ""
    if file.exists():
        existing = file.read_text(encoding="utf-8")
        if existing and not existing.endswith("\n"):
            prefix = "\n"
    with file.open("a", encoding="utf-8") as f:
        f.write(prefix + render_lines(lines))


def quiet_checkout(repo: VersionControl) -> None:
    """Bring the work tree in line with the index.

    A repository without commits has nothing to check out yet; that is
    expected right after init and only logged.
    """
    try:
        repo.checkout()
    except GitCommandError as e:
        logger.debug(f"Checkout skipped: {e}")


def stage_file(repo: VersionControl, file: Path, tracked_name: str) -> str:
    """Store file's content in the index as tracked_name, bypassing the work tree."""
    blob = repo.hash_object(file)
    repo.update_index(blob, tracked_name, TRACKED_FILE_MODE)
    logger.debug(f"Staged {file} as {tracked_name} ({blob})")
    return blob


# ---- Repository setup ----

def configure_repository(repo: VersionControl) -> None:
    """Point the metadata directory at $HOME with sparse checkout enabled."""
    repo.config_set("core.bare", "false")
    repo.config_set("core.worktree", str(repo.work_tree))
    repo.config_set("core.sparseCheckout", "true")
    repo.config_set("status.showUntrackedFiles", "no")


def write_control_files(repo: VersionControl, environ: Mapping[str, str]) -> None:
    write_info_file(repo.git_dir, SPARSE_CHECKOUT_FILE, render_lines(SPARSE_CHECKOUT_PATTERNS))
    write_info_file(
        repo.git_dir,
        EXCLUDE_FILE,
        render_lines(default_ignore_patterns(Path(repo.work_tree), environ)),
    )


def init_repository(
    config: DotfilesConfig,
    path: str | os.PathLike = ".",
    home: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    factory: RepositoryFactory = GitRepository,
) -> Path:
    """Create an empty dotfiles repository at path and record it in config.

    Args:
        config: Loaded configuration; git_dir is updated and saved
        path: Metadata directory location (default: current directory)
        home: Work tree (default: the user's home directory)
        environ: Environment for the default ignore list (default: os.environ)
        factory: Creates the VersionControl for the new directory

    Returns:
        The canonical metadata directory path

    Raises:
        ResolutionError: If path cannot be resolved
        InitError: If git cannot create the repository
    """
    environ = os.environ if environ is None else environ
    git_dir = resolve_path(path)
    repo = factory(git_dir, home or Path.home())

    logger.info(f"Initializing dotfiles repository in {git_dir}")
    try:
        repo.init_bare()
    except GitCommandError as e:
        raise InitError(f"Could not create repository in {git_dir}: {e}") from e

    config.git_dir = git_dir
    config.save()

    configure_repository(repo)
    write_control_files(repo, environ)
    return git_dir


def _import_tracked_control_files(repo: VersionControl) -> list[str]:
    """Replace info/exclude and info/attributes with the cloned copies, if any."""
    imported = []
    for control_name, tracked_name in ((EXCLUDE_FILE, GITIGNORE), (ATTRIBUTES_FILE, GITATTRIBUTES)):
        content = repo.show("HEAD", tracked_name)
        if content is None:
            continue
        write_info_file(repo.git_dir, control_name, content)
        imported.append(tracked_name)
    return imported


def _split_tracked_files(repo: VersionControl) -> tuple[list[str], list[str]]:
    """Split the tracked home files into those present in $HOME and those missing."""
    work_tree = Path(repo.work_tree)
    existing, missing = [], []
    for rel_path in repo.ls_files():
        if rel_path in REPOSITORY_ONLY_FILES:
            continue
        if os.path.lexists(work_tree / rel_path):
            existing.append(rel_path)
        else:
            missing.append(rel_path)
    return existing, missing


def _back_up_existing_files(repo: VersionControl, existing: Sequence[str]) -> None:
    """Commit the home directory versions of tracked files on BACKUP_BRANCH."""
    repo.create_branch(BACKUP_BRANCH)
    repo.add(existing)
    if repo.has_staged_changes():
        repo.commit(BACKUP_MESSAGE)
        logger.info(f"Backed up {len(existing)} existing files on {BACKUP_BRANCH}")
    else:
        logger.info("No existing files differ from the cloned repository")


def clone_repository(
    config: DotfilesConfig,
    url: str,
    path: str | os.PathLike = DEFAULT_CLONE_PATH,
    home: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    factory: RepositoryFactory = GitRepository,
) -> CloneResult:
    """Clone url as the dotfiles repository and check it out into $HOME.

    Files in $HOME that the checkout replaces are first committed on the
    backup-before-clone branch. An ignore or attributes file tracked by the
    cloned repository replaces the generated defaults.
    A remote without commits is only configured; nothing is backed up or
    checked out.

    Raises:
        ResolutionError: If path cannot be resolved
        CloneError: If git cannot clone url
        CheckoutError: If the final checkout is blocked; the repository stays
            configured and the backup branch committed
    """
    environ = os.environ if environ is None else environ
    git_dir = resolve_path(path)
    repo = factory(git_dir, home or Path.home())

    logger.info(f"Cloning {url} into {git_dir}")
    try:
        repo.clone_bare(url)
    except GitCommandError as e:
        raise CloneError(f"Could not clone {url}: {e}") from e

    config.git_dir = git_dir
    config.save()

    configure_repository(repo)
    repo.config_set("remote.origin.fetch", "+refs/heads/*:refs/remotes/origin/*")
    write_control_files(repo, environ)
    imported = _import_tracked_control_files(repo)

    branch = repo.current_branch()
    if not repo.has_commits():
        logger.info(f"{url} has no commits; nothing to check out into $HOME")
        return CloneResult(git_dir=git_dir, branch=branch, imported=imported, empty=True)

    repo.reset_index()
    existing, missing = _split_tracked_files(repo)
    _back_up_existing_files(repo, existing)

    # Switching branches keeps files that were absent from $HOME deleted, so
    # they are checked out explicitly.
    try:
        repo.checkout(branch)
        if missing:
            repo.checkout(branch, paths=missing)
    except GitCommandError as e:
        hint = f"dotfiles checkout {branch}"
        raise CheckoutError(
            f"Could not check out '{branch}': {e}. "
            f"Your previous files are saved on branch '{BACKUP_BRANCH}'. "
            f"Resolve the conflicts, then run '{hint}' manually",
            branch=branch,
            recovery_hint=hint,
        ) from e

    return CloneResult(
        git_dir=git_dir, branch=branch, backed_up=existing, restored=missing, imported=imported
    )


# ---- Editing ----

def edit_info_file(
    config: DotfilesConfig,
    control_name: str,
    tracked_name: str,
    lines: Sequence[str] = (),
    home: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    factory: RepositoryFactory = GitRepository,
) -> Path:
    """Edit <git_dir>/info/<control_name> and track it as tracked_name.

    With no lines the file is opened in the editor; otherwise each line is
    appended. Either way the resulting content is staged directly into the
    index, so tracked_name never has to exist in the work tree.
    """
    environ = os.environ if environ is None else environ
    repo = factory(config.require_git_dir(), home or Path.home())
    control_file = info_path(repo.git_dir, control_name)

    try:
        if lines:
            append_lines(control_file, lines)
        else:
            control_file.parent.mkdir(parents=True, exist_ok=True)
            control_file.touch(exist_ok=True)
    except OSError as e:
        raise EditorError(f"Cannot update {control_file}: {e}") from e

    if not lines:
        run_editor(resolve_editor(environ), control_file)

    stage_file(repo, control_file, tracked_name)
    quiet_checkout(repo)
    return control_file


def edit_ignore(config: DotfilesConfig, patterns: Sequence[str] = (), **kwargs) -> Path:
    return edit_info_file(config, EXCLUDE_FILE, GITIGNORE, patterns, **kwargs)


def edit_attributes(config: DotfilesConfig, attributes: Sequence[str] = (), **kwargs) -> Path:
    return edit_info_file(config, ATTRIBUTES_FILE, GITATTRIBUTES, attributes, **kwargs)


def edit_readme(
    config: DotfilesConfig,
    home: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    factory: RepositoryFactory = GitRepository,
) -> str:
    """Edit the tracked README.md in a scratch copy and stage the result.

    Returns:
        The blob id staged for README.md
    """
    environ = os.environ if environ is None else environ
    repo = factory(config.require_git_dir(), home or Path.home())

    with tempfile.TemporaryDirectory(prefix="dotfiles-") as scratch:
        scratch_file = Path(scratch) / README
        try:
            scratch_file.write_text(repo.show("HEAD", README) or "", encoding="utf-8")
        except OSError as e:
            raise EditorError(f"Cannot create {scratch_file}: {e}") from e

        run_editor(resolve_editor(environ), scratch_file)
        blob = stage_file(repo, scratch_file, README)

    quiet_checkout(repo)
    return blob


# ---- Pass-through ----

def forward_command(
    config: DotfilesConfig,
    args: Sequence[str],
    home: Optional[Path] = None,
    factory: RepositoryFactory = GitRepository,
) -> int:
    """Run git with args against the dotfiles repository; return its exit code."""
    repo = factory(config.require_git_dir(), home or Path.home())
    return repo.forward(list(args))
