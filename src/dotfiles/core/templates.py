# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/dotfiles/core/templates.py

"""
Generated content for the repository control files.

- SPARSE_CHECKOUT_PATTERNS: written verbatim to info/sparse-checkout
- default_ignore_patterns(): the lines written to info/exclude on init

Both are plain data so they can be inspected and tested without git.
"""

import re
from pathlib import Path
from typing import Final, Iterable, Mapping, Optional

README: Final = "README.md"
LICENSE: Final = "LICENSE"
GITIGNORE: Final = ".gitignore"
GITATTRIBUTES: Final = ".gitattributes"

# Repository files that describe the repository itself and must never be
# materialized into the home directory.
REPOSITORY_ONLY_FILES: Final[tuple[str, ...]] = (README, LICENSE, GITIGNORE, GITATTRIBUTES)

SPARSE_CHECKOUT_PATTERNS: Final[tuple[str, ...]] = (
    "/*",
    *(f"!/{name}" for name in REPOSITORY_ONLY_FILES),
)

HEADER: Final[tuple[str, ...]] = (
    "# Default ignore rules generated by dotfiles.",
    "# Edit with 'dotfiles ignore' to add your own patterns.",
)

HISTORY_PATTERNS: Final[tuple[str, ...]] = (
    ".*_history",
    ".lesshst",
    ".viminfo",
    ".wget-hsts",
    ".zcompdump*",
)

JUNK_PATTERNS: Final[tuple[str, ...]] = (
    "*~",
    "*.swp",
    "*.swo",
    "*.bak",
    "*.tmp",
    "*.orig",
    "*.rej",
    "*.pyc",
    "__pycache__/",
    ".DS_Store",
    "Thumbs.db",
)

# (environment variable, conventional directory name)
USER_DIRS: Final[tuple[tuple[str, str], ...]] = (
    ("XDG_DESKTOP_DIR", "Desktop"),
    ("XDG_DOCUMENTS_DIR", "Documents"),
    ("XDG_DOWNLOAD_DIR", "Downloads"),
    ("XDG_MUSIC_DIR", "Music"),
    ("XDG_PICTURES_DIR", "Pictures"),
    ("XDG_PUBLICSHARE_DIR", "Public"),
    ("XDG_TEMPLATES_DIR", "Templates"),
    ("XDG_VIDEOS_DIR", "Videos"),
)

_USER_DIRS_LINE = re.compile(r'^\s*(XDG_[A-Z]+_DIR)\s*=\s*"?([^"]*)"?\s*$')


def read_user_dirs(home: Path, environ: Mapping[str, str]) -> dict[str, str]:
    """Parse xdg-user-dirs' user-dirs.dirs, returning {} when it is absent."""
    config_home = environ.get("XDG_CONFIG_HOME") or str(home / ".config")
    user_dirs_file = Path(config_home) / "user-dirs.dirs"
    try:
        text = user_dirs_file.read_text(encoding="utf-8")
    except OSError:
        return {}

    found = {}
    for line in text.splitlines():
        if line.lstrip().startswith("#"):
            continue
        match = _USER_DIRS_LINE.match(line)
        if match:
            found[match.group(1)] = match.group(2)
    return found


def _expand_home(value: str, home: Path) -> Path:
    value = value.replace("${HOME}", str(home)).replace("$HOME", str(home))
    if value.startswith("~"):
        value = str(home) + value[1:]
    return Path(value)


def home_relative_pattern(directory: str, home: Path) -> Optional[str]:
    """Anchored ignore pattern for a directory below home, else None."""
    path = _expand_home(directory, home)
    if not path.is_absolute():
        path = home / path
    try:
        relative = path.relative_to(home)
    except ValueError:
        return None
    if relative == Path("."):
        return None
    return f"/{relative.as_posix()}/"


def default_ignore_patterns(
    home: Path,
    environ: Mapping[str, str],
    extra: Iterable[str] = (),
) -> list[str]:
    """Build the ordered default ignore list.

    Args:
        home: The home directory the repository's work tree points at
        environ: Environment used to resolve XDG base and user directories
        extra: User supplied patterns appended after the defaults

    Returns:
        Pattern lines (including comment lines) in file order
    """
    lines = list(HEADER)

    lines.append("")
    lines.append("# Caches")
    cache_dir = home_relative_pattern(environ.get("XDG_CACHE_HOME") or ".cache", home)
    if cache_dir:
        lines.append(cache_dir)
    lines.append("/.local/share/Trash/")

    lines.append("")
    lines.append("# History files")
    lines.extend(HISTORY_PATTERNS)

    lines.append("")
    lines.append("# Editor and backup files")
    lines.extend(JUNK_PATTERNS)

    lines.append("")
    lines.append("# User directories")
    user_dirs = read_user_dirs(home, environ)
    seen = set()
    for variable, default_name in USER_DIRS:
        directory = environ.get(variable) or user_dirs.get(variable) or default_name
        pattern = home_relative_pattern(directory, home)
        if pattern and pattern not in seen:
            seen.add(pattern)
            lines.append(pattern)

    extra = [pattern for pattern in extra if pattern]
    if extra:
        lines.append("")
        lines.extend(extra)
    return lines


def render_lines(lines: Iterable[str]) -> str:
    """Join lines into file content with a trailing newline."""
    return "".join(f"{line}\n" for line in lines)
