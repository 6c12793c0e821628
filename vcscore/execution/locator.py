"""Locate the git executable."""

import logging
import os
import shutil
import string
from pathlib import Path

from vcscore.exceptions import GitExecutableNotFoundError

logger = logging.getLogger(__name__)

_WINDOWS_CANDIDATES = [
    r"Program Files\Git\bin\git.exe",
    r"Program Files\Git\cmd\git.exe",
    r"Program Files (x86)\Git\bin\git.exe",
    r"Program Files (x86)\Git\cmd\git.exe",
    r"ProgramData\chocolatey\bin\git.exe",
]

_POSIX_CANDIDATES = [
    "/usr/bin/git",
    "/usr/local/bin/git",
    "/opt/homebrew/bin/git",
    "/snap/bin/git",
]


def _candidate_paths() -> list[Path]:
    """Common install locations for the current platform."""
    if os.name != "nt":
        return [Path(p) for p in _POSIX_CANDIDATES]

    paths = []
    # Start from C, A/B are floppy drives
    for drive in string.ascii_uppercase[2:]:
        root = Path(f"{drive}:\\")
        if root.exists():
            paths.extend(root / candidate for candidate in _WINDOWS_CANDIDATES)

    home = Path.home()
    paths.append(home / "scoop" / "apps" / "git" / "current" / "bin" / "git.exe")
    paths.append(home / "scoop" / "apps" / "git" / "current" / "cmd" / "git.exe")
    return paths


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def find_git_executable() -> Path | None:
    """
    Find git on PATH, then in common install locations.

    Returns:
        Path to the git executable, or None if not found
    """
    on_path = shutil.which("git")
    if on_path:
        return Path(on_path)

    for candidate in _candidate_paths():
        if _is_executable(candidate):
            logger.debug(f"Found git at {candidate}")
            return candidate

    return None


def resolve_git_executable(override: Path | None = None) -> Path:
    """
    Resolve the git executable, preferring an explicit override.

    Args:
        override: Configured executable path (from config or settings)

    Returns:
        Path to the git executable

    Raises:
        GitExecutableNotFoundError: If no executable can be found
    """
    if override is not None:
        if _is_executable(override):
            return override
        logger.warning(f"Configured git executable is not usable: {override}")

    found = find_git_executable()
    if found is None:
        raise GitExecutableNotFoundError(
            "Could not find a git executable. Install git or set GIT_EXECUTABLE."
        )
    return found
