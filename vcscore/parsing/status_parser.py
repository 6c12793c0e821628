"""Parse ``git status --porcelain=v1 -b -z`` records."""

import logging
import os
import re
from pathlib import Path

from vcscore.constants import DETACHED_BRANCH, UNKNOWN_BRANCH
from vcscore.models.status import FileChange, RepoStatus

logger = logging.getLogger(__name__)

_AHEAD = re.compile(r"\bahead (\d+)")
_BEHIND = re.compile(r"\bbehind (\d+)")
_NO_COMMITS_PREFIX = "No commits yet on "


def _resolve(repo_root: Path, path: str) -> Path:
    return Path(os.path.normpath(repo_root / path))


def parse_porcelain_record(
    repo_root: Path, record: str | None, next_record: str | None = None
) -> FileChange | None:
    """
    Parse one NUL-terminated porcelain v1 record.

    With ``-z``, a rename or copy is written as two records: the destination
    path first, then the source path. When either status code is R or C,
    ``next_record`` is taken as the source path.

    Args:
        repo_root: Repository root that paths are relative to
        record: Record text: two status characters, a space, then the path
        next_record: The record that follows, if any

    Returns:
        FileChange, or None for records shorter than three characters. The
        caller must skip ``next_record`` when the result has ``orig_path`` set.
    """
    if not record or len(record) < 3:
        return None

    index_status, worktree_status = record[0], record[1]
    path = record[2:].strip()

    expects_second_path = index_status in "RC" or worktree_status in "RC"
    if expects_second_path and next_record:
        return FileChange(
            path=_resolve(repo_root, path),
            orig_path=_resolve(repo_root, next_record),
            index_status=index_status,
            worktree_status=worktree_status,
        )

    return FileChange(
        path=_resolve(repo_root, path),
        index_status=index_status,
        worktree_status=worktree_status,
    )


def parse_file_changes(repo_root: Path, records: list[str]) -> list[FileChange]:
    """Parse consecutive file records, consuming rename/copy source records."""
    changes = []
    index = 0
    while index < len(records):
        next_record = records[index + 1] if index + 1 < len(records) else None
        change = parse_porcelain_record(repo_root, records[index], next_record)
        if change is None:
            logger.warning(f"Skipping malformed status record: {records[index]!r}")
        else:
            changes.append(change)
            if change.orig_path is not None:
                index += 1
        index += 1
    return changes


def parse_branch_header(header: str | None) -> tuple[str, int, int]:
    """
    Parse the ``## ...`` branch header.

    Examples:
        "## main...origin/main [ahead 1, behind 2]" -> ("main", 1, 2)
        "## HEAD (no branch)" -> ("(detached)", 0, 0)
        "## No commits yet on main" -> ("main", 0, 0)

    Returns:
        Tuple of (branch, ahead, behind)
    """
    header = (header or "").strip()
    if header.startswith("## "):
        header = header[3:].strip()

    ahead = behind = 0
    bracket = header.rfind("[")
    if bracket >= 0:
        tracking = header[bracket:]
        ahead_match = _AHEAD.search(tracking)
        behind_match = _BEHIND.search(tracking)
        ahead = int(ahead_match.group(1)) if ahead_match else 0
        behind = int(behind_match.group(1)) if behind_match else 0

    if header.startswith(_NO_COMMITS_PREFIX):
        branch = header[len(_NO_COMMITS_PREFIX):].split("...")[0].strip()
    elif header.startswith("HEAD"):
        branch = DETACHED_BRANCH
    else:
        head = header.split("...", 1)[0].strip()
        branch = head.split(" ", 1)[0].strip() if head else ""

    return branch or UNKNOWN_BRANCH, ahead, behind


def parse_porcelain_v1_z(repo_root: Path, records: list[str] | None) -> RepoStatus:
    """
    Parse the records of ``git status --porcelain=v1 -b -z``.

    Args:
        repo_root: Repository root
        records: NUL-delimited records; the first one is the branch header

    Returns:
        RepoStatus
    """
    if not records:
        return RepoStatus(branch=UNKNOWN_BRANCH)

    records = list(records)
    if records[0].startswith("## "):
        header, records = records[0], records[1:]
    else:
        header = None

    branch, ahead, behind = parse_branch_header(header)
    return RepoStatus(
        branch=branch,
        ahead=ahead,
        behind=behind,
        changes=parse_file_changes(repo_root, records),
    )
