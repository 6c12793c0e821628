"""Tests for display formatting helpers."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

from cli.display.diff_renderer import DiffRenderer
from cli.display.formatters import (
    describe_change,
    format_datetime,
    format_path,
    format_relative_time,
    format_status_code,
)
from vcscore.models.diff import DiffFile
from vcscore.models.status import FileChange


def change(index, worktree):
    return FileChange(path=Path("/repo/a.txt"), index_status=index, worktree_status=worktree)


def test_format_relative_time():
    """Test relative time buckets."""
    now = datetime.now(timezone.utc)

    assert format_relative_time(now) == "just now"
    assert format_relative_time(now - timedelta(hours=3)) == "3h ago"
    assert format_relative_time(now - timedelta(days=2)) == "2d ago"
    assert format_relative_time(now - timedelta(days=800)) == "2y ago"
    assert format_relative_time(now + timedelta(days=2)) == "in the future"


def test_format_datetime():
    """Test absolute dates with and without relative suffix."""
    dt = datetime(2024, 1, 2, 3, 4, tzinfo=timezone.utc)

    assert format_datetime(dt, include_relative=False) == "2024-01-02 03:04"
    assert format_datetime(dt).startswith("2024-01-02 03:04 (")
    assert format_datetime(None) == "N/A"


def test_format_path():
    """Test paths inside the root are shown relative to it."""
    assert format_path(Path("/repo/src/a.py"), Path("/repo")) == "src/a.py"
    assert format_path(Path("/elsewhere/a.py"), Path("/repo")) == str(Path("/elsewhere/a.py"))


def test_status_codes_and_descriptions():
    """Test porcelain codes and their descriptions."""
    assert format_status_code(change("M", " ")) == "M."
    assert describe_change(change("?", "?")) == "untracked"
    assert describe_change(change("U", "U")) == "conflict"
    assert describe_change(change("R", " ")) == "renamed"
    assert describe_change(change("A", "M")) == "added"
    assert describe_change(change(" ", "D")) == "deleted"
    assert describe_change(change(" ", "M")) == "modified"


def test_diff_file_headers():
    """Test file header wording."""
    renderer = DiffRenderer()

    assert renderer.format_file_header(DiffFile(new_path=Path("a.txt"))) == "new file: a.txt"
    assert renderer.format_file_header(DiffFile(old_path=Path("a.txt"))) == "deleted: a.txt"
    assert (
        renderer.format_file_header(DiffFile(old_path=Path("a.txt"), new_path=Path("b.txt")))
        == "renamed: a.txt -> b.txt"
    )
    assert (
        renderer.format_file_header(DiffFile(old_path=Path("a.txt"), new_path=Path("a.txt")))
        == "modified: a.txt"
    )
