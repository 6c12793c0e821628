"""Pure formatting functions for display output."""

from datetime import datetime, timezone
from pathlib import Path

from vcscore.models.status import FileChange


def format_relative_time(dt: datetime) -> str:
    """Format datetime as relative time.

    Args:
        dt: Datetime to format.

    Returns:
        Formatted time string (e.g., "2h ago", "1w ago", "3mo ago", "1y ago").
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    time_diff = datetime.now(timezone.utc) - dt

    if time_diff.days < 0:
        return "in the future"
    if time_diff.days == 0:
        if time_diff.seconds < 60:
            return "just now"
        elif time_diff.seconds < 3600:
            return f"{time_diff.seconds // 60}m ago"
        else:
            return f"{time_diff.seconds // 3600}h ago"
    elif time_diff.days < 7:
        return f"{time_diff.days}d ago"
    elif time_diff.days < 30:
        return f"{time_diff.days // 7}w ago"
    elif time_diff.days < 365:
        return f"{time_diff.days // 30}mo ago"
    else:
        return f"{time_diff.days // 365}y ago"


def format_datetime(dt: datetime | None, include_relative: bool = True) -> str:
    """Format a datetime with optional relative time.

    Args:
        dt: Datetime to format, or None.
        include_relative: Whether to include relative time suffix.

    Returns:
        Formatted datetime string, or "N/A" if dt is None.
    """
    if dt is None:
        return "N/A"

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    date_str = dt.strftime("%Y-%m-%d %H:%M")
    if include_relative:
        return f"{date_str} ({format_relative_time(dt)})"
    return date_str


def format_path(path: Path, root: Path | None = None) -> str:
    """Show ``path`` relative to ``root`` when it lies inside it."""
    if root is not None:
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            pass
    return str(path)


def format_status_code(change: FileChange) -> str:
    """Two-character porcelain code with spaces shown as dots, e.g. "M." or ".M"."""
    return f"{change.index_status}{change.worktree_status}".replace(" ", ".")


def describe_change(change: FileChange) -> str:
    """One-word description of a file change."""
    if change.is_untracked:
        return "untracked"
    if change.is_conflict:
        return "conflict"
    if change.is_renamed:
        return "renamed"
    if change.is_copied:
        return "copied"
    if change.is_added:
        return "added"
    if change.is_deleted:
        return "deleted"
    if change.is_modified:
        return "modified"
    return "changed"
