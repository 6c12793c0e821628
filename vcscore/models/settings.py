"""Persisted git settings model."""

from pathlib import Path

from pydantic import BaseModel


class GitSettings(BaseModel):
    """Per-project git settings.

    Stored as a JSON document (``vcs/git.json``) in the project's data
    directory.
    """

    auto_refresh_interval: float | None = None  # seconds
    git_executable: Path | None = None
