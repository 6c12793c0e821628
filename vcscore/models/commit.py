"""Commit models with Pydantic v2."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from vcscore.models.status import FileChange


class GitCommit(BaseModel):
    """A commit as returned by the batch log query.

    ``body`` is only filled in by a second, per-commit lookup.
    """

    model_config = ConfigDict(frozen=True)

    hash: str
    short_hash: str
    subject: str
    author_name: str
    author_email: str
    author_timestamp: int
    committer_name: str | None = None
    committer_email: str | None = None
    committer_timestamp: int = 0
    parent_hashes: list[str] = []
    body: str | None = None

    @property
    def authored_at(self) -> datetime:
        return datetime.fromtimestamp(self.author_timestamp, tz=timezone.utc)

    @property
    def is_merge(self) -> bool:
        return len(self.parent_hashes) > 1

    def with_body(self, body: str) -> "GitCommit":
        return self.model_copy(update={"body": body})


class CommitPage(BaseModel):
    """A page of commits plus the cursor for the next page, if any."""

    model_config = ConfigDict(frozen=True)

    commits: list[GitCommit] = []
    next_cursor: str | None = None


class CommitListMetadata(BaseModel):
    """Decorations shown next to a commit list."""

    model_config = ConfigDict(frozen=True)

    head_commit_hash: str | None = None
    tags_by_commit: dict[str, list[str]] = Field(default_factory=dict)


class CommitRequest(BaseModel):
    """What to commit and how."""

    model_config = ConfigDict(frozen=True)

    message: str
    description: str | None = None
    amend: bool = False
    sign_off: bool = False
    selected_changes: list[FileChange] = []


class GitAuthor(BaseModel):
    """An author line from ``git shortlog``."""

    model_config = ConfigDict(frozen=True)

    commit_count: int
    name: str
    email: str | None = None
