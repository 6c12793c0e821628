"""Working tree status models."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class FileChange(BaseModel):
    """One porcelain status entry.

    ``path`` is absolute (resolved against the repository root).
    ``orig_path`` is only set for renames and copies.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    orig_path: Path | None = None
    index_status: str
    worktree_status: str

    @property
    def is_untracked(self) -> bool:
        return self.index_status == "?" and self.worktree_status == "?"

    @property
    def is_conflict(self) -> bool:
        return self.index_status == "U" or self.worktree_status == "U"

    @property
    def is_modified(self) -> bool:
        return self.index_status == "M" or self.worktree_status == "M"

    @property
    def is_added(self) -> bool:
        return self.index_status == "A" or self.worktree_status == "A"

    @property
    def is_deleted(self) -> bool:
        return self.index_status == "D" or self.worktree_status == "D"

    @property
    def is_renamed(self) -> bool:
        return self.index_status == "R" or self.worktree_status == "R"

    @property
    def is_copied(self) -> bool:
        return self.index_status == "C" or self.worktree_status == "C"

    @property
    def is_unchanged(self) -> bool:
        return self.index_status == " " and self.worktree_status == " "

    @property
    def is_staged(self) -> bool:
        return self.index_status != " " and not self.is_untracked

    @property
    def is_unstaged(self) -> bool:
        return self.worktree_status != " " and not self.is_untracked


class RepoStatus(BaseModel):
    """Branch information plus file changes from one status run."""

    model_config = ConfigDict(frozen=True)

    branch: str
    ahead: int = 0
    behind: int = 0
    changes: list[FileChange] = []

    @property
    def staged(self) -> list[FileChange]:
        return [change for change in self.changes if change.is_staged]

    @property
    def unstaged(self) -> list[FileChange]:
        return [change for change in self.changes if change.is_unstaged]

    @property
    def untracked(self) -> list[FileChange]:
        return [change for change in self.changes if change.is_untracked]
