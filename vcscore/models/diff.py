"""Unified diff models with Pydantic v2."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class LineType(str, Enum):
    """Kind of line inside a diff hunk."""

    CONTEXT = "CONTEXT"
    ADDITION = "ADDITION"
    DELETION = "DELETION"


class DiffMode(str, Enum):
    """Which side a file diff is taken against."""

    WORKTREE = "WORKTREE"  # index vs working tree
    STAGED = "STAGED"  # HEAD vs index
    HEAD = "HEAD"  # HEAD vs working tree


class DiffHunkLine(BaseModel):
    """One line of a hunk.

    old_line_number is None for additions, new_line_number is None for
    deletions.
    """

    model_config = ConfigDict(frozen=True)

    type: LineType
    old_line_number: int | None = None
    new_line_number: int | None = None
    content: str
    no_newline_at_end: bool = False


class DiffHunk(BaseModel):
    """A hunk introduced by an ``@@ -a,b +c,d @@`` header."""

    model_config = ConfigDict(frozen=True)

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    section_header: str | None = None
    lines: list[DiffHunkLine] = []

    def count(self, *types: LineType) -> int:
        """Number of lines whose type is one of ``types``."""
        return sum(1 for line in self.lines if line.type in types)


class DiffFile(BaseModel):
    """All hunks touching one file."""

    model_config = ConfigDict(frozen=True)

    old_path: Path | None = None
    new_path: Path | None = None
    is_binary: bool = False
    headers: list[str] = []
    hunks: list[DiffHunk] = []

    @property
    def is_new_file(self) -> bool:
        return self.old_path is None

    @property
    def is_deleted_file(self) -> bool:
        return self.new_path is None

    @property
    def path(self) -> Path | None:
        """The path to display: the new path, or the old one for deletions."""
        return self.new_path if self.new_path is not None else self.old_path


class DiffBlob(BaseModel):
    """Parsed output of one diff invocation."""

    model_config = ConfigDict(frozen=True)

    files: list[DiffFile] = []

    @property
    def is_empty(self) -> bool:
        return not self.files


class AdditionsDeletions(BaseModel):
    """One numstat entry."""

    model_config = ConfigDict(frozen=True)

    path: str
    additions: int
    deletions: int
