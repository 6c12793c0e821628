"""Pydantic models for commands, results and parsed git output."""

from vcscore.models.command import GitCommand, GitCommandBuilder
from vcscore.models.commit import (
    CommitListMetadata,
    CommitPage,
    CommitRequest,
    GitAuthor,
    GitCommit,
)
from vcscore.models.diff import (
    AdditionsDeletions,
    DiffBlob,
    DiffFile,
    DiffHunk,
    DiffHunkLine,
    DiffMode,
    LineType,
)
from vcscore.models.identity import GitIdentity, SigningFormat, SigningStatus
from vcscore.models.progress import (
    ProgressEvent,
    ProgressMessage,
    ProgressPercentage,
    ProgressPhase,
)
from vcscore.models.remote import GitRemote, GitUpstream, RemoteProtocol
from vcscore.models.result import CaptureMode, GitResult
from vcscore.models.settings import GitSettings
from vcscore.models.status import FileChange, RepoStatus

__all__ = [
    "AdditionsDeletions",
    "CaptureMode",
    "CommitListMetadata",
    "CommitPage",
    "CommitRequest",
    "DiffBlob",
    "DiffFile",
    "DiffHunk",
    "DiffHunkLine",
    "DiffMode",
    "FileChange",
    "GitAuthor",
    "GitCommand",
    "GitCommandBuilder",
    "GitCommit",
    "GitIdentity",
    "GitRemote",
    "GitResult",
    "GitSettings",
    "GitUpstream",
    "LineType",
    "ProgressEvent",
    "ProgressMessage",
    "ProgressPercentage",
    "ProgressPhase",
    "RemoteProtocol",
    "RepoStatus",
    "SigningFormat",
    "SigningStatus",
]
