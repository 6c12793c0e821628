"""Exception hierarchy for git operations."""


class VcsError(Exception):
    """Base exception for version-control operations."""

    pass


class GitError(VcsError):
    """Base exception for git operations."""

    pass


class GitExecutionError(GitError):
    """Git process could not be started, or a git operation failed."""

    pass


class GitExecutableNotFoundError(GitError):
    """No git executable could be located."""

    pass


class GitRepositoryNotFoundError(GitError):
    """Git repository not found."""

    pass


class GitParseError(VcsError, ValueError):
    """Git output could not be parsed."""

    pass
