"""Shared CLI context with lazy-initialized dependencies."""

import os
from pathlib import Path

from vcscore import create_client
from vcscore.client import GitClient
from vcscore.config import EngineConfig
from vcscore.exceptions import GitRepositoryNotFoundError


class CLIContext:
    """Shared context with lazy-initialized dependencies for CLI commands.

    Usage:
        ctx = CLIContext()
        status = ctx.client.get_status(ctx.repository_root)
    """

    def __init__(self, verbose: bool = False, quiet: bool = False, repo_path: Path | None = None):
        """Initialize CLI context.

        Args:
            verbose: If True, show informational log messages
            quiet: If True, suppress non-error output
            repo_path: Directory to look for a repository in (defaults to the cwd)
        """
        self.verbose = verbose
        self.quiet = quiet
        self.repo_path = repo_path

        # Lazy-loaded dependencies
        self._config: EngineConfig | None = None
        self._client: GitClient | None = None
        self._repository_root: Path | None = None

    @property
    def config(self) -> EngineConfig:
        """Get configuration (lazy-loaded)."""
        if self._config is None:
            self._config = EngineConfig.from_env()
        return self._config

    @property
    def client(self) -> GitClient:
        """Get git client (lazy-loaded)."""
        if self._client is None:
            self._client = create_client(self.config)
        return self._client

    @property
    def repository_root(self) -> Path:
        """Root of the repository containing ``repo_path`` (lazy-loaded).

        Raises:
            GitRepositoryNotFoundError: If the directory is not inside a work tree
        """
        if self._repository_root is None:
            start = self.repo_path or Path.cwd()
            root = self.client.detect_repository(start)
            if root is None:
                raise GitRepositoryNotFoundError(f"Not a git repository: {start}")
            self._repository_root = root
        return self._repository_root

    def relative_to_repository(self, path: Path) -> Path:
        """Express a user-supplied path relative to the repository root.

        Relative paths are taken relative to the current directory. Paths
        outside the repository are returned unchanged.
        """
        absolute = Path(os.path.normpath(Path(path).absolute()))
        try:
            return absolute.relative_to(self.repository_root)
        except ValueError:
            return Path(path)


# Global context instance (set by Typer callback)
_ctx: CLIContext | None = None


def get_context() -> CLIContext:
    """Get the current CLI context.

    Returns:
        The global CLI context instance

    Raises:
        RuntimeError: If context not initialized
    """
    if _ctx is None:
        raise RuntimeError("CLI context not initialized. This should not happen.")
    return _ctx


def set_context(ctx: CLIContext) -> None:
    """Set the global CLI context.

    Args:
        ctx: The CLI context instance to set
    """
    global _ctx
    _ctx = ctx
