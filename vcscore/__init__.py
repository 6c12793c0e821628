"""Git command execution and output parsing engine."""

from vcscore.client import GitClient
from vcscore.config import EngineConfig
from vcscore.constants import SETTINGS_KEY
from vcscore.exceptions import (
    GitError,
    GitExecutableNotFoundError,
    GitExecutionError,
    GitParseError,
    GitRepositoryNotFoundError,
    VcsError,
)
from vcscore.execution.locator import resolve_git_executable
from vcscore.execution.runner import GitProcessRunner
from vcscore.manager import GitManager, ManagerSnapshot
from vcscore.models.settings import GitSettings
from vcscore.settings_store import JsonSettingsStore, SettingsStore


def create_client(config: EngineConfig | None = None) -> GitClient:
    """
    Build a GitClient wired to the configured (or located) git executable.

    Raises:
        GitExecutableNotFoundError: If no git executable can be found
    """
    if config is None:
        config = EngineConfig.from_env()

    runner = GitProcessRunner(resolve_git_executable(config.git_executable))
    return GitClient(runner, diff_context_lines=config.diff_context_lines)


def create_manager(project_path, config: EngineConfig | None = None) -> GitManager:
    """
    Build a GitManager whose settings live in ``config.data_dir``.

    A git executable saved by ``set_git_executable`` is used unless the
    config names one explicitly.
    """
    if config is None:
        config = EngineConfig.from_env()

    store = JsonSettingsStore(config.data_dir)
    if config.git_executable is None:
        saved = store.read_json(SETTINGS_KEY, GitSettings)
        if saved is not None and saved.git_executable is not None:
            config = config.model_copy(update={"git_executable": saved.git_executable})

    return GitManager(project_path, create_client(config), store)


__all__ = [
    "EngineConfig",
    "GitClient",
    "GitError",
    "GitExecutableNotFoundError",
    "GitExecutionError",
    "GitManager",
    "GitParseError",
    "GitProcessRunner",
    "GitRepositoryNotFoundError",
    "JsonSettingsStore",
    "ManagerSnapshot",
    "SettingsStore",
    "VcsError",
    "create_client",
    "create_manager",
]
