"""Asynchronous orchestration of git operations for one project."""

import concurrent.futures
import logging
import os
import threading
import time
from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from vcscore.client import GitClient
from vcscore.constants import DEFAULT_AUTO_REFRESH_INTERVAL, SETTINGS_KEY
from vcscore.exceptions import GitRepositoryNotFoundError
from vcscore.models.commit import CommitListMetadata, CommitPage, CommitRequest, GitCommit
from vcscore.models.diff import AdditionsDeletions
from vcscore.models.identity import GitIdentity
from vcscore.models.remote import GitRemote, GitUpstream
from vcscore.models.settings import GitSettings
from vcscore.models.status import RepoStatus
from vcscore.parsing.commit_parser import extract_body
from vcscore.settings_store import SettingsStore

logger = logging.getLogger(__name__)


class ManagerSnapshot(BaseModel):
    """Repository state as last published by a GitManager."""

    model_config = ConfigDict(frozen=True)

    repository: Path | None = None
    active: bool = False
    status: RepoStatus | None = None
    identity: GitIdentity | None = None
    last_fetch_timestamp: float = 0.0  # epoch seconds, 0 if never fetched


SnapshotListener = Callable[[ManagerSnapshot], None]


class GitManager:
    """Runs git work for a project on a single background worker.

    Every operation that talks to git returns a ``concurrent.futures.Future``.
    State is published as immutable ManagerSnapshot objects; getters only
    read the latest snapshot and never block on git.
    """

    def __init__(
        self,
        project_path: Path,
        client: GitClient,
        settings_store: SettingsStore,
        executor: concurrent.futures.Executor | None = None,
    ):
        """
        Initialize the manager.

        Args:
            project_path: Directory the repository is detected from
            client: Git client
            settings_store: Store for the ``vcs/git.json`` settings document
            executor: Executor for git work (defaults to a private single-thread pool)
        """
        self.project_path = Path(project_path)
        self.client = client
        self.settings_store = settings_store

        self._owns_executor = executor is None
        self._executor = executor or concurrent.futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="GitManager"
        )

        self._state_lock = threading.RLock()
        self._snapshot = ManagerSnapshot()

        self._listeners_lock = threading.Lock()
        self._listeners: list[SnapshotListener] = []

        self._refresh_timer: threading.Timer | None = None
        self._auto_refresh_running = False
        self._auto_refresh_interval = DEFAULT_AUTO_REFRESH_INTERVAL
        self._refresh_in_flight = False

    # Snapshot access

    @property
    def snapshot(self) -> ManagerSnapshot:
        with self._state_lock:
            return self._snapshot

    @property
    def repo_status(self) -> RepoStatus | None:
        return self.snapshot.status

    @property
    def repository(self) -> Path | None:
        return self.snapshot.repository

    @property
    def active(self) -> bool:
        return self.snapshot.active

    @property
    def identity(self) -> GitIdentity | None:
        return self.snapshot.identity

    @property
    def last_fetch_timestamp(self) -> float:
        return self.snapshot.last_fetch_timestamp

    @property
    def auto_refresh_running(self) -> bool:
        with self._state_lock:
            return self._auto_refresh_running

    def add_listener(self, listener: SnapshotListener) -> None:
        with self._listeners_lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: SnapshotListener) -> None:
        with self._listeners_lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _publish(self, **changes: Any) -> ManagerSnapshot:
        with self._state_lock:
            self._snapshot = self._snapshot.model_copy(update=changes)
            snapshot = self._snapshot

        with self._listeners_lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Snapshot listener raised an exception")
        return snapshot

    def _require_repository(self) -> Path:
        repository = self.repository
        if repository is None:
            raise GitRepositoryNotFoundError(f"No git repository detected for {self.project_path}")
        return repository

    def _submit(self, description: str, fn: Callable[..., Any], *args: Any) -> concurrent.futures.Future:
        """Submit work to the worker; failures are logged and set on the future."""

        def job():
            try:
                return fn(*args)
            except Exception:
                logger.exception(f"Git {description} failed")
                raise

        return self._executor.submit(job)

    # Repository lifecycle

    def detect_repository(self) -> concurrent.futures.Future:
        """Detect the repository; resolves to its root or None."""
        return self._submit("repository detection", self._detect_repository)

    def _detect_repository(self) -> Path | None:
        repository = self.client.detect_repository(self.project_path)
        if repository is None:
            logger.info(f"No git repository found at {self.project_path}")
            self._publish(repository=None, active=False, status=None)
            self.stop_auto_refresh()
            return None

        logger.info(f"Detected git repository at {repository}")
        self._publish(repository=repository, active=True)
        self.start_auto_refresh()
        self.load_identity()
        self.fetch()
        return repository

    def refresh_status(self) -> concurrent.futures.Future:
        return self._submit("status refresh", self._refresh_status)

    def _refresh_status(self) -> RepoStatus | None:
        repository = self.repository
        if repository is None:
            self._publish(status=None)
            return None

        status = self.client.get_status(repository)
        self._publish(status=status)
        logger.debug(f"Loaded {len(status.changes)} changes from {repository}")
        return status

    def load_identity(self) -> concurrent.futures.Future:
        return self._submit("identity lookup", self._load_identity)

    def _load_identity(self) -> GitIdentity:
        identity = self.client.get_identity()
        self._publish(identity=identity)
        logger.debug(f"Loaded git identity: {identity.user_name} <{identity.email}>")
        return identity

    # Network operations

    def fetch(self) -> concurrent.futures.Future:
        return self._submit("fetch", self._fetch)

    def _fetch(self) -> None:
        repository = self.repository
        if repository is None:
            return
        self.client.fetch(repository)
        self._publish(last_fetch_timestamp=time.time())
        self._refresh_status()

    def pull(self) -> concurrent.futures.Future:
        return self._submit("pull", self._after_network_op, self.client.pull)

    def push(self) -> concurrent.futures.Future:
        return self._submit("push", self._after_network_op, self.client.push)

    def _after_network_op(self, operation: Callable[[Path], None]) -> None:
        repository = self.repository
        if repository is None:
            return
        operation(repository)
        self._refresh_status()

    # Working tree changes

    def commit_changes(
        self, request: CommitRequest, push_after_commit: bool = False
    ) -> concurrent.futures.Future:
        def job():
            self.client.commit_changes(self._require_repository(), request, push_after_commit)
            self._refresh_status()

        return self._submit("commit", job)

    def stage(self, *paths: str) -> concurrent.futures.Future:
        def job():
            self.client.stage(self._require_repository(), *paths)
            self._refresh_status()

        return self._submit("stage", job)

    def unstage(self, *paths: str) -> concurrent.futures.Future:
        def job():
            self.client.unstage(self._require_repository(), *paths)
            self._refresh_status()

        return self._submit("unstage", job)

    # Queries

    def get_remotes(self) -> concurrent.futures.Future:
        def job() -> list[GitRemote]:
            repository = self.repository
            return self.client.get_remotes(repository) if repository is not None else []

        return self._submit("remote lookup", job)

    def get_upstream(self) -> concurrent.futures.Future:
        def job() -> GitUpstream | None:
            repository = self.repository
            return self.client.get_upstream(repository) if repository is not None else None

        return self._submit("upstream lookup", job)

    def get_recent_commits(self, count: int) -> concurrent.futures.Future:
        """Resolves to the newest ``count`` commits as a CommitPage, or None without a repository."""

        def job() -> CommitPage | None:
            repository = self.repository
            if repository is None:
                return None
            return self.client.get_recent_commits(repository, None, count)

        return self._submit("log", job)

    def get_all_commits(
        self,
        on_page: Callable[[list[GitCommit]], None] | None,
        on_done: Callable[[], None] | None,
        page_size: int = 50,
    ) -> concurrent.futures.Future:
        """
        Walk the whole first-parent history page by page.

        Args:
            on_page: Called on the worker thread with each non-empty page
            on_done: Called once when the walk ends, even if it failed
            page_size: Commits per page

        Returns:
            Future resolving to the number of commits delivered
        """

        def job() -> int:
            delivered = 0
            try:
                repository = self.repository
                if repository is None:
                    return 0

                cursor = None
                while True:
                    page = self.client.get_recent_commits(repository, cursor, page_size)
                    if not page.commits:
                        break
                    if on_page is not None:
                        on_page(page.commits)
                    delivered += len(page.commits)
                    if page.next_cursor is None:
                        break
                    cursor = page.commits[-1].hash
                return delivered
            finally:
                if on_done is not None:
                    on_done()

        return self._submit("history walk", job)

    def get_commit_list_metadata(self) -> concurrent.futures.Future:
        def job() -> CommitListMetadata:
            repository = self.repository
            if repository is None:
                return CommitListMetadata()
            return CommitListMetadata(
                head_commit_hash=self.client.get_head_commit_hash(repository),
                tags_by_commit=self.client.get_tags_by_commit(repository),
            )

        return self._submit("commit metadata lookup", job)

    def get_commit_with_body(self, commit: GitCommit) -> concurrent.futures.Future:
        """Resolves to ``commit`` with its body loaded (unchanged if already loaded)."""

        def job() -> GitCommit:
            repository = self.repository
            if repository is None or commit.body:
                return commit

            message = self.client.get_commit_message(repository, commit.hash)
            if message is None:
                return commit
            return commit.with_body(extract_body(message))

        return self._submit("commit message lookup", job)

    def get_unstaged_diff(self, file_path: Path) -> concurrent.futures.Future:
        """Resolves to the unified diff text of one file, or None if it is outside the repository."""

        def job() -> str | None:
            repository = self.repository
            if repository is None or file_path is None:
                return None

            root = Path(os.path.normpath(repository.absolute()))
            absolute = Path(os.path.normpath(Path(file_path).absolute()))
            try:
                relative = absolute.relative_to(root)
            except ValueError:
                return None
            return self.client.get_unstaged_diff(repository, relative)

        return self._submit("diff", job)

    def get_additions_deletions(self, commit_hash: str) -> concurrent.futures.Future:
        def job() -> list[AdditionsDeletions]:
            repository = self.repository
            if repository is None:
                return []
            return self.client.get_additions_deletions(repository, commit_hash)

        return self._submit("numstat lookup", job)

    # Settings

    def get_git_settings(self) -> GitSettings:
        return self.settings_store.read_json(SETTINGS_KEY, GitSettings) or GitSettings()

    def save_git_settings(self, settings: GitSettings) -> None:
        self.settings_store.write_json(SETTINGS_KEY, settings)

    def get_auto_refresh_interval(self) -> float:
        """Persisted refresh interval in seconds; a missing or invalid value is reset to the default."""
        interval = self.get_git_settings().auto_refresh_interval
        if interval is None or interval <= 0:
            self._write_auto_refresh_interval(DEFAULT_AUTO_REFRESH_INTERVAL)
            return DEFAULT_AUTO_REFRESH_INTERVAL
        return interval

    def _write_auto_refresh_interval(self, interval: float) -> None:
        settings = self.get_git_settings().model_copy(update={"auto_refresh_interval": interval})
        self.save_git_settings(settings)

    def set_auto_refresh_interval(self, interval: float) -> None:
        """
        Persist a new refresh interval and apply it to a running auto-refresh.

        Args:
            interval: Seconds between refreshes

        Raises:
            ValueError: If interval is not positive
        """
        if interval <= 0:
            raise ValueError("Auto refresh interval must be positive")

        self._write_auto_refresh_interval(interval)
        if self.auto_refresh_running:
            self.stop_auto_refresh()
            self.start_auto_refresh()

    def set_git_executable(self, path: Path) -> None:
        """Switch the runner to another git binary and remember it for later sessions."""
        self.client.runner.set_git_executable(path)
        settings = self.get_git_settings().model_copy(update={"git_executable": Path(path)})
        self.save_git_settings(settings)

    # Auto refresh

    def start_auto_refresh(self) -> None:
        """Refresh status now and then every interval, until stopped."""
        interval = self.get_auto_refresh_interval()
        with self._state_lock:
            if self._auto_refresh_running:
                return
            self._auto_refresh_running = True
            self._auto_refresh_interval = interval
            self._schedule_refresh(0)
        logger.debug(f"Auto refresh started every {interval}s")

    def stop_auto_refresh(self) -> None:
        with self._state_lock:
            self._auto_refresh_running = False
            if self._refresh_timer is not None:
                self._refresh_timer.cancel()
                self._refresh_timer = None

    def _schedule_refresh(self, delay: float) -> None:
        # Caller holds _state_lock
        timer = threading.Timer(delay, self._on_refresh_timer)
        timer.daemon = True
        self._refresh_timer = timer
        timer.start()

    def _on_refresh_timer(self) -> None:
        with self._state_lock:
            if not self._auto_refresh_running:
                return
            self._submit_auto_refresh()
            if self._auto_refresh_running:
                self._schedule_refresh(self._auto_refresh_interval)

    def _submit_auto_refresh(self) -> None:
        # Caller holds _state_lock
        if self._refresh_in_flight:
            return

        self._refresh_in_flight = True
        try:
            self._executor.submit(self._auto_refresh_job)
        except RuntimeError:
            self._refresh_in_flight = False
            self._auto_refresh_running = False
            logger.debug("Executor is shut down, stopping auto refresh")

    def _auto_refresh_job(self) -> None:
        try:
            self._refresh_status()
        except Exception as e:
            logger.warning(f"Automatic status refresh failed: {e}")
        finally:
            with self._state_lock:
                self._refresh_in_flight = False

    def shutdown(self, wait: bool = True) -> None:
        """Stop auto refresh and, if the manager created it, the worker."""
        self.stop_auto_refresh()
        if self._owns_executor:
            self._executor.shutdown(wait=wait, cancel_futures=True)
