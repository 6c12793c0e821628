"""Synchronous git operations built on the runner, command factory and parsers."""

import logging
import os
from pathlib import Path

from vcscore import commands
from vcscore.exceptions import GitExecutionError
from vcscore.execution.listeners import (
    OutputListener,
    ProgressListener,
    ProgressSink,
    logging_progress_sink,
)
from vcscore.execution.runner import GitProcessRunner
from vcscore.models.command import GitCommand
from vcscore.models.commit import CommitPage, CommitRequest, GitAuthor
from vcscore.models.diff import AdditionsDeletions, DiffBlob, DiffMode
from vcscore.models.identity import GitIdentity, SigningStatus
from vcscore.models.remote import GitRemote, GitUpstream
from vcscore.models.result import CaptureMode, GitResult
from vcscore.models.status import RepoStatus
from vcscore.parsing.commit_parser import parse_commits
from vcscore.parsing.diff_parser import parse_diff
from vcscore.parsing.numstat_parser import parse_additions_deletions_lines
from vcscore.parsing.repository_parser import (
    parse_remote_urls,
    parse_shortlog_authors,
    parse_tags_by_commit,
)
from vcscore.parsing.status_parser import parse_porcelain_v1_z

logger = logging.getLogger(__name__)


class GitClient:
    """Git operations against a repository root.

    Required operations raise GitExecutionError when git fails, times out or
    is cancelled. Optional lookups return an empty value instead.
    """

    def __init__(self, runner: GitProcessRunner, diff_context_lines: int = 3):
        """
        Initialize the client.

        Args:
            runner: Process runner used for every invocation
            diff_context_lines: Context lines for unstaged diffs
        """
        self.runner = runner
        self.diff_context_lines = diff_context_lines

    def _run(
        self,
        command: GitCommand,
        capture_mode: CaptureMode = CaptureMode.TEXT_LINES,
        listener: OutputListener | None = None,
    ) -> GitResult:
        return self.runner.run(command, listener, None, capture_mode)

    def _run_required(
        self,
        command: GitCommand,
        capture_mode: CaptureMode = CaptureMode.TEXT_LINES,
        listener: OutputListener | None = None,
    ) -> GitResult:
        """Run a command whose failure is an error for the caller."""
        result = self._run(command, capture_mode, listener)
        name = command.arguments[0] if command.arguments else "command"
        if name == "--no-pager" and len(command.arguments) > 1:
            name = command.arguments[1]

        if result.timed_out:
            raise GitExecutionError(f"git {name} timed out")
        if result.cancelled:
            raise GitExecutionError(f"git {name} was cancelled")
        if result.exit_code != 0:
            raise GitExecutionError(f"git {name} failed: {result.stderr_text()}")
        return result

    def _run_optional(
        self, command: GitCommand, capture_mode: CaptureMode = CaptureMode.TEXT_LINES
    ) -> GitResult | None:
        """Run a lookup; None when it did not succeed."""
        result = self._run(command, capture_mode)
        if result.timed_out or result.cancelled:
            reason = "timed out" if result.timed_out else "was cancelled"
            logger.warning(f"git {command.args_string()} {reason}")
            return None
        if result.exit_code != 0:
            logger.debug(
                f"git {command.args_string()} exited with {result.exit_code}: "
                f"{result.stderr_text()}"
            )
            return None
        return result

    def _optional_text(self, command: GitCommand) -> str | None:
        result = self._run_optional(command)
        if result is None:
            return None
        text = "".join(result.stdout).strip()
        return text or None

    # Repository

    def detect_repository(self, path: Path) -> Path | None:
        """
        Find the root of the work tree containing ``path``.

        Args:
            path: Any directory inside a work tree

        Returns:
            Absolute, normalized repository root, or None if ``path`` is not
            inside a work tree
        """
        result = self._run_optional(commands.rev_parse_is_inside_work_tree(path))
        if result is None or result.first_stdout_line().strip().lower() != "true":
            return None

        result = self._run_optional(commands.rev_parse_show_toplevel(path))
        if result is None:
            return None

        top_level = "".join(result.stdout).strip()
        if not top_level:
            logger.warning(f"git rev-parse returned no top-level for {path}")
            return None
        return Path(os.path.normpath(Path(top_level).absolute()))

    def get_status(self, repo_root: Path) -> RepoStatus:
        result = self._run_required(
            commands.status_porcelain_v1_z(repo_root), CaptureMode.NULL_RECORDS
        )
        return parse_porcelain_v1_z(repo_root, result.stdout)

    def stage(self, repo_root: Path, *paths: str) -> None:
        if paths:
            self._run_required(commands.stage_files(repo_root, *paths))

    def unstage(self, repo_root: Path, *paths: str) -> None:
        if paths:
            self._run_required(commands.unstage_files(repo_root, *paths))

    def commit_changes(
        self, repo_root: Path, request: CommitRequest, push_after_commit: bool = False
    ) -> None:
        """
        Commit, then optionally push.

        Args:
            repo_root: Repository root
            request: What to commit
            push_after_commit: Push to the upstream after a successful commit

        Raises:
            GitExecutionError: If the commit or the push fails
        """
        self._run_required(commands.commit(repo_root, request))
        logger.info(f"Committed in {repo_root}: {request.message}")

        if push_after_commit:
            self.push(repo_root)

    # Remotes

    def get_remotes(self, repo_root: Path) -> list[GitRemote]:
        result = self._run_required(commands.remote_get_urls(repo_root))
        return parse_remote_urls(result.stdout)

    def get_upstream(self, repo_root: Path) -> GitUpstream | None:
        ref = self._optional_text(commands.get_upstream(repo_root))
        return GitUpstream.from_ref(ref) if ref else None

    def _network_operation(
        self,
        command: GitCommand,
        operation: str,
        listener: OutputListener | None,
        progress_sink: ProgressSink | None,
    ) -> None:
        sink = progress_sink or logging_progress_sink(operation)
        progress = ProgressListener(listener, sink, initial_phase=operation)
        self._run_required(command, listener=progress)

    def fetch(
        self,
        repo_root: Path,
        listener: OutputListener | None = None,
        progress_sink: ProgressSink | None = None,
    ) -> None:
        self._network_operation(commands.fetch(repo_root), "Fetch", listener, progress_sink)

    def pull(
        self,
        repo_root: Path,
        listener: OutputListener | None = None,
        progress_sink: ProgressSink | None = None,
    ) -> None:
        self._network_operation(commands.pull(repo_root), "Pull", listener, progress_sink)

    def push(
        self,
        repo_root: Path,
        listener: OutputListener | None = None,
        progress_sink: ProgressSink | None = None,
    ) -> None:
        self._network_operation(commands.push(repo_root), "Push", listener, progress_sink)

    # Identity

    def get_user_name(self) -> str | None:
        return self._optional_text(commands.get_user_name())

    def get_user_email(self) -> str | None:
        return self._optional_text(commands.get_user_email())

    def get_commit_gpg_sign_setting(self) -> str | None:
        return self._optional_text(commands.get_commit_gpg_sign())

    def get_gpg_format_setting(self) -> str | None:
        return self._optional_text(commands.get_gpg_format())

    def get_user_signing_key(self) -> str | None:
        return self._optional_text(commands.get_user_signing_key())

    def get_gpg_program_setting(self) -> str | None:
        return self._optional_text(commands.get_gpg_program())

    def get_git_version(self) -> str | None:
        return self._optional_text(commands.get_git_version())

    def get_identity(self) -> GitIdentity:
        signing = SigningStatus.from_git_config_values(
            self.get_commit_gpg_sign_setting(),
            self.get_gpg_format_setting(),
            self.get_user_signing_key(),
            self.get_gpg_program_setting(),
        )
        return GitIdentity(
            user_name=self.get_user_name(),
            email=self.get_user_email(),
            signing=signing,
            git_version=self.get_git_version(),
        )

    # History

    def get_recent_commits(
        self, repo_root: Path, cursor: str | None = None, limit: int = 50
    ) -> CommitPage:
        """
        Fetch one page of first-parent history.

        Args:
            repo_root: Repository root
            cursor: ``next_cursor`` of the previous page, or None for the newest commits
            limit: Page size

        Returns:
            CommitPage; ``next_cursor`` is None once history is exhausted
        """
        result = self._run_required(
            commands.get_recent_commits(repo_root, cursor, limit), CaptureMode.TEXT_WHOLE
        )
        return parse_commits(result.all_stdout(), limit)

    def get_commit_message(self, repo_root: Path, commit_hash: str) -> str | None:
        result = self._run_optional(
            commands.get_commit_message(repo_root, commit_hash), CaptureMode.TEXT_WHOLE
        )
        return result.all_stdout() if result is not None else None

    def get_head_commit_hash(self, repo_root: Path) -> str | None:
        return self._optional_text(commands.get_head_commit_hash(repo_root))

    def get_tags_pointing_to_commit(self, repo_root: Path, commit_hash: str) -> list[str]:
        result = self._run_optional(commands.get_tags_pointing_to_commit(repo_root, commit_hash))
        if result is None:
            return []
        return [line.strip() for line in result.stdout if line.strip()]

    def get_tags_by_commit(self, repo_root: Path) -> dict[str, list[str]]:
        # show-ref exits with 1 when there are no tags at all
        result = self._run_optional(commands.get_all_tags_with_commits(repo_root))
        if result is None:
            return {}
        return parse_tags_by_commit(result.stdout)

    def get_all_branches(self, repo_root: Path) -> list[str]:
        result = self._run_optional(commands.get_all_branches(repo_root))
        if result is None:
            return []
        return [line.strip() for line in result.stdout if line.strip()]

    def get_all_authors(self, repo_root: Path, include_email: bool = False) -> list[GitAuthor]:
        result = self._run_optional(commands.get_all_authors(repo_root, include_email))
        if result is None:
            return []
        return parse_shortlog_authors(result.stdout, include_email)

    def get_repository_creation_date(self, repo_root: Path) -> int:
        """Author timestamp (epoch seconds) of the oldest root commit, or 0 if unknown."""
        result = self._run_optional(
            commands.get_repository_creation_date(repo_root), CaptureMode.TEXT_WHOLE
        )
        if result is None:
            return 0

        first_line = result.all_stdout().strip().split("\n", 1)[0].strip()
        try:
            return int(first_line)
        except ValueError:
            logger.warning(
                f"Failed to parse repository creation date {first_line!r} for {repo_root}"
            )
            return 0

    def get_additions_deletions(
        self, repo_root: Path, commit_hash: str
    ) -> list[AdditionsDeletions]:
        result = self._run_optional(commands.get_additions_deletions(repo_root, commit_hash))
        if result is None:
            return []
        return parse_additions_deletions_lines(result.stdout)

    # Diffs

    def get_diff(
        self, repo_root: Path, path: Path | str, mode: DiffMode = DiffMode.WORKTREE
    ) -> str | None:
        """Raw unified diff text for one path, or None if git failed."""
        result = self._run_optional(
            commands.get_diff(repo_root, path, mode), CaptureMode.TEXT_WHOLE
        )
        return result.all_stdout() if result is not None else None

    def get_unstaged_diff(self, repo_root: Path, relative_path: Path) -> str | None:
        result = self._run_optional(
            commands.get_unstaged_diff(repo_root, relative_path, self.diff_context_lines),
            CaptureMode.TEXT_WHOLE,
        )
        return result.all_stdout() if result is not None else None

    def get_parsed_diff(
        self, repo_root: Path, path: Path | str, mode: DiffMode = DiffMode.WORKTREE
    ) -> DiffBlob:
        return parse_diff(self.get_diff(repo_root, path, mode) or "")

    def get_parsed_unstaged_diff(self, repo_root: Path, relative_path: Path) -> DiffBlob:
        return parse_diff(self.get_unstaged_diff(repo_root, relative_path) or "")
