import shutil
import subprocess
from pathlib import Path

import pytest

from vcscore.models.command import GitCommand
from vcscore.models.result import CaptureMode, GitResult


class FakeRunner:
    """Runner double that returns canned results by argument prefix.

    ``--no-pager`` is ignored when matching. Later responses win over
    earlier ones; unmatched commands fail with exit code 1.
    """

    def __init__(self):
        self.git_executable = Path("git")
        self.calls: list[tuple[GitCommand, CaptureMode]] = []
        self.listeners = []
        self._responses: list[tuple[tuple[str, ...], GitResult]] = []

    def respond(
        self,
        *prefix: str,
        stdout: list[str] | None = None,
        stderr: list[str] | None = None,
        exit_code: int = 0,
        timed_out: bool = False,
        cancelled: bool = False,
    ) -> None:
        result = GitResult(
            exit_code=exit_code,
            stdout=stdout or [],
            stderr=stderr or [],
            timed_out=timed_out,
            cancelled=cancelled,
        )
        self._responses.append((prefix, result))

    def run(self, command, listener=None, token=None, capture_mode=CaptureMode.TEXT_LINES):
        self.calls.append((command, capture_mode))
        self.listeners.append(listener)
        args = tuple(arg for arg in command.arguments if arg != "--no-pager")
        for prefix, result in reversed(self._responses):
            if args[: len(prefix)] == prefix:
                return result
        return GitResult(exit_code=1, stderr=[f"no canned response for {args}"])

    def set_git_executable(self, path):
        self.git_executable = Path(path)

    def commands(self) -> list[tuple[str, ...]]:
        return [command.arguments for command, _ in self.calls]


@pytest.fixture
def fake_runner():
    """Runner double with no canned responses."""
    return FakeRunner()


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo, check=True, capture_output=True, text=True
    )
    return result.stdout


@pytest.fixture
def git_repo(tmp_path):
    """Create a real git repository with one commit (skipped without git)."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "commit.gpgsign", "false")

    (repo / "README.md").write_text("hello\nworld\n")
    _git(repo, "add", "README.md")
    _git(repo, "commit", "-q", "-m", "Initial commit")
    return repo


@pytest.fixture
def git():
    """Helper running git in a directory and returning stdout."""
    return _git
