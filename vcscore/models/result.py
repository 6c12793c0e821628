"""Result of a git process execution."""

from datetime import timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict


class CaptureMode(str, Enum):
    """How a process's stdout is split into output units."""

    TEXT_LINES = "TEXT_LINES"
    NULL_RECORDS = "NULL_RECORDS"
    TEXT_WHOLE = "TEXT_WHOLE"


class GitResult(BaseModel):
    """Outcome of one GitCommand execution.

    Exit codes below zero are sentinels assigned by the runner:
    EXIT_CANCELLED, EXIT_TIMED_OUT or EXIT_INDETERMINATE.
    """

    model_config = ConfigDict(frozen=True)

    exit_code: int
    stdout: list[str] = []
    stderr: list[str] = []
    timed_out: bool = False
    cancelled: bool = False
    duration: timedelta = timedelta(0)

    @property
    def succeeded(self) -> bool:
        """True if the process exited with 0 on its own."""
        return self.exit_code == 0 and not self.timed_out and not self.cancelled

    def first_stdout_line(self) -> str:
        return self.stdout[0] if self.stdout else ""

    def first_stderr_line(self) -> str:
        return self.stderr[0] if self.stderr else ""

    def all_stdout(self) -> str:
        return "\n".join(self.stdout)

    def stderr_text(self) -> str:
        return "\n".join(self.stderr)
