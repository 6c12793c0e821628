"""Immutable description of a single git invocation."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class GitCommand(BaseModel):
    """Arguments, working directory, environment and limits for one git run.

    The executable itself is owned by the runner; only the arguments that
    follow it are stored here.
    """

    model_config = ConfigDict(frozen=True)

    arguments: tuple[str, ...] = ()
    working_directory: Path | None = None
    environment: dict[str, str] = Field(default_factory=dict)
    timeout: float = 0.0  # seconds, <= 0 means unbounded
    stream_stdout_to_listener: bool = False
    inherit_environment: bool = True

    def args_string(self) -> str:
        """Arguments joined with spaces, for log messages."""
        return " ".join(self.arguments)

    @staticmethod
    def builder() -> "GitCommandBuilder":
        return GitCommandBuilder()


class GitCommandBuilder:
    """Fluent builder for GitCommand."""

    def __init__(self):
        self._arguments: list[str] = []
        self._working_directory: Path | None = None
        self._environment: dict[str, str] = {}
        self._timeout = 0.0
        self._stream_stdout = False
        self._inherit_environment = True

    def add_args(self, *args: str) -> "GitCommandBuilder":
        self._arguments.extend(str(arg) for arg in args)
        return self

    def working_directory(self, path: Path | None) -> "GitCommandBuilder":
        self._working_directory = path
        return self

    def timeout(self, seconds: float) -> "GitCommandBuilder":
        self._timeout = seconds
        return self

    def environment(self, env: dict[str, str]) -> "GitCommandBuilder":
        self._environment = dict(env)
        return self

    def stream_stdout_to_listener(self, stream: bool = True) -> "GitCommandBuilder":
        self._stream_stdout = stream
        return self

    def inherit_environment(self, inherit: bool = True) -> "GitCommandBuilder":
        self._inherit_environment = inherit
        return self

    def build(self) -> GitCommand:
        return GitCommand(
            arguments=tuple(self._arguments),
            working_directory=self._working_directory,
            environment=self._environment,
            timeout=self._timeout,
            stream_stdout_to_listener=self._stream_stdout,
            inherit_environment=self._inherit_environment,
        )
