"""Run git as a subprocess with cancellation and timeout enforcement."""

import concurrent.futures
import logging
import os
import signal
import subprocess
import time
from datetime import timedelta
from pathlib import Path
from typing import Callable

from vcscore.constants import (
    DRAIN_JOIN_TIMEOUT,
    EXIT_CANCELLED,
    EXIT_INDETERMINATE,
    EXIT_TIMED_OUT,
    KILL_GRACE_PERIOD,
    POLL_INTERVAL,
)
from vcscore.exceptions import GitExecutionError
from vcscore.execution.cancellation import CancellationToken
from vcscore.execution.capture import drain_stream
from vcscore.execution.listeners import OutputListener
from vcscore.models.command import GitCommand
from vcscore.models.result import CaptureMode, GitResult

logger = logging.getLogger(__name__)

_POSIX = os.name == "posix"


class GitProcessRunner:
    """Execute GitCommands and collect their output.

    Every run gets its own two-thread pool (stdout drain, stderr drain) that
    is torn down before ``run`` returns. The calling thread polls the
    process in fixed quanta so that cancellation requests and the timeout
    deadline are noticed while the process is still running.
    """

    def __init__(
        self,
        git_executable: Path | str,
        poll_interval: float = POLL_INTERVAL,
        kill_grace_period: float = KILL_GRACE_PERIOD,
        drain_join_timeout: float = DRAIN_JOIN_TIMEOUT,
    ):
        """
        Initialize the runner.

        Args:
            git_executable: Path of the git binary (or any executable in tests)
            poll_interval: Seconds between checks for exit, cancellation and timeout
            kill_grace_period: Seconds to wait after a graceful terminate before killing
            drain_join_timeout: Seconds to wait for each drain thread before abandoning it
        """
        self.git_executable = Path(git_executable)
        self.poll_interval = poll_interval
        self.kill_grace_period = kill_grace_period
        self.drain_join_timeout = drain_join_timeout

    def set_git_executable(self, path: Path | str) -> None:
        """Use a different git binary for subsequent runs."""
        self.git_executable = Path(path)
        logger.info(f"Git executable set to {self.git_executable}")

    def build_argv(self, command: GitCommand) -> list[str]:
        return [str(self.git_executable), *command.arguments]

    @staticmethod
    def build_environment(command: GitCommand) -> dict[str, str]:
        """Environment for the child: base, then overrides, then no prompts."""
        env = dict(os.environ) if command.inherit_environment else {}
        env.update(command.environment)
        env["GIT_TERMINAL_PROMPT"] = "0"
        return env

    def run(
        self,
        command: GitCommand,
        listener: OutputListener | None = None,
        token: CancellationToken | None = None,
        capture_mode: CaptureMode = CaptureMode.TEXT_LINES,
    ) -> GitResult:
        """
        Run a command to completion, cancellation or timeout.

        Non-zero exit codes, timeouts and cancellations are reported on the
        returned GitResult, never raised. The process is always gone by the
        time this returns.

        Args:
            command: Command to execute
            listener: Optional listener for live output
            token: Optional cancellation token, polled once per quantum
            capture_mode: How stdout is split into units (stderr is always lines)

        Returns:
            GitResult for this invocation

        Raises:
            GitExecutionError: If the process could not be started
        """
        stdout_units: list[str] = []
        stderr_lines: list[str] = []
        start = time.monotonic()

        logger.debug(f"Running git {command.args_string()}")
        try:
            process = subprocess.Popen(
                self.build_argv(command),
                cwd=command.working_directory,
                env=self.build_environment(command),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=_POSIX,
            )
        except (OSError, ValueError) as e:
            raise GitExecutionError(
                f"Failed to execute git command '{command.args_string()}': {e}"
            ) from e

        def on_stdout(unit: str) -> None:
            stdout_units.append(unit)
            if listener is not None and command.stream_stdout_to_listener:
                if capture_mode == CaptureMode.NULL_RECORDS:
                    _notify(listener.on_stdout_record, unit)
                else:
                    _notify(listener.on_stdout, unit)

        def on_stderr(line: str) -> None:
            stderr_lines.append(line)
            if listener is not None:
                _notify(listener.on_stderr, line)

        io_pool = concurrent.futures.ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="GitProcessRunner-IO"
        )
        stdout_task = stderr_task = None
        try:
            stdout_task = io_pool.submit(drain_stream, process.stdout, capture_mode, on_stdout)
            stderr_task = io_pool.submit(
                drain_stream, process.stderr, CaptureMode.TEXT_LINES, on_stderr
            )

            cancelled, timed_out = self._wait_for_exit(process, command.timeout, token)
            if cancelled or timed_out:
                reason = "cancelled" if cancelled else "timed out"
                logger.warning(f"git {command.args_string()} {reason}, terminating")
                self._terminate(process)

            exit_code = self._resolve_exit_code(process, cancelled, timed_out)

            self._join_drain(stdout_task, "stdout")
            self._join_drain(stderr_task, "stderr")

            duration = timedelta(seconds=time.monotonic() - start)
            logger.debug(
                f"git {command.args_string()} finished with exit code {exit_code} "
                f"in {duration.total_seconds():.3f}s"
            )
            return GitResult(
                exit_code=exit_code,
                stdout=list(stdout_units),
                stderr=list(stderr_lines),
                timed_out=timed_out,
                cancelled=cancelled,
                duration=duration,
            )
        finally:
            if process.poll() is None:
                self._terminate(process)
            io_pool.shutdown(wait=False, cancel_futures=True)
            for task, stream in ((stdout_task, process.stdout), (stderr_task, process.stderr)):
                if stream is not None and (task is None or task.done()):
                    stream.close()

    def _wait_for_exit(
        self, process: subprocess.Popen, timeout: float, token: CancellationToken | None
    ) -> tuple[bool, bool]:
        """Poll until exit, cancellation or deadline; returns (cancelled, timed_out)."""
        deadline = None if timeout <= 0 else time.monotonic() + timeout

        while True:
            try:
                process.wait(timeout=self.poll_interval)
                return False, False
            except subprocess.TimeoutExpired:
                pass

            if token is not None and token.is_cancellation_requested:
                return True, False

            if deadline is not None and time.monotonic() >= deadline:
                return False, True

    def _terminate(self, process: subprocess.Popen) -> None:
        """Terminate the process and its descendants, killing them if needed."""
        self._signal_tree(process, graceful=True)
        try:
            process.wait(timeout=self.kill_grace_period)
        except subprocess.TimeoutExpired:
            logger.warning(f"Process {process.pid} ignored terminate, killing it")
            self._signal_tree(process, graceful=False)
            try:
                process.wait(timeout=self.kill_grace_period)
            except subprocess.TimeoutExpired:
                logger.error(f"Process {process.pid} is still alive after kill")

    @staticmethod
    def _signal_tree(process: subprocess.Popen, graceful: bool) -> None:
        if _POSIX:
            # The child leads its own session, so its group holds every descendant
            sig = signal.SIGTERM if graceful else signal.SIGKILL
            try:
                os.killpg(process.pid, sig)
                return
            except (ProcessLookupError, PermissionError):
                pass
        try:
            if graceful:
                process.terminate()
            else:
                process.kill()
        except ProcessLookupError:
            pass

    def _resolve_exit_code(
        self, process: subprocess.Popen, cancelled: bool, timed_out: bool
    ) -> int:
        # A killed process only reports the signal we sent it
        if cancelled:
            return EXIT_CANCELLED
        if timed_out:
            return EXIT_TIMED_OUT

        code = process.poll()
        if code is None:
            try:
                code = process.wait(timeout=self.drain_join_timeout)
            except subprocess.TimeoutExpired:
                return EXIT_INDETERMINATE
        if code < 0:
            # Popen reports death by signal N as -N; report 128 + N like a shell
            return 128 - code
        return code

    def _join_drain(self, task: concurrent.futures.Future, name: str) -> None:
        try:
            task.result(timeout=self.drain_join_timeout)
        except concurrent.futures.TimeoutError:
            logger.warning(f"Abandoning {name} drain that did not finish in time")


def _notify(callback: Callable[[str], None], unit: str) -> None:
    """Call a listener method; a failing listener must not stop the drain."""
    try:
        callback(unit)
    except Exception:
        logger.exception("Output listener raised an exception")
