"""Listeners receiving git output while a process is still running."""

import logging
from typing import Callable

from vcscore.models.progress import ProgressEvent, ProgressPercentage, ProgressPhase
from vcscore.parsing.progress_parser import parse_progress

logger = logging.getLogger(__name__)

ProgressSink = Callable[[ProgressEvent], None]


class OutputListener:
    """Receives output units from the runner's drain threads.

    Methods are called synchronously from the stdout and stderr drain
    threads, so implementations must be thread-safe. The base class
    ignores everything.
    """

    def on_stdout(self, line: str) -> None:
        pass

    def on_stdout_record(self, record: str) -> None:
        pass

    def on_stderr(self, line: str) -> None:
        pass


class ProgressListener(OutputListener):
    """Forward raw output and report progress events parsed from it."""

    def __init__(
        self,
        raw: OutputListener | None,
        sink: ProgressSink | None,
        initial_phase: str | None = None,
    ):
        self.raw = raw
        self.sink = sink
        self.current_phase = initial_phase or "(working)"

    def on_stdout(self, line: str) -> None:
        if self.raw is not None:
            self.raw.on_stdout(line)
        self._emit_if_progress(line)

    def on_stdout_record(self, record: str) -> None:
        if self.raw is not None:
            self.raw.on_stdout_record(record)

    def on_stderr(self, line: str) -> None:
        if self.raw is not None:
            self.raw.on_stderr(line)
        self._emit_if_progress(line)

    def _emit_if_progress(self, line: str) -> None:
        event = parse_progress(line, self.current_phase)
        if event is None:
            return

        if isinstance(event, ProgressPhase):
            self.current_phase = event.name
        elif isinstance(event, ProgressPercentage):
            self.current_phase = event.phase

        if self.sink is not None:
            self.sink(event)


def logging_progress_sink(operation: str) -> ProgressSink:
    """Sink that writes progress events to the debug log."""

    def sink(event: ProgressEvent) -> None:
        if isinstance(event, ProgressPercentage):
            logger.debug(f"Git {operation} progress - {event.phase}: {event.percent}%")
        elif isinstance(event, ProgressPhase):
            logger.debug(f"Git {operation} phase - {event.name}")
        else:
            logger.debug(f"Git {operation} message - {event.message}")

    return sink
