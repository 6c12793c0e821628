"""Process execution: runner, capture strategies, listeners."""

from vcscore.execution.cancellation import CancellationToken
from vcscore.execution.listeners import OutputListener, ProgressListener
from vcscore.execution.runner import GitProcessRunner

__all__ = [
    "CancellationToken",
    "GitProcessRunner",
    "OutputListener",
    "ProgressListener",
]
