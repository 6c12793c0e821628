"""Cooperative cancellation for running git processes."""

import threading


class CancellationToken:
    """A shareable flag polled by the process runner.

    Cancelling does not interrupt anything by itself; the runner notices
    the request on its next poll.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()
