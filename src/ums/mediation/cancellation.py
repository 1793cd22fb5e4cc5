"""Cooperative cancellation for a single dispatch."""

from __future__ import annotations

import threading

from ums.mediation.exceptions import OperationCancelled


class CancellationToken:
    """Flag checked by the pipeline at every step.

    Safe to cancel from another thread. Cancelling never interrupts a step
    that is already running; the next checkpoint raises instead.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    @classmethod
    def none(cls) -> CancellationToken:
        """A token nobody holds a reference to, so it is never cancelled."""
        return cls()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelled("Dispatch was cancelled")
