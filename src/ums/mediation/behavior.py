"""Pipeline behaviors: interceptors that wrap every dispatch."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from ums.mediation.cancellation import CancellationToken
from ums.mediation.request import Request

NextHandler = Callable[[], Any]


class PipelineBehavior(ABC):
    """One link in the chain between ``Mediator.send`` and the handler.

    A behavior either calls ``next_handler()`` and returns its result
    (possibly after inspecting or wrapping it), or returns/raises without
    calling it, which skips every later behavior and the handler.
    """

    @abstractmethod
    def handle(
        self,
        request: Request,
        next_handler: NextHandler,
        cancellation: CancellationToken,
    ) -> Any:
        """Process ``request`` and usually delegate to ``next_handler``."""
