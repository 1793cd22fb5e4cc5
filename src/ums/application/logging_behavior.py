"""Pipeline behavior that logs every dispatch with structlog."""

from __future__ import annotations

import time
from typing import Any

import structlog

from ums.mediation.behavior import NextHandler, PipelineBehavior
from ums.mediation.cancellation import CancellationToken
from ums.mediation.request import Request

logger = structlog.get_logger(__name__)


class LoggingBehavior(PipelineBehavior):
    """Logs the start, outcome and duration of each request.

    Errors are logged and re-raised unchanged.
    """

    def handle(
        self,
        request: Request,
        next_handler: NextHandler,
        cancellation: CancellationToken,
    ) -> Any:
        log = logger.bind(request=type(request).__name__)
        log.debug("request.dispatched")
        started = time.perf_counter()
        try:
            result = next_handler()
        except Exception as exc:
            log.info(
                "request.failed",
                error=type(exc).__name__,
                elapsed_ms=_elapsed_ms(started),
            )
            raise
        log.debug("request.handled", elapsed_ms=_elapsed_ms(started))
        return result


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 3)
