"""The Mediator: routes each request through its behaviors to its handler.

Handlers are bound by the request's exact runtime type; subclasses of a
registered request type are not matched. Behaviors run in registration
order. The pipeline for a request type is composed on first dispatch and
cached until the registrations change.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

from ums.mediation.behavior import PipelineBehavior
from ums.mediation.cancellation import CancellationToken
from ums.mediation.exceptions import (
    DuplicateHandlerRegistration,
    NoHandlerFound,
    OperationCancelled,
    ValidationError,
)
from ums.mediation.handler import RequestHandler, handled_request_type
from ums.mediation.request import Request
from ums.mediation.result import Err, Ok, Result

TResponse = TypeVar("TResponse")

_Pipeline = Callable[[Request, CancellationToken], Any]


class Mediator:

    def __init__(self, expected_errors: Iterable[type[Exception]] = ()) -> None:
        self._handlers: dict[type, RequestHandler] = {}
        self._behaviors: list[tuple[PipelineBehavior, frozenset[type] | None]] = []
        self._pipelines: dict[type, _Pipeline] = {}
        self._expected_errors: tuple[type[Exception], ...] = (
            ValidationError,
            OperationCancelled,
            *expected_errors,
        )

    # --- Registration ---------------------------------------------------------

    def register_handler(
        self,
        handler: RequestHandler,
        request_type: type[Request] | None = None,
    ) -> type[Request]:
        """Bind ``handler`` to its request type and return that type.

        Raises DuplicateHandlerRegistration if the type already has one.
        """
        if request_type is None:
            request_type = handled_request_type(handler)

        existing = self._handlers.get(request_type)
        if existing is not None:
            raise DuplicateHandlerRegistration(request_type, existing, handler)

        self._handlers[request_type] = handler
        self._pipelines.clear()
        return request_type

    def register_handlers(self, handlers: Iterable[RequestHandler]) -> None:
        for handler in handlers:
            self.register_handler(handler)

    def add_behavior(
        self,
        behavior: PipelineBehavior,
        request_types: Iterable[type[Request]] | None = None,
    ) -> None:
        """Append ``behavior`` to the chain, for all request types by default."""
        scope = frozenset(request_types) if request_types is not None else None
        self._behaviors.append((behavior, scope))
        self._pipelines.clear()

    def ensure_registered(self, request_types: Iterable[type[Request]]) -> None:
        """Startup check: every listed request type must have a handler."""
        for request_type in request_types:
            if request_type not in self._handlers:
                raise NoHandlerFound(request_type)

    def is_registered(self, request_type: type[Request]) -> bool:
        return request_type in self._handlers

    # --- Dispatch -------------------------------------------------------------

    def send(
        self,
        request: Request[TResponse],
        cancellation: CancellationToken | None = None,
    ) -> TResponse:
        """Dispatch ``request`` and return its handler's result.

        Every error, expected or not, propagates to the caller.
        """
        pipeline = self._pipeline_for(type(request))
        return pipeline(request, cancellation or CancellationToken.none())

    def try_send(
        self,
        request: Request[TResponse],
        cancellation: CancellationToken | None = None,
    ) -> Result[TResponse]:
        """Like ``send`` but returns expected failures as ``Err``.

        Configuration errors such as NoHandlerFound still raise.
        """
        try:
            return Ok(self.send(request, cancellation))
        except self._expected_errors as exc:
            return Err(exc)

    # --- Pipeline composition -------------------------------------------------

    def _pipeline_for(self, request_type: type) -> _Pipeline:
        pipeline = self._pipelines.get(request_type)
        if pipeline is None:
            pipeline = self._build_pipeline(request_type)
            self._pipelines[request_type] = pipeline
        return pipeline

    def _build_pipeline(self, request_type: type) -> _Pipeline:
        handler = self._handlers.get(request_type)
        if handler is None:
            raise NoHandlerFound(request_type)

        def invoke_handler(request: Request, cancellation: CancellationToken) -> Any:
            cancellation.raise_if_cancelled()
            return handler.handle(request)

        pipeline: _Pipeline = invoke_handler
        for behavior, scope in reversed(self._behaviors):
            if scope is None or request_type in scope:
                pipeline = _chain(behavior, pipeline)
        return pipeline


def _chain(behavior: PipelineBehavior, next_step: _Pipeline) -> _Pipeline:
    def step(request: Request, cancellation: CancellationToken) -> Any:
        cancellation.raise_if_cancelled()
        return behavior.handle(
            request,
            lambda: next_step(request, cancellation),
            cancellation,
        )

    return step
