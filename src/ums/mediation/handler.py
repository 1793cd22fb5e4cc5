"""Request handlers and how they declare the request type they serve."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from typing import Generic, TypeVar, get_type_hints

from ums.mediation.exceptions import HandlerRegistrationError
from ums.mediation.request import Request

TRequest = TypeVar("TRequest", bound=Request)
TResponse = TypeVar("TResponse")


class RequestHandler(ABC, Generic[TRequest, TResponse]):
    """Performs the operation of exactly one request type.

    Collaborators are injected through ``__init__``; ``handle`` must not
    keep state between calls.
    """

    @abstractmethod
    def handle(self, request: TRequest) -> TResponse:
        """Perform the request and return its result."""


def handled_request_type(handler: RequestHandler) -> type[Request]:
    """Return the request type ``handler.handle`` is annotated to accept."""
    handle = type(handler).handle
    params = [
        p for p in inspect.signature(handle).parameters.values()
        if p.name != "self"
    ]
    if not params:
        raise HandlerRegistrationError(
            f"{type(handler).__name__}.handle takes no request parameter"
        )

    try:
        hints = get_type_hints(handle)
    except NameError as exc:
        raise HandlerRegistrationError(
            f"Cannot resolve annotations of {type(handler).__name__}.handle: {exc}"
        ) from exc

    hint = hints.get(params[0].name)
    if not (isinstance(hint, type) and issubclass(hint, Request)):
        raise HandlerRegistrationError(
            f"{type(handler).__name__}.handle must annotate its parameter "
            f"with a concrete Request subclass, got {hint!r}"
        )
    return hint
