"""Errors raised by the mediation pipeline.

Configuration errors (registration problems, missing handlers) are meant
to surface at startup. ``ValidationError`` and ``OperationCancelled`` are
expected failures that the caller is supposed to handle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ums.mediation.validation import ValidationFailure


class MediationError(Exception):
    """Base class for all mediation errors."""


class HandlerRegistrationError(MediationError):
    """A handler could not be bound to a request type."""


class DuplicateHandlerRegistration(HandlerRegistrationError):
    """A second handler was registered for the same request type."""

    def __init__(self, request_type: type, existing: object, duplicate: object) -> None:
        super().__init__(
            f"{request_type.__name__} already handled by "
            f"{type(existing).__name__}; cannot also register "
            f"{type(duplicate).__name__}"
        )
        self.request_type = request_type


class NoHandlerFound(MediationError):
    """No handler is registered for the request's exact type."""

    def __init__(self, request_type: type) -> None:
        super().__init__(f"No handler registered for {request_type.__name__}")
        self.request_type = request_type


class OperationCancelled(MediationError):
    """The dispatch was cancelled before it completed."""


class ValidationError(MediationError):
    """One or more validators rejected the request.

    Carries the original request, every failure in the order the
    validators produced them, and the rule sets that were executed.
    """

    def __init__(
        self,
        request: Any,
        failures: list[ValidationFailure],
        rule_sets_executed: tuple[str, ...] = (),
    ) -> None:
        summary = "; ".join(f"{f.field}: {f.message}" for f in failures)
        super().__init__(f"Validation failed: {summary}")
        self.request = request
        self.failures = list(failures)
        self.rule_sets_executed = tuple(rule_sets_executed)
