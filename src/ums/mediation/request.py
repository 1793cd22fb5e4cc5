"""Request types: the messages routed by the Mediator.

Concrete requests should be frozen dataclasses, so they behave as
immutable value objects that carry only their field values.
"""

from __future__ import annotations

from typing import Generic, TypeVar

TResponse = TypeVar("TResponse")


class Request(Generic[TResponse]):
    """Base class for every request. ``TResponse`` is what its handler returns."""


class Command(Request[None]):
    """A request that changes state and returns nothing."""


class Query(Request[TResponse]):
    """A request that reads state and returns a value."""
