"""Domain-level exceptions.

All domain failures are subclasses of DomainException so the boundary
layer can treat them as expected, user-facing errors.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""
