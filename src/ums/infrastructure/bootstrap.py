"""Composition root: wires concrete implementations to the mediation core.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from ums.application.create_user import (
    CreateUserCommand,
    CreateUserCommandHandler,
    CreateUserCommandValidator,
)
from ums.application.delete_user import (
    DeleteUserCommand,
    DeleteUserCommandHandler,
    DeleteUserCommandValidator,
)
from ums.application.get_user import GetUserQuery, GetUserQueryHandler
from ums.application.get_users import GetUsersQuery, GetUsersQueryHandler
from ums.application.logging_behavior import LoggingBehavior
from ums.domain.exceptions import DomainException
from ums.domain.repository.user_repository import UserRepository
from ums.infrastructure.persistence.in_memory_user_repository import (
    InMemoryUserRepository,
)
from ums.mediation.mediator import Mediator
from ums.mediation.validation import ValidationBehavior

REQUEST_TYPES = (GetUserQuery, GetUsersQuery, CreateUserCommand, DeleteUserCommand)


@lru_cache(maxsize=None)
def user_repository() -> InMemoryUserRepository:
    """The process-wide shared store. Every mediator built here uses it."""
    return InMemoryUserRepository()


def build_mediator(user_repo: UserRepository | None = None) -> Mediator:
    repo = user_repo if user_repo is not None else user_repository()

    validation = ValidationBehavior()
    validation.register(CreateUserCommand, CreateUserCommandValidator())
    validation.register(DeleteUserCommand, DeleteUserCommandValidator())

    mediator = Mediator(expected_errors=(DomainException,))
    mediator.register_handlers([
        GetUserQueryHandler(repo),
        GetUsersQueryHandler(repo),
        CreateUserCommandHandler(repo),
        DeleteUserCommandHandler(repo),
    ])
    # Logging wraps validation; validation runs before every handler.
    mediator.add_behavior(LoggingBehavior())
    mediator.add_behavior(validation)

    mediator.ensure_registered(REQUEST_TYPES)
    return mediator
