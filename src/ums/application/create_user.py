"""Create User use case (command)."""

from __future__ import annotations

from dataclasses import dataclass

from ums.domain.model.user import User
from ums.domain.repository.user_repository import UserRepository
from ums.mediation.handler import RequestHandler
from ums.mediation.request import Command
from ums.mediation.validation import Validator

NAME_MAX_LENGTH = 100


@dataclass(frozen=True)
class CreateUserCommand(Command):
    name: str
    email_address: str


class CreateUserCommandValidator(Validator[CreateUserCommand]):

    def __init__(self) -> None:
        super().__init__()
        self.rule_for("Name", lambda c: c.name).not_empty().max_length(NAME_MAX_LENGTH)
        self.rule_for("EmailAddress", lambda c: c.email_address).not_empty().email_address()


class CreateUserCommandHandler(RequestHandler[CreateUserCommand, None]):

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, request: CreateUserCommand) -> None:
        self._user_repo.create(
            User(name=request.name.strip(), email_address=request.email_address.strip())
        )
