"""Delete User use case (command).

Deleting a user that does not exist is not an error.
"""

from __future__ import annotations

from dataclasses import dataclass

from ums.domain.repository.user_repository import UserRepository
from ums.mediation.handler import RequestHandler
from ums.mediation.request import Command
from ums.mediation.validation import Validator


@dataclass(frozen=True)
class DeleteUserCommand(Command):
    user_id: int


class DeleteUserCommandValidator(Validator[DeleteUserCommand]):

    def __init__(self) -> None:
        super().__init__()
        self.rule_for("Id", lambda c: c.user_id).greater_than(0)


class DeleteUserCommandHandler(RequestHandler[DeleteUserCommand, None]):

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, request: DeleteUserCommand) -> None:
        self._user_repo.delete(request.user_id)
