"""Get Users use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from ums.application.dto import UserDTO
from ums.domain.repository.user_repository import UserRepository
from ums.mediation.handler import RequestHandler
from ums.mediation.request import Query


@dataclass(frozen=True)
class GetUsersQuery(Query[list[UserDTO]]):
    pass


class GetUsersQueryHandler(RequestHandler[GetUsersQuery, list[UserDTO]]):

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, request: GetUsersQuery) -> list[UserDTO]:
        return [UserDTO.from_user(user) for user in self._user_repo.list_all()]
