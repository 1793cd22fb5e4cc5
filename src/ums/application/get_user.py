"""Get User use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from ums.application.dto import UserDTO
from ums.domain.repository.user_repository import UserRepository
from ums.mediation.handler import RequestHandler
from ums.mediation.request import Query


@dataclass(frozen=True)
class GetUserQuery(Query[UserDTO]):
    user_id: int


class GetUserQueryHandler(RequestHandler[GetUserQuery, UserDTO]):

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, request: GetUserQuery) -> UserDTO:
        return UserDTO.from_user(self._user_repo.get(request.user_id))
