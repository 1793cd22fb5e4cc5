"""In-memory implementation of UserRepository.

State lives only as long as the process. A lock guards every read and
write of the store, and IDs come from a counter that only moves forward,
so deleting the newest user never frees its ID for reuse.
"""

from __future__ import annotations

import threading
from dataclasses import replace

import structlog

from ums.domain.exceptions import EntityNotFoundError
from ums.domain.model.user import User
from ums.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)

SEED_USERS = (
    User(id=1, name="John Doe", email_address="john.doe@mail.com"),
    User(id=2, name="Jane Doe", email_address="jane.doe@mail.com"),
)


class InMemoryUserRepository(UserRepository):

    def __init__(self, users: list[User] | None = None, seed: bool = True) -> None:
        if users is None:
            users = list(SEED_USERS) if seed else []
        self._lock = threading.Lock()
        self._store: dict[int, User] = {}
        for user in users:
            if user.id is None:
                raise ValueError(f"Initial user '{user.name}' has no id")
            self._store[user.id] = replace(user)
        self._next_id = max(self._store, default=0) + 1

    # --- UserRepository interface ---------------------------------------------

    def get(self, user_id: int) -> User:
        with self._lock:
            user = self._store.get(user_id)
        if user is None:
            raise EntityNotFoundError(f"User #{user_id} not found")
        return replace(user)

    def list_all(self) -> list[User]:
        with self._lock:
            return [replace(self._store[key]) for key in sorted(self._store)]

    def create(self, user: User) -> User:
        with self._lock:
            user.id = self._next_id
            self._next_id += 1
            self._store[user.id] = replace(user)
        logger.debug("user.created", user_id=user.id)
        return user

    def delete(self, user_id: int) -> None:
        with self._lock:
            removed = self._store.pop(user_id, None)
        if removed is not None:
            logger.debug("user.deleted", user_id=user_id)
