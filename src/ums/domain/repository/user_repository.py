"""Abstract repository for the User entity."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ums.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get(self, user_id: int) -> User:
        """Return the user with this ID.

        Raises EntityNotFoundError if there is none.
        """

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every user, ordered by ID."""

    @abstractmethod
    def create(self, user: User) -> User:
        """Store a new user, assign its ID and return the stored user."""

    @abstractmethod
    def delete(self, user_id: int) -> None:
        """Remove the user with this ID. Does nothing if it does not exist."""
