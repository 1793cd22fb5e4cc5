"""User entity."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered user.

    ``id`` is None until the repository stores the user and assigns one.
    """

    name: str
    email_address: str
    id: int | None = None
