"""Data Transfer Objects: plain containers that cross layer boundaries.

Handlers return DTOs so the transport layer never sees domain entities.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from ums.domain.model.user import User


@dataclass(frozen=True)
class UserDTO:
    """Output: a user as displayed to the caller."""

    id: int
    name: str
    email_address: str

    @classmethod
    def from_user(cls, user: User) -> UserDTO:
        return cls(
            id=user.id,  # type: ignore[arg-type]
            name=user.name,
            email_address=user.email_address,
        )

    def as_dict(self) -> dict[str, object]:
        return asdict(self)
