"""Domain models for marketplace users."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a registered user."""

    id: UUID
    name: str
    email: str


@dataclass(frozen=True)
class UserCredentials:
    """User row with the stored password hash."""

    user: UserRecord
    password_hash: str
