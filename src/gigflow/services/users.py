"""User registration and authentication."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from gigflow.domain.errors import Conflict, Unauthorized, ValidationError
from gigflow.domain.models import UserCredentials, UserRecord

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_credentials(self, email: str) -> UserCredentials | None:
        """Return the user and password hash for an email, if present."""

    def create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        """Create and return a new user record."""


class PasswordHasher(Protocol):
    """Interface for password hashing."""

    def hash(self, password: str) -> str:
        """Return a salted hash for the password."""

    def verify(self, password: str, password_hash: str) -> bool:
        """Return true when the password matches the hash."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository
    hasher: PasswordHasher

    def register(self, name: str, email: str, password: str) -> UserRecord:
        """Validate and create a new user account."""
        cleaned_name = name.strip()
        cleaned_email = _normalize_email(email)
        if not cleaned_name:
            raise ValidationError("name", "Name is required")
        if "@" not in cleaned_email:
            raise ValidationError("email", "Email must be a valid address")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                "password",
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            )
        if self.repository.get_credentials(cleaned_email) is not None:
            raise Conflict("An account with this email already exists")

        user = self.repository.create_user(
            name=cleaned_name,
            email=cleaned_email,
            password_hash=self.hasher.hash(password),
        )
        logger.info("Registered user", extra={"user_id": str(user.id)})
        return user

    def authenticate(self, email: str, password: str) -> UserRecord:
        """Return the user for valid credentials."""
        credentials = self.repository.get_credentials(_normalize_email(email))
        if credentials is None or not self.hasher.verify(
            password, credentials.password_hash
        ):
            raise Unauthorized("Invalid email or password")
        return credentials.user

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id, if present."""
        return self.repository.get_by_id(user_id)


def _normalize_email(email: str) -> str:
    return email.strip().lower()
