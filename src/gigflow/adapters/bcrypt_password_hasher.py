"""bcrypt password hashing adapter."""

from dataclasses import dataclass

import bcrypt

from gigflow.services.users import PasswordHasher


@dataclass
class BcryptPasswordHasher(PasswordHasher):
    """Password hasher backed by bcrypt."""

    rounds: int = 12

    def hash(self, password: str) -> str:
        """Return a salted bcrypt hash."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored bcrypt hash."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False
