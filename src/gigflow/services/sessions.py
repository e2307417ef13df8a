"""Session credentials for authenticated callers."""

from dataclasses import dataclass
from uuid import UUID

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from gigflow.domain.models import UserRecord
from gigflow.services.users import UserService

SESSION_SALT = "gigflow-session"


@dataclass
class SessionManager:
    """Issues and resolves signed session tokens."""

    user_service: UserService
    secret: str
    max_age_seconds: int

    def _serializer(self) -> URLSafeTimedSerializer:
        return URLSafeTimedSerializer(self.secret, salt=SESSION_SALT)

    def issue(self, user: UserRecord) -> str:
        """Return an opaque credential identifying the user."""
        return self._serializer().dumps({"uid": str(user.id)})

    def current_user(self, token: str | None) -> UserRecord | None:
        """Resolve a credential to its user, or None when it is not valid."""
        if not token:
            return None
        try:
            data = self._serializer().loads(token, max_age=self.max_age_seconds)
        except (SignatureExpired, BadSignature):
            return None
        if not isinstance(data, dict):
            return None
        try:
            user_id = UUID(str(data.get("uid")))
        except ValueError:
            return None
        return self.user_service.get_user(user_id)
