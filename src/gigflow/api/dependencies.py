"""Request-scoped dependencies shared by the routers."""

from fastapi import Depends, Request
from starlette.requests import HTTPConnection

from gigflow.containers import AppContainer
from gigflow.domain.errors import Unauthorized
from gigflow.domain.models import UserRecord


def get_container(request: Request) -> AppContainer:
    """Return the application container."""
    return request.app.state.container


def read_credential(connection: HTTPConnection, cookie_name: str) -> str | None:
    """Return the session credential from the cookie or a bearer header."""
    authorization = connection.headers.get("authorization")
    if authorization:
        scheme, _, value = authorization.partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()
    return connection.cookies.get(cookie_name)


def optional_user(
    request: Request, container: AppContainer = Depends(get_container)
) -> UserRecord | None:
    """Resolve the caller, or None for anonymous requests."""
    token = read_credential(request, container.settings.session_cookie_name)
    return container.session_manager.current_user(token)


def require_user(user: UserRecord | None = Depends(optional_user)) -> UserRecord:
    """Resolve the caller or reject the request as unauthenticated."""
    if user is None:
        raise Unauthorized("Authentication required")
    return user
