"""Registration, login and session endpoints."""

from fastapi import APIRouter, Depends, Response, status

from gigflow.api.dependencies import get_container, require_user
from gigflow.api.schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from gigflow.containers import AppContainer
from gigflow.domain.models import UserRecord

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
def register(
    payload: RegisterRequest,
    response: Response,
    container: AppContainer = Depends(get_container),
) -> AuthResponse:
    """Create an account and start a session."""
    user = container.user_service.register(
        name=payload.name, email=payload.email, password=payload.password
    )
    return _start_session(container, response, user)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    response: Response,
    container: AppContainer = Depends(get_container),
) -> AuthResponse:
    """Check credentials and start a session."""
    user = container.user_service.authenticate(payload.email, payload.password)
    return _start_session(container, response, user)


@router.post("/logout")
async def logout(
    response: Response, container: AppContainer = Depends(get_container)
) -> dict[str, str]:
    """End the browser session."""
    response.delete_cookie(container.settings.session_cookie_name)
    return {"status": "ok"}


@router.get("/me", response_model=AuthResponse)
async def me(user: UserRecord = Depends(require_user)) -> AuthResponse:
    """Return the authenticated caller."""
    return AuthResponse(user=UserResponse.from_domain(user))


def _start_session(
    container: AppContainer, response: Response, user: UserRecord
) -> AuthResponse:
    settings = container.settings
    token = container.session_manager.issue(user)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="none" if settings.secure_cookies else "lax",
    )
    return AuthResponse(user=UserResponse.from_domain(user), token=token)
