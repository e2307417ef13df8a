"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gigflow.api.auth import router as auth_router
from gigflow.api.bids import router as bids_router
from gigflow.api.gigs import router as gigs_router
from gigflow.api.realtime import router as realtime_router
from gigflow.app_logging import configure_logging
from gigflow.config import parse_allowed_origins
from gigflow.containers import AppContainer
from gigflow.domain.errors import (
    Conflict,
    Forbidden,
    GigFlowError,
    InvariantViolation,
    NotFound,
    Unauthorized,
    Unavailable,
    ValidationError,
)

_ERROR_STATUS: dict[type[GigFlowError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    Unauthorized: status.HTTP_401_UNAUTHORIZED,
    Forbidden: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    Conflict: status.HTTP_409_CONFLICT,
    Unavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="GigFlow", lifespan=lifespan)
    app.state.container = container

    origins = parse_allowed_origins(container.settings.cors_allowed_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials="*" not in origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(auth_router)
    app.include_router(gigs_router)
    app.include_router(bids_router)
    app.include_router(realtime_router)

    @app.exception_handler(GigFlowError)
    async def handle_domain_error(request: Request, exc: GigFlowError) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning(
                "Request failed", extra={"path": request.url.path, "error": exc.message}
            )
        body: dict[str, object] = {"message": exc.message}
        if isinstance(exc, ValidationError):
            body["field"] = exc.field
        return JSONResponse(status_code=status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        if errors and all(error.get("loc", ("",))[0] == "path" for error in errors):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND, content={"message": "Not found"}
            )
        first = errors[0] if errors else {}
        location = [str(part) for part in first.get("loc", ()) if part != "body"]
        body: dict[str, object] = {"message": first.get("msg", "Invalid request")}
        if location:
            body["field"] = location[-1]
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)

    @app.exception_handler(InvariantViolation)
    async def handle_invariant_violation(
        request: Request, exc: InvariantViolation
    ) -> JSONResponse:
        logger.error(
            "Invariant violation",
            exc_info=exc,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: GigFlowError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in _ERROR_STATUS:
            return _ERROR_STATUS[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR
