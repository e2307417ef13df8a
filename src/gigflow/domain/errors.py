"""Domain error taxonomy."""


class GigFlowError(Exception):
    """Base class for recoverable errors surfaced to API callers."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(GigFlowError):
    """Malformed or out-of-range input."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class Unauthorized(GigFlowError):
    """The caller is not authenticated or sent bad credentials."""


class Forbidden(GigFlowError):
    """The caller is authenticated but not allowed to perform the action."""


class NotFound(GigFlowError):
    """A referenced user, gig or bid does not exist."""


class Conflict(GigFlowError):
    """The request is valid but the current state forbids it."""


class Unavailable(GigFlowError):
    """Transient contention or backend failure; the caller may retry."""


class InvariantViolation(RuntimeError):
    """Stored data contradicts a model invariant."""
