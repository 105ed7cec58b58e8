"""Domain exceptions raised by services and translated to HTTP responses in main."""

from typing import Optional


class AdoptionError(Exception):
    """
    Base exception for pet and adoption domain failures.

    Each subclass carries a machine-readable error code and the HTTP status
    the route layer should answer with, so services never depend on FastAPI.
    """
    error_code: str = "INTERNAL_ERROR"
    status_code: int = 500

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code

    def to_response(self) -> dict:
        """Convert to the standard JSON error body."""
        return {
            "detail": self.message,
            "error_code": self.error_code,
        }


class NotFoundError(AdoptionError):
    """A pet or application does not exist."""
    error_code = "NOT_FOUND"
    status_code = 404


class ConflictError(AdoptionError):
    """The request conflicts with the current state of a pet or application."""
    error_code = "CONFLICT"
    status_code = 409


class InvalidArgumentError(AdoptionError):
    """A malformed identifier or a disallowed status value."""
    error_code = "BAD_REQUEST"
    status_code = 400


class InternalError(AdoptionError):
    """Persistence failure."""
    error_code = "INTERNAL_ERROR"
    status_code = 500


class ForbiddenError(AdoptionError):
    """The requester may not act on another user's application."""
    error_code = "FORBIDDEN"
    status_code = 403
