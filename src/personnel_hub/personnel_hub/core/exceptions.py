from __future__ import annotations

from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500
    label = "Internal Server Error"

    def __init__(self, message: str, *, details: Optional[Sequence[dict]] = None):
        super().__init__(message)
        self.message = message
        self.details = list(details) if details else None


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400
    label = "Validation Error"


class AuthenticationError(DomainError):
    """Raised when credentials or the bearer token are missing or invalid."""

    status_code = 401
    label = "Authentication Failed"


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""

    status_code = 403
    label = "Forbidden"


class NotFoundError(DomainError):
    """Raised when the target scope or resource does not resolve for the caller."""

    status_code = 404
    label = "Not Found"


class ConflictError(DomainError):
    """Raised on uniqueness or state-transition violations."""

    status_code = 409
    label = "Conflict"
