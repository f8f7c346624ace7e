"""
Currico - Error taxonomy

Precondition failures raised by services and translated into HTTP
responses at the API boundary. Anything not listed here surfaces as a
generic server error.
"""

from __future__ import annotations


class CurricoError(Exception):
    """Base class for errors with a defined HTTP outcome."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    message: str = "Interner Serverfehler"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class NotAuthenticatedError(CurricoError):
    status_code = 401
    code = "UNAUTHORIZED"
    message = "Unauthorized"


class NotASellerError(CurricoError):
    status_code = 403
    code = "FORBIDDEN"
    message = "Nur für Verkäufer zugänglich"


class NotAnAdminError(CurricoError):
    status_code = 403
    code = "FORBIDDEN"
    message = "Forbidden"


class UserNotFoundError(CurricoError):
    status_code = 404
    code = "NOT_FOUND"
    message = "User not found"


class ProtectedUserError(CurricoError):
    status_code = 400
    code = "BAD_REQUEST"
    message = "Cannot modify protected user"


class RateLimitExceededError(CurricoError):
    status_code = 429
    code = "RATE_LIMITED"
    message = "Too many requests. Please slow down."

    def __init__(self, retry_after: int, message: str | None = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after
