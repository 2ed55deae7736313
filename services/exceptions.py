"""
Domain errors raised by the service layer.

Each error carries the HTTP status it is surfaced with; the handlers in
main.py turn them into ``{"message": ...}`` responses.
"""


class DomainError(Exception):
    """Base class for expected, caller-facing failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Malformed input, broken business invariant, or duplicate unique key."""

    status_code = 400


class InvalidTransitionError(ValidationError):
    """Requested quote status is not reachable from the current one."""


class NotFoundError(DomainError):
    """Referenced record does not exist."""

    status_code = 404


class UnauthenticatedError(DomainError):
    """Missing or invalid credentials."""

    status_code = 401


class ForbiddenError(DomainError):
    """Authenticated, but the access policy denies the operation."""

    status_code = 403
