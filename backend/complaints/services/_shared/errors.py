"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or HTTP.
They are stable contracts between repositories, services and the API layer.

The translation to HTTP responses (RFC 7807) is handled by
``complaints/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

ACCESS_DENIED_MESSAGE = "Access Denied: You do not have permission to perform this action."
BAD_CREDENTIALS_MESSAGE = "Invalid username or password"
AUTHENTICATION_REQUIRED = "Full authentication is required to access this resource"


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite reports ``table.column``,
    so callers may pass either form.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Constraint name (``uq_users_email``) or column
        reference (``users.email``).
    :returns: True if the IntegrityError matches.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - Anything not covered by a subclass surfaces as ``400 Bad Request``.
    """


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :param key: Identifier or search key.
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :param detail: Short human-readable explanation.
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class AuthenticationError(ServiceError):
    """Raised when credentials cannot be verified.

    The message never reveals whether the username or the password was wrong.
    """

    def __init__(self, message: str = BAD_CREDENTIALS_MESSAGE) -> None:
        super().__init__(message)


class AuthorizationError(ServiceError):
    """Raised when an authenticated caller may not act on a resource."""

    def __init__(self, message: str = ACCESS_DENIED_MESSAGE) -> None:
        super().__init__(message)


class TokenRefreshError(ServiceError):
    """Raised when a refresh token is unknown or expired.

    :param token: The refresh token presented by the client.
    :param reason: Why the refresh was refused.
    """

    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"Refresh Token Failed [{token}]: {reason}")
