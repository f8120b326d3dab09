# complaints/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from complaints.services._shared.policies.common import ADMIN_ROLE

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param username: Login name.
    :param password: Raw password (to be verified).
    """

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Opaque refresh token previously issued at login.
    """

    refresh_token: str


# ------------------------- Identity / claims ------------------------------ #


@dataclass(frozen=True, slots=True)
class AuthenticatedUser:
    """
    Identity snapshot handed to the token issuer after credentials check out.

    :param id: User primary key (``userId`` claim).
    :param username: Login name (``sub`` claim).
    :param role: Role authority, e.g. ``ROLE_USER``.
    :param password_hash: Stored hash; never serialized or logged.
    """

    id: int
    username: str
    role: str
    password_hash: str = field(default="", repr=False, compare=False)

    @property
    def authorities(self) -> list[str]:
        return [self.role]


@dataclass(frozen=True, slots=True)
class AccessTokenClaims:
    """Validated claim set extracted from an access token."""

    subject: str
    user_id: int
    roles: tuple[str, ...]
    issued_at: datetime | None = None
    expires_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Request-scoped authenticated caller, built from verified claims only.

    The database is not consulted; role changes apply once a new access
    token is issued.
    """

    user_id: int
    username: str
    roles: tuple[str, ...] = ()

    @classmethod
    def from_claims(cls, claims: AccessTokenClaims) -> Principal:
        return cls(user_id=claims.user_id, username=claims.subject, roles=claims.roles)

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def is_admin(self) -> bool:
        return self.has_role(ADMIN_ROLE)


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Login/refresh response.

    :param access_token: Signed JWT access token.
    :param refresh_token: Opaque refresh token (unchanged on refresh).
    :param token_type: Always ``Bearer``.
    """

    access_token: str
    refresh_token: str
    token_type: str = "Bearer"


@dataclass(frozen=True, slots=True)
class RefreshTokenView:
    """Read model of the persisted refresh token."""

    token: str
    user_id: int
    expiry_date: datetime
