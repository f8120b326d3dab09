"""
DTOs for IdentityService.

Data Transfer Objects (DTOs) isolate the service layer from ORM models,
ensuring clear input/output contracts and type safety.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserRegisterIn:
    """
    Input DTO for self-registration.

    :param username: Login name (unique).
    :param password: Raw password to be hashed by the model.
    :param email: Contact email (unique, normalized to lowercase).
    :param first_name: Given name.
    :param last_name: Family name.
    :param department_id: Optional department membership.
    """

    username: str
    password: str = field(repr=False)
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    department_id: int | None = None


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Partial update; ``None`` means "leave unchanged".

    ``username``, ``role`` and ``department_id`` are administrator-only.
    """

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    role: str | None = None
    department_id: int | None = None

    @property
    def touches_admin_fields(self) -> bool:
        return any(v is not None for v in (self.username, self.role, self.department_id))


@dataclass(frozen=True, slots=True)
class UserPasswordChangeIn:
    """
    Input DTO for changing a user's password.

    :param user_id: Target user.
    :param old_password: Current password (required unless the caller is an admin).
    :param new_password: Replacement password.
    """

    user_id: int
    new_password: str = field(repr=False)
    old_password: str | None = field(default=None, repr=False)


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserOut:
    """Administrative view of a user (never includes the password hash)."""

    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    role: str
    department_id: int | None
    department_name: str | None
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class UserProfileOut:
    """Profile card shown to the user themself."""

    username: str
    email: str
    first_name: str
    last_name: str
    role: str
    department_name: str | None
