"""Small, pure authorization predicates shared by services and the API layer."""

from __future__ import annotations

from collections.abc import Iterable

ADMIN_ROLE = "ROLE_ADMIN"
USER_ROLE = "ROLE_USER"


def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the resource."""
    if actor_id is None or owner_id is None:
        return False
    return str(actor_id) == str(owner_id)


def has_role(roles: Iterable[str] | None, role: str) -> bool:
    return role in set(roles or ())


def is_admin(roles: Iterable[str] | None) -> bool:
    return has_role(roles, ADMIN_ROLE)
