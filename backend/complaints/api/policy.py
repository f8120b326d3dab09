"""
Declarative route authorization.

Every endpoint resolves to exactly one policy variant through a
:class:`PolicyTable` built once at startup. The table is consulted by a
``before_request`` hook registered after the authentication gate, so the
principal (or its absence) is already known when the policy runs.

Lookup order
------------
1. Exact endpoint name, e.g. ``users.list_users``.
2. Blueprint name, e.g. ``roles``.
3. The table default, :class:`Authenticated`.

Requests that match no route (``request.endpoint is None``) are never
evaluated so 404/405 surface normally.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from flask import Flask, current_app, g, request

from complaints.core.errors import Forbidden, Unauthorized
from complaints.services._shared.policies.common import ADMIN_ROLE, is_owner
from complaints.services.auth.dto import Principal

TABLE_KEY = "policy_table"


@dataclass(frozen=True, slots=True)
class Public:
    """Anyone, with or without a token."""


@dataclass(frozen=True, slots=True)
class Authenticated:
    """Any caller carrying a valid access token."""


@dataclass(frozen=True, slots=True)
class RequireRole:
    role: str


@dataclass(frozen=True, slots=True)
class RequireSelfOrRole:
    """
    The caller whose id matches the ``param`` view argument, or a holder of ``role``.

    :param role: Role that bypasses the self check.
    :param param: Name of the URL variable carrying the target user id.
    """

    role: str
    param: str = "user_id"


Policy = Public | Authenticated | RequireRole | RequireSelfOrRole


def evaluate(policy: Policy, principal: Principal | None, view_args: Mapping[str, Any]) -> None:
    """
    Apply ``policy`` to the current caller.

    :raises Unauthorized: When the policy needs a principal and there is none.
    :raises Forbidden: When the principal lacks the role or is not the target user.
    """
    if isinstance(policy, Public):
        return
    if principal is None:
        raise Unauthorized()
    if isinstance(policy, Authenticated):
        return
    if isinstance(policy, RequireRole):
        if not principal.has_role(policy.role):
            raise Forbidden()
        return
    if isinstance(policy, RequireSelfOrRole):
        if principal.has_role(policy.role):
            return
        if is_owner(actor_id=principal.user_id, owner_id=view_args.get(policy.param)):
            return
        raise Forbidden()
    raise TypeError(f"Unsupported policy {policy!r}")


@dataclass(frozen=True)
class PolicyTable:
    """Endpoint and blueprint rules with a default for everything else."""

    endpoints: Mapping[str, Policy] = field(default_factory=dict)
    blueprints: Mapping[str, Policy] = field(default_factory=dict)
    default: Policy = field(default_factory=Authenticated)

    def resolve(self, endpoint: str) -> Policy:
        if endpoint in self.endpoints:
            return self.endpoints[endpoint]
        blueprint, sep, _ = endpoint.rpartition(".")
        if sep and blueprint in self.blueprints:
            return self.blueprints[blueprint]
        return self.default


def build_policy_table() -> PolicyTable:
    """Rules for every route exposed by the API."""
    admin = RequireRole(ADMIN_ROLE)
    self_or_admin = RequireSelfOrRole(ADMIN_ROLE, "user_id")
    return PolicyTable(
        endpoints={
            # Flask's app-level static route has no blueprint
            "static": Public(),
            "auth.login": Public(),
            "auth.refresh": Public(),
            "auth.register": Public(),
            "tickets.list_tickets": Public(),
            "tickets.get_ticket": Public(),
            "tickets.change_status": admin,
            "tickets.update_ticket": admin,
            "tickets.patch_ticket": admin,
            "tickets.delete_ticket": admin,
            "users.get_user": self_or_admin,
            "users.get_profile": self_or_admin,
            "users.update_user": self_or_admin,
            "users.change_password": self_or_admin,
        },
        blueprints={
            "health": Public(),
            "flasgger": Public(),
            "users": admin,
            "roles": admin,
            "departments": admin,
            "assignments": admin,
        },
    )


def enforce_policy() -> None:
    endpoint = request.endpoint
    if endpoint is None or request.method == "OPTIONS":
        return
    table: PolicyTable = current_app.extensions[TABLE_KEY]
    evaluate(table.resolve(endpoint), getattr(g, "principal", None), request.view_args or {})


def init_app(app: Flask, table: PolicyTable | None = None) -> None:
    """Register the policy hook; call after :func:`complaints.api.gate.init_app`."""
    app.extensions[TABLE_KEY] = table or build_policy_table()
    app.before_request(enforce_policy)


__all__ = [
    "Authenticated",
    "Policy",
    "PolicyTable",
    "Public",
    "RequireRole",
    "RequireSelfOrRole",
    "build_policy_table",
    "evaluate",
    "init_app",
]
