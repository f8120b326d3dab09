"""Policy variants, table resolution, and coverage of the registered routes."""

from __future__ import annotations

import pytest

from complaints.api.gate import extract_bearer_token
from complaints.api.policy import (
    Authenticated,
    PolicyTable,
    Public,
    RequireRole,
    RequireSelfOrRole,
    build_policy_table,
    evaluate,
)
from complaints.core.errors import Forbidden, Unauthorized
from complaints.services.auth.dto import Principal

USER = Principal(user_id=1, username="alice", roles=("ROLE_USER",))
ADMIN = Principal(user_id=2, username="admin", roles=("ROLE_ADMIN",))


def test_public_allows_anonymous():
    evaluate(Public(), None, {})


@pytest.mark.parametrize(
    "policy",
    [Authenticated(), RequireRole("ROLE_ADMIN"), RequireSelfOrRole("ROLE_ADMIN")],
)
def test_anonymous_is_unauthorized(policy):
    with pytest.raises(Unauthorized) as excinfo:
        evaluate(policy, None, {"user_id": 1})
    assert excinfo.value.status_code == 401


def test_authenticated_allows_any_principal():
    evaluate(Authenticated(), USER, {})


def test_require_role():
    evaluate(RequireRole("ROLE_ADMIN"), ADMIN, {})
    with pytest.raises(Forbidden) as excinfo:
        evaluate(RequireRole("ROLE_ADMIN"), USER, {})
    assert excinfo.value.message.startswith("Access Denied")


def test_require_self_or_role():
    policy = RequireSelfOrRole("ROLE_ADMIN", "user_id")

    evaluate(policy, USER, {"user_id": 1})
    evaluate(policy, ADMIN, {"user_id": 1})
    with pytest.raises(Forbidden):
        evaluate(policy, USER, {"user_id": 2})
    with pytest.raises(Forbidden):
        evaluate(policy, USER, {})


def test_table_resolution_order():
    table = PolicyTable(
        endpoints={"users.get_user": Public()},
        blueprints={"users": RequireRole("ROLE_ADMIN")},
    )

    assert table.resolve("users.get_user") == Public()
    assert table.resolve("users.delete_user") == RequireRole("ROLE_ADMIN")
    assert table.resolve("tickets.create_ticket") == Authenticated()
    assert table.resolve("static") == Authenticated()


@pytest.mark.parametrize(
    "endpoint,expected",
    [
        ("auth.login", Public()),
        ("auth.refresh", Public()),
        ("auth.register", Public()),
        ("auth.logout", Authenticated()),
        ("auth.whoami", Authenticated()),
        ("health.healthcheck", Public()),
        ("tickets.list_tickets", Public()),
        ("tickets.get_ticket", Public()),
        ("tickets.create_ticket", Authenticated()),
        ("tickets.change_status", RequireRole("ROLE_ADMIN")),
        ("tickets.update_ticket", RequireRole("ROLE_ADMIN")),
        ("tickets.patch_ticket", RequireRole("ROLE_ADMIN")),
        ("tickets.delete_ticket", RequireRole("ROLE_ADMIN")),
        ("assignments.create_assignment", RequireRole("ROLE_ADMIN")),
        ("assignments.unassign", RequireRole("ROLE_ADMIN")),
        ("users.list_users", RequireRole("ROLE_ADMIN")),
        ("users.get_profile", RequireSelfOrRole("ROLE_ADMIN", "user_id")),
        ("users.change_username", RequireRole("ROLE_ADMIN")),
        ("roles.delete_role", RequireRole("ROLE_ADMIN")),
        ("departments.create_department", RequireRole("ROLE_ADMIN")),
        ("comments.update_comment", Authenticated()),
        ("flasgger.apidocs", Public()),
        ("static", Public()),
    ],
)
def test_application_rules(endpoint, expected):
    assert build_policy_table().resolve(endpoint) == expected


def test_self_rules_name_a_real_url_variable(app):
    table = build_policy_table()
    rules = {rule.endpoint: rule for rule in app.url_map.iter_rules()}

    for endpoint, policy in table.endpoints.items():
        if endpoint == "static":
            continue  # only registered when a static folder exists
        assert endpoint in rules, endpoint
        if isinstance(policy, RequireSelfOrRole):
            assert policy.param in rules[endpoint].arguments


@pytest.mark.parametrize(
    "header,expected",
    [
        (None, None),
        ("", None),
        ("Basic abc", None),
        ("Bearer ", ""),
        ("Bearer abc.def.ghi", "abc.def.ghi"),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected
