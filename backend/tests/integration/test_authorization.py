"""Route policies and service-level ownership over HTTP."""

from __future__ import annotations

from tests.factories.department import DepartmentFactory
from tests.factories.ticket import CommentFactory, TicketFactory
from tests.factories.user import UserFactory
from tests.helpers.http import assert_problem, bearer


def test_admin_route_forbidden_for_user_allowed_for_admin(client, alice, admin, login):
    user_token = login("alice")["accessToken"]
    admin_token = login("admin")["accessToken"]

    denied = client.get("/api/v1/users", headers=bearer(user_token))
    allowed = client.get("/api/v1/users", headers=bearer(admin_token))

    assert_problem(denied, 403, contains="Access Denied")
    assert allowed.status_code == 200
    assert {u["username"] for u in allowed.get_json()["data"]} == {"alice", "admin"}


def test_self_or_admin_on_user_routes(client, alice, admin, login):
    token = login("alice")["accessToken"]

    assert client.get(f"/api/v1/users/{alice.id}", headers=bearer(token)).status_code == 200
    assert client.get(f"/api/v1/users/{alice.id}/profile", headers=bearer(token)).status_code == 200
    assert_problem(client.get(f"/api/v1/users/{admin.id}", headers=bearer(token)), 403)


def test_user_cannot_promote_self(client, alice, admin_role, login):
    token = login("alice")["accessToken"]

    resp = client.put(f"/api/v1/users/{alice.id}", json={"role": "ROLE_ADMIN"}, headers=bearer(token))

    assert_problem(resp, 403)


def test_change_username_revokes_refresh_and_old_token_keeps_old_subject(client, alice, admin, login):
    alice_pair = login("alice")
    admin_token = login("admin")["accessToken"]

    resp = client.patch(
        f"/api/v1/users/{alice.id}/change-username",
        json={"username": "alicia"},
        headers=bearer(admin_token),
    )

    assert resp.status_code == 200
    assert resp.get_json()["data"]["username"] == "alicia"
    assert_problem(
        client.post("/api/v1/auth/refresh", json={"refreshToken": alice_pair["refreshToken"]}), 403
    )
    who = client.get("/api/v1/auth/whoami", headers=bearer(alice_pair["accessToken"]))
    assert who.get_json()["data"]["username"] == "alice"


def test_change_password_then_login_with_new_one(client, alice, login):
    token = login("alice")["accessToken"]

    resp = client.patch(
        f"/api/v1/users/{alice.id}/change-password",
        json={"oldPassword": "Passw0rd!", "newPassword": "BrandNew123"},
        headers=bearer(token),
    )

    assert resp.status_code == 200
    assert login("alice", "BrandNew123")["accessToken"]


def test_roles_admin_crud(client, admin, login):
    headers = bearer(login("admin")["accessToken"])

    created = client.post("/api/v1/roles", json={"name": "ROLE_SUPPORT"}, headers=headers)
    assert created.status_code == 201
    role_id = created.get_json()["data"]["id"]

    assert_problem(client.post("/api/v1/roles", json={"name": "SUPPORT"}, headers=headers), 400)
    assert client.delete(f"/api/v1/roles/{role_id}", headers=headers).status_code == 204


def test_tickets_are_public_to_read_but_not_to_file(client, alice, login):
    TicketFactory(title="Noisy AC")
    dept = DepartmentFactory()

    listing = client.get("/api/v1/tickets")
    assert listing.status_code == 200
    assert [t["title"] for t in listing.get_json()["data"]] == ["Noisy AC"]

    assert_problem(client.post("/api/v1/tickets", json={"title": "x", "departmentId": dept.id}), 401)

    token = login("alice")["accessToken"]
    filed = client.post(
        "/api/v1/tickets", json={"title": "Leaky roof", "departmentId": dept.id}, headers=bearer(token)
    )
    assert filed.status_code == 201
    assert filed.get_json()["data"]["userId"] == alice.id


def test_ticket_status_is_admin_only(client, alice, admin, login):
    ticket = TicketFactory()
    url = f"/api/v1/tickets/{ticket.id}/status"

    user_resp = client.patch(url, json={"status": "CLOSED"}, headers=bearer(login("alice")["accessToken"]))
    admin_resp = client.patch(url, json={"status": "CLOSED"}, headers=bearer(login("admin")["accessToken"]))

    assert_problem(user_resp, 403)
    assert admin_resp.get_json()["data"]["status"] == "CLOSED"


def test_comment_edit_is_owner_or_admin(client, alice, admin, login):
    comment = CommentFactory(author=alice)
    url = f"/api/v1/comments/{comment.id}"

    by_admin = client.put(url, json={"text": "moderated"}, headers=bearer(login("admin")["accessToken"]))
    assert by_admin.get_json()["data"]["text"] == "moderated"

    UserFactory(username="mallory")
    denied = client.delete(url, headers=bearer(login("mallory")["accessToken"]))
    assert_problem(denied, 403)

    own = client.delete(url, headers=bearer(login("alice")["accessToken"]))
    assert own.status_code == 204


def test_token_of_deleted_user_cannot_create_content(client, alice, admin, login):
    ticket = TicketFactory()
    stale = bearer(login("alice")["accessToken"])
    admin_headers = bearer(login("admin")["accessToken"])
    gone = client.delete(f"/api/v1/users/{alice.id}", headers=admin_headers)
    assert gone.status_code == 204

    filed = client.post(
        "/api/v1/tickets", json={"title": "Ghost", "departmentId": ticket.department_id}, headers=stale
    )
    commented = client.post(f"/api/v1/tickets/{ticket.id}/comments", json={"text": "boo"}, headers=stale)

    assert_problem(filed, 401)
    assert_problem(commented, 401)
    assert client.get(f"/api/v1/tickets/{ticket.id}/comments", headers=admin_headers).get_json()["data"] == []
