"""Cross-cutting behaviour: health, docs, errors, request ids, HMAC mode."""

from __future__ import annotations

import jwt as pyjwt
from flask_jwt_extended import create_access_token

from complaints.core.extensions import db
from complaints.core.logger import REQUEST_ID_HEADER
from tests.factories import SQLAlchemySession
from tests.factories.role import RoleFactory
from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.http import assert_problem, bearer


def test_health_is_public(client):
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    assert resp.get_json()["data"]["db"] == "ok"
    assert resp.get_json()["data"]["algorithm"] == "RS256"


def test_api_docs_are_public(client):
    assert client.get("/apidocs/").status_code == 200
    spec = client.get("/apispec_1.json")
    assert spec.status_code == 200
    assert "/api/v1/auth/login" in spec.get_json()["paths"]


def test_unknown_route_is_404_problem(client):
    body = assert_problem(client.get("/api/v1/nope"), 404)

    assert body["detail"] == "Route '/api/v1/nope' not found"
    assert body["instance"] == "/api/v1/nope"


def test_wrong_method_is_405_not_401(client):
    assert_problem(client.delete("/api/v1/auth/login"), 405)


def test_static_files_are_public(app, client, tmp_path):
    (tmp_path / "logo.txt").write_text("complaints")
    app.static_folder = str(tmp_path)
    app.add_url_rule("/static/<path:filename>", endpoint="static", view_func=app.send_static_file)

    resp = client.get("/static/logo.txt")

    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == "complaints"
    assert_problem(client.get("/static/missing.txt"), 404)


def test_token_without_expiry_is_rejected(app, client, admin):
    token = create_access_token(
        identity="admin",
        additional_claims={"userId": admin.id, "roles": ["ROLE_ADMIN"]},
        expires_delta=False,
    )

    assert_problem(client.get("/api/v1/auth/whoami", headers=bearer(token)), 401)
    assert_problem(client.get("/api/v1/users", headers=bearer(token)), 401)


def test_request_id_is_echoed(client):
    resp = client.get("/api/v1/health", headers={REQUEST_ID_HEADER: "req-123"})

    assert resp.headers[REQUEST_ID_HEADER] == "req-123"
    assert client.get("/api/v1/health").headers[REQUEST_ID_HEADER] != "req-123"


def test_hmac_scheme_end_to_end(make_app):
    app = make_app(JWT_SIGNING_SCHEME="hmac", JWT_SECRET="h" * 64)

    with app.app_context():
        db.create_all()
        SQLAlchemySession.set(db.session)
        try:
            UserFactory(username="erin", role=RoleFactory(name="ROLE_USER"))
            client = app.test_client()

            resp = client.post(
                "/api/v1/auth/login", json={"username": "erin", "password": DEFAULT_PASSWORD}
            )
            token = resp.get_json()["data"]["accessToken"]

            assert pyjwt.get_unverified_header(token)["alg"] == "HS512"
            who = client.get("/api/v1/auth/whoami", headers=bearer(token))
            assert who.get_json()["data"]["username"] == "erin"
        finally:
            SQLAlchemySession.set(None)
            db.session.remove()
            db.drop_all()
