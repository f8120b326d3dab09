"""Pytest fixtures: an isolated app per test on an in-memory SQLite database.

RSA key files are generated once per session; every test gets a fresh
application (and therefore a fresh schema) with its app context pushed, so
factories, services and the test client all share one scoped session.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from flask import Flask
from flask.testing import FlaskClient

from complaints.core.extensions import db as _db
from complaints.core.keys import generate_rsa_pair
from complaints.factory import create_app
from complaints.services._shared.policies.common import ADMIN_ROLE, USER_ROLE
from tests.factories import SQLAlchemySession
from tests.factories.role import RoleFactory
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


class TestConfig:
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Disables rate limiting; tests that need it turn it back on.
    - Key locations are filled in by the ``app_config`` fixture.
    """

    TESTING = True
    DEBUG = False
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    API_BASE_PREFIX = "/api"
    JWT_SIGNING_SCHEME = "rsa"
    JWT_SECRET = None
    JWT_EXPIRATION_MS = 15 * 60 * 1000
    JWT_REFRESH_EXPIRATION_MS = 7 * 24 * 60 * 60 * 1000
    JWT_TOKEN_LOCATION = ["headers"]
    AUTH_LOGIN_RATE_LIMIT = "5 per minute"
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = "memory://"
    DEFAULT_USER_ROLE = USER_ROLE
    LOG_LEVEL = "WARNING"
    CORS_ORIGINS = "http://localhost:5173"
    PROPAGATE_EXCEPTIONS = False


@pytest.fixture(scope="session")
def rsa_key_files(tmp_path_factory: pytest.TempPathFactory) -> tuple[Path, Path]:
    """Write one PKCS#8/X.509 key pair for the whole session."""
    directory = tmp_path_factory.mktemp("keys")
    private_pem, public_pem = generate_rsa_pair()
    private_path = directory / "private_key.pem"
    public_path = directory / "public_key.pem"
    private_path.write_bytes(private_pem)
    public_path.write_bytes(public_pem)
    return private_path, public_path


@pytest.fixture(scope="session")
def other_rsa_key_files(tmp_path_factory: pytest.TempPathFactory) -> tuple[Path, Path]:
    """An unrelated key pair, for forged-token and mismatch tests."""
    directory = tmp_path_factory.mktemp("other-keys")
    private_pem, public_pem = generate_rsa_pair()
    (directory / "private_key.pem").write_bytes(private_pem)
    (directory / "public_key.pem").write_bytes(public_pem)
    return directory / "private_key.pem", directory / "public_key.pem"


@pytest.fixture()
def app_config(rsa_key_files: tuple[Path, Path]) -> dict[str, Any]:
    """Mutable config overrides; tweak before requesting ``app``."""
    private_path, public_path = rsa_key_files
    return {
        "JWT_PRIVATE_KEY_LOCATION": str(private_path),
        "JWT_PUBLIC_KEY_LOCATION": str(public_path),
    }


@pytest.fixture()
def make_app() -> Callable[..., Flask]:
    """Factory building an app from :class:`TestConfig` plus overrides."""

    def _make(**overrides: Any) -> Flask:
        # Ensure env-based config does not leak into tests
        os.environ.pop("DATABASE_URL", None)
        config = type("OverriddenTestConfig", (TestConfig,), overrides)
        return create_app(config, instance_relative_config=False)

    return _make


@pytest.fixture()
def app(make_app: Callable[..., Flask], app_config: dict[str, Any]) -> Generator[Flask, None, None]:
    """Create a Flask application with a fresh schema and an active app context."""
    application = make_app(**app_config)
    with application.app_context():
        _db.create_all()
        SQLAlchemySession.set(_db.session)
        try:
            yield application
        finally:
            SQLAlchemySession.set(None)
            _db.session.remove()
            _db.drop_all()


@pytest.fixture()
def session(app: Flask):
    """The scoped session shared by factories, services and requests."""
    return _db.session


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# --------------------------------------------------------------------------- #
# Domain fixtures
# --------------------------------------------------------------------------- #


@pytest.fixture()
def user_role(session):
    return RoleFactory(name=USER_ROLE)


@pytest.fixture()
def admin_role(session):
    return RoleFactory(name=ADMIN_ROLE)


@pytest.fixture()
def alice(user_role):
    """A regular user with the default password."""
    return UserFactory(username="alice", email="alice@example.com", role=user_role)


@pytest.fixture()
def admin(admin_role):
    return UserFactory(username="admin", email="admin@example.com", role=admin_role)


@pytest.fixture()
def login(client: FlaskClient) -> Callable[..., dict[str, Any]]:
    """Log in through the API and return the ``data`` block of the response."""

    def _login(username: str, password: str = DEFAULT_PASSWORD) -> dict[str, Any]:
        resp = client.post("/api/v1/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()["data"]

    return _login


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01"):
    ...         ...
    """

    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2024-01-01")

    return _factory
