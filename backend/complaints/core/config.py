"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Supported token signing schemes (exactly one is active per deployment)
SCHEME_RSA: Final[str] = "rsa"
SCHEME_HMAC: Final[str] = "hmac"

# Loads .env in development (no-op when the file is absent)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer setting, falling back to ``default`` when unset or blank."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    JWT_SIGNING_SCHEME: str
        ``"rsa"`` (RS256 with a key pair) or ``"hmac"`` (HS512 with a shared
        secret). Selected once at startup.
    JWT_PRIVATE_KEY_LOCATION / JWT_PUBLIC_KEY_LOCATION: str
        PEM files holding the RSA signing and verification keys.
    JWT_SECRET: str | None
        Shared secret for the HMAC scheme.
    JWT_EXPIRATION_MS: int
        Access-token lifetime in milliseconds.
    JWT_REFRESH_EXPIRATION_MS: int
        Refresh-token lifetime in milliseconds. Must exceed the access-token
        lifetime.
    AUTH_LOGIN_RATE_LIMIT: str
        Flask-Limiter expression applied to the login endpoint.
    DEFAULT_USER_ROLE: str
        Role assigned to self-registered users.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")

    JWT_SIGNING_SCHEME = os.getenv("JWT_SIGNING_SCHEME", SCHEME_RSA).strip().lower()
    JWT_PRIVATE_KEY_LOCATION = os.getenv("JWT_PRIVATE_KEY_LOCATION", "keys/private_key.pem")
    JWT_PUBLIC_KEY_LOCATION = os.getenv("JWT_PUBLIC_KEY_LOCATION", "keys/public_key.pem")
    JWT_SECRET = os.getenv("JWT_SECRET")
    JWT_EXPIRATION_MS = env_int("JWT_EXPIRATION_MS", 15 * 60 * 1000)
    JWT_REFRESH_EXPIRATION_MS = env_int("JWT_REFRESH_EXPIRATION_MS", 7 * 24 * 60 * 60 * 1000)

    # Bearer tokens travel in the Authorization header only
    JWT_TOKEN_LOCATION = ["headers"]

    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")

    DEFAULT_USER_ROLE = os.getenv("DEFAULT_USER_ROLE", "ROLE_USER")

    # `flask seed run`
    SEED_ADMIN_USERNAME = os.getenv("SEED_ADMIN_USERNAME", "admin")
    SEED_ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@example.com")
    SEED_ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD")
    SEED_DEFAULT_DEPARTMENT = os.getenv("SEED_DEFAULT_DEPARTMENT", "General")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables rate limiting.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    RATELIMIT_ENABLED = False


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
