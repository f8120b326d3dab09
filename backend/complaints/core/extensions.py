"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from flasgger import Swagger
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData, event

# Deterministic constraint names keep Alembic batch migrations stable on SQLite
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address, headers_enabled=True)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ships with FK enforcement off; ON DELETE rules depend on it
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


SWAGGER_TEMPLATE = {
    "info": {
        "title": "Complaint Tracker API",
        "description": "Tickets, comments and the JWT-secured administration surface.",
        "version": "1.0.0",
    },
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "JWT access token: `Bearer <token>`",
        }
    },
}


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT, rate limiting and API docs.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`complaints.models` package so SQLAlchemy metadata is complete
        before migrations or ``create_all`` run. Signing keys must already be
        applied to ``app.config`` (see :mod:`complaints.core.keys`).
    """
    db.init_app(app)
    with app.app_context():
        engine = db.engine
        if engine.url.get_backend_name() == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    # Ensure models are imported so Alembic sees metadata
    from complaints import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    app.config.setdefault("SWAGGER", {"title": "Complaint Tracker API", "uiversion": 3})
    Swagger(app, template=SWAGGER_TEMPLATE)


__all__ = ["db", "init_app", "jwt", "limiter", "metadata", "migrate"]
