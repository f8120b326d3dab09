"""Application factory wiring Flask extensions, auth hooks and blueprints."""

from __future__ import annotations

from flask import Flask

from complaints.core.config import BaseConfig, get_config
from complaints.core.logger import configure_logging
from complaints.core.logger import init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :raises complaints.core.keys.SecurityConfigError: When signing keys or token
        lifetimes are misconfigured. Nothing is served in that case.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Fail fast before any extension sees JWT settings
    from complaints.core import keys

    keys.init_app(app)

    from complaints.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from complaints.core import cors

    cors.init_app(app)

    from complaints.api import init_app as init_api

    init_api(app)

    from complaints.core import errors

    errors.init_app(app)

    from complaints import cli as app_cli

    app_cli.init_app(app)

    return app
