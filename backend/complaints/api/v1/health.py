"""Liveness endpoint reporting database reachability and the signing scheme."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from complaints.api.deps import json_response, timing
from complaints.core.extensions import db
from complaints.core.keys import get_key_material

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """
    Service health
    ---
    tags:
      - Health
    responses:
      200: { description: OK }
    """
    database = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        db.session.rollback()
        database = "fail"
    payload = {
        "status": "ok",
        "db": database,
        "algorithm": get_key_material().algorithm,
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response({"data": payload})
