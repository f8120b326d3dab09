"""User administration and self-service endpoints.

Route-level access is declared in :mod:`complaints.api.policy`; the service
re-checks ownership for anything that is not admin-only.
"""

from __future__ import annotations

from flask import Blueprint, current_app, request

from complaints.api.deps import json_response, service_context, timing
from complaints.schemas import (
    PasswordChangeSchema,
    RoleChangeSchema,
    UserProfileSchema,
    UserSchema,
    UsernameChangeSchema,
    UserUpdateSchema,
)
from complaints.services.identity.dto import UserPasswordChangeIn, UserUpdateIn
from complaints.services.identity.service import IdentityService

bp = Blueprint("users", __name__)

user_schema = UserSchema()
users_schema = UserSchema(many=True)
profile_schema = UserProfileSchema()
update_schema = UserUpdateSchema()
password_schema = PasswordChangeSchema()
username_schema = UsernameChangeSchema()
role_change_schema = RoleChangeSchema()


def _service() -> IdentityService:
    return IdentityService(
        ctx=service_context(),
        default_role=current_app.config.get("DEFAULT_USER_ROLE", "ROLE_USER"),
    )


@bp.get("")
@timing
def list_users():
    """
    List all users (admin only)
    ---
    tags:
      - Users
    security:
      - Bearer: []
    responses:
      200: { description: OK }
      403: { description: Access Denied }
    """
    return json_response({"data": users_schema.dump(_service().list_users())})


@bp.get("/<int:user_id>")
@timing
def get_user(user_id: int):
    """
    Fetch a user (self or admin)
    ---
    tags:
      - Users
    security:
      - Bearer: []
    parameters:
      - in: path
        name: user_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    return json_response({"data": user_schema.dump(_service().get_user(user_id))})


@bp.get("/<int:user_id>/profile")
@timing
def get_profile(user_id: int):
    return json_response({"data": profile_schema.dump(_service().get_profile(user_id))})


@bp.put("/<int:user_id>")
@timing
def update_user(user_id: int):
    """
    Update a user; username, role and department are admin-only.
    ---
    tags:
      - Users
    security:
      - Bearer: []
    responses:
      200: { description: Updated }
      403: { description: Access Denied }
      409: { description: Email already taken }
    """
    data = update_schema.load(request.get_json(silent=True) or {})
    user = _service().update_user(user_id, UserUpdateIn(**data))
    return json_response({"data": user_schema.dump(user)})


@bp.patch("/<int:user_id>/change-password")
@timing
def change_password(user_id: int):
    data = password_schema.load(request.get_json(silent=True) or {})
    _service().change_password(UserPasswordChangeIn(user_id=user_id, **data))
    return json_response({"data": {"message": "Password updated"}})


@bp.patch("/<int:user_id>/change-username")
@timing
def change_username(user_id: int):
    """
    Rename a user and revoke their refresh token (admin only)
    ---
    tags:
      - Users
    security:
      - Bearer: []
    responses:
      200: { description: Renamed }
      400: { description: Username is already taken }
    """
    data = username_schema.load(request.get_json(silent=True) or {})
    user = _service().change_username(user_id, data["username"])
    return json_response({"data": user_schema.dump(user)})


@bp.patch("/<int:user_id>/roles")
@timing
def change_role(user_id: int):
    data = role_change_schema.load(request.get_json(silent=True) or {})
    user = _service().change_role(user_id, data["role"])
    return json_response({"data": user_schema.dump(user)})


@bp.delete("/<int:user_id>")
@timing
def delete_user(user_id: int):
    _service().delete_user(user_id)
    return "", 204
