"""Role management endpoints (admin only via the policy table)."""

from __future__ import annotations

from flask import Blueprint, request

from complaints.api.deps import json_response, service_context, timing
from complaints.schemas import RoleInSchema, RoleSchema
from complaints.services.roles.service import RoleService

bp = Blueprint("roles", __name__)

role_schema = RoleSchema()
roles_schema = RoleSchema(many=True)
role_in_schema = RoleInSchema()


@bp.get("")
@timing
def list_roles():
    """
    List roles
    ---
    tags:
      - Roles
    security:
      - Bearer: []
    responses:
      200: { description: OK }
    """
    return json_response({"data": roles_schema.dump(RoleService(ctx=service_context()).list_roles())})


@bp.get("/<int:role_id>")
@timing
def get_role(role_id: int):
    role = RoleService(ctx=service_context()).get_role(role_id)
    return json_response({"data": role_schema.dump(role)})


@bp.post("")
@timing
def create_role():
    """
    Create a role; the name must start with ``ROLE_``.
    ---
    tags:
      - Roles
    security:
      - Bearer: []
    responses:
      201: { description: Created }
      400: { description: Invalid or duplicate name }
    """
    data = role_in_schema.load(request.get_json(silent=True) or {})
    role = RoleService(ctx=service_context()).create_role(data["name"])
    return json_response({"data": role_schema.dump(role)}, status=201)


@bp.put("/<int:role_id>")
@timing
def update_role(role_id: int):
    data = role_in_schema.load(request.get_json(silent=True) or {})
    role = RoleService(ctx=service_context()).update_role(role_id, data["name"])
    return json_response({"data": role_schema.dump(role)})


@bp.delete("/<int:role_id>")
@timing
def delete_role(role_id: int):
    RoleService(ctx=service_context()).delete_role(role_id)
    return "", 204
