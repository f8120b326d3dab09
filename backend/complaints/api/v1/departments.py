"""Department management endpoints (admin only via the policy table)."""

from __future__ import annotations

from flask import Blueprint, request

from complaints.api.deps import json_response, service_context, timing
from complaints.schemas import DepartmentInSchema, DepartmentSchema
from complaints.services.departments.service import DepartmentService

bp = Blueprint("departments", __name__)

department_schema = DepartmentSchema()
departments_schema = DepartmentSchema(many=True)
department_in_schema = DepartmentInSchema()


@bp.get("")
@timing
def list_departments():
    """
    List departments
    ---
    tags:
      - Departments
    security:
      - Bearer: []
    responses:
      200: { description: OK }
    """
    items = DepartmentService(ctx=service_context()).list_departments()
    return json_response({"data": departments_schema.dump(items)})


@bp.get("/<int:department_id>")
@timing
def get_department(department_id: int):
    item = DepartmentService(ctx=service_context()).get_department(department_id)
    return json_response({"data": department_schema.dump(item)})


@bp.post("")
@timing
def create_department():
    data = department_in_schema.load(request.get_json(silent=True) or {})
    item = DepartmentService(ctx=service_context()).create_department(data["name"])
    return json_response({"data": department_schema.dump(item)}, status=201)


@bp.put("/<int:department_id>")
@timing
def update_department(department_id: int):
    data = department_in_schema.load(request.get_json(silent=True) or {})
    item = DepartmentService(ctx=service_context()).update_department(department_id, data["name"])
    return json_response({"data": department_schema.dump(item)})


@bp.delete("/<int:department_id>")
@timing
def delete_department(department_id: int):
    DepartmentService(ctx=service_context()).delete_department(department_id)
    return "", 204
