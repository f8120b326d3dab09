"""Ticket assignment endpoints (admin only via the policy table)."""

from __future__ import annotations

from flask import Blueprint, request

from complaints.api.deps import json_response, service_context, timing
from complaints.schemas import AssignmentCreateSchema, AssignmentFilterSchema, AssignmentSchema
from complaints.services.assignments.service import AssignmentService

bp = Blueprint("assignments", __name__)

assignment_schema = AssignmentSchema()
assignments_schema = AssignmentSchema(many=True)
create_schema = AssignmentCreateSchema()
filter_schema = AssignmentFilterSchema()


@bp.get("")
@timing
def list_assignments():
    """
    List assignments, optionally by ticket and/or user
    ---
    tags:
      - Assignments
    security:
      - Bearer: []
    parameters:
      - { in: query, name: ticketId, type: integer }
      - { in: query, name: userId, type: integer }
    responses:
      200: { description: OK }
      404: { description: Ticket or user not found }
    """
    filters = filter_schema.load(request.args.to_dict())
    items = AssignmentService(ctx=service_context()).list_assignments(**filters)
    return json_response({"data": assignments_schema.dump(items)})


@bp.get("/<int:assignment_id>")
@timing
def get_assignment(assignment_id: int):
    item = AssignmentService(ctx=service_context()).get_assignment(assignment_id)
    return json_response({"data": assignment_schema.dump(item)})


@bp.post("")
@timing
def create_assignment():
    """
    Assign a user to a ticket
    ---
    tags:
      - Assignments
    security:
      - Bearer: []
    responses:
      201: { description: Created }
      400: { description: Already assigned }
      404: { description: Ticket or user not found }
    """
    data = create_schema.load(request.get_json(silent=True) or {})
    item = AssignmentService(ctx=service_context()).create_assignment(**data)
    return json_response({"data": assignment_schema.dump(item)}, status=201)


@bp.delete("/<int:assignment_id>")
@timing
def delete_assignment(assignment_id: int):
    AssignmentService(ctx=service_context()).delete_assignment(assignment_id)
    return "", 204


@bp.delete("")
@timing
def unassign():
    """
    Remove the assignment of ``userId`` to ``ticketId``
    ---
    tags:
      - Assignments
    security:
      - Bearer: []
    parameters:
      - { in: query, name: ticketId, type: integer, required: true }
      - { in: query, name: userId, type: integer, required: true }
    responses:
      204: { description: Deleted }
      404: { description: No such assignment }
    """
    data = create_schema.load(request.args.to_dict())
    AssignmentService(ctx=service_context()).unassign(**data)
    return "", 204
