"""Ticket endpoints: public reads, authenticated filing, admin edits."""

from __future__ import annotations

from flask import Blueprint, request

from complaints.api.deps import json_response, service_context, timing
from complaints.schemas import (
    TicketCreateSchema,
    TicketFilterSchema,
    TicketPatchSchema,
    TicketSchema,
    TicketStatusSchema,
    TicketUpdateSchema,
)
from complaints.services.tickets.dto import TicketCreateIn, TicketUpdateIn
from complaints.services.tickets.service import TicketService

bp = Blueprint("tickets", __name__)

ticket_schema = TicketSchema()
tickets_schema = TicketSchema(many=True)
create_schema = TicketCreateSchema()
status_schema = TicketStatusSchema()
update_schema = TicketUpdateSchema()
patch_schema = TicketPatchSchema()
filter_schema = TicketFilterSchema()


@bp.get("")
@timing
def list_tickets():
    """
    List tickets, optionally filtered by status
    ---
    tags:
      - Tickets
    parameters:
      - in: query
        name: status
        type: string
        enum: [OPEN, IN_PROGRESS, RESOLVED, CLOSED]
    responses:
      200: { description: OK }
    """
    filters = filter_schema.load(request.args.to_dict())
    items = TicketService(ctx=service_context()).list_tickets(status=filters["status"])
    return json_response({"data": tickets_schema.dump(items)})


@bp.get("/<int:ticket_id>")
@timing
def get_ticket(ticket_id: int):
    item = TicketService(ctx=service_context()).get_ticket(ticket_id)
    return json_response({"data": ticket_schema.dump(item)})


@bp.post("")
@timing
def create_ticket():
    """
    File a complaint owned by the caller
    ---
    tags:
      - Tickets
    security:
      - Bearer: []
    responses:
      201: { description: Created }
      401: { description: Unauthorized }
      404: { description: Department not found }
    """
    data = create_schema.load(request.get_json(silent=True) or {})
    item = TicketService(ctx=service_context()).create_ticket(TicketCreateIn(**data))
    return json_response({"data": ticket_schema.dump(item)}, status=201)


@bp.patch("/<int:ticket_id>/status")
@timing
def change_status(ticket_id: int):
    data = status_schema.load(request.get_json(silent=True) or {})
    item = TicketService(ctx=service_context()).change_status(ticket_id, data["status"])
    return json_response({"data": ticket_schema.dump(item)})


@bp.put("/<int:ticket_id>")
@timing
def update_ticket(ticket_id: int):
    """
    Replace the editable fields of a ticket
    ---
    tags:
      - Tickets
    security:
      - Bearer: []
    responses:
      200: { description: OK }
      400: { description: ticketId in the body does not match the path }
      404: { description: Ticket, user or department not found }
    """
    data = update_schema.load(request.get_json(silent=True) or {})
    body_id = data.pop("ticket_id")
    item = TicketService(ctx=service_context()).update_ticket(
        ticket_id, TicketUpdateIn(**data), body_id=body_id
    )
    return json_response({"data": ticket_schema.dump(item)})


@bp.patch("/<int:ticket_id>")
@timing
def patch_ticket(ticket_id: int):
    data = patch_schema.load(request.get_json(silent=True) or {})
    item = TicketService(ctx=service_context()).update_ticket(ticket_id, TicketUpdateIn(**data))
    return json_response({"data": ticket_schema.dump(item)})


@bp.delete("/<int:ticket_id>")
@timing
def delete_ticket(ticket_id: int):
    TicketService(ctx=service_context()).delete_ticket(ticket_id)
    return "", 204
