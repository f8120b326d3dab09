"""Ticket assignment schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class AssignmentSchema(Schema):
    id = fields.Integer(required=True)
    ticket_id = fields.Integer(required=True, data_key="ticketId")
    ticket_title = fields.String(data_key="ticketTitle")
    user_id = fields.Integer(required=True, data_key="userId")
    username = fields.String()
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")


class AssignmentCreateSchema(Schema):
    ticket_id = fields.Integer(required=True, data_key="ticketId")
    user_id = fields.Integer(required=True, data_key="userId")


class AssignmentFilterSchema(Schema):
    """Query parameters narrowing an assignment listing or deletion."""

    class Meta:
        unknown = EXCLUDE

    ticket_id = fields.Integer(load_default=None, data_key="ticketId")
    user_id = fields.Integer(load_default=None, data_key="userId")
