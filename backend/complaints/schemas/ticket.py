"""Ticket resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from complaints.models.ticket import TICKET_STATUSES


class TicketSchema(Schema):
    """Public representation of a ticket."""

    id = fields.Integer(required=True)
    title = fields.String(required=True)
    description = fields.String()
    status = fields.String(required=True)
    user_id = fields.Integer(required=True, data_key="userId")
    username = fields.String()
    department_id = fields.Integer(required=True, data_key="departmentId")
    department_name = fields.String(data_key="departmentName")
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")
    updated_at = fields.DateTime(allow_none=True, data_key="updatedAt")


class TicketCreateSchema(Schema):
    title = fields.String(required=True, validate=validate.Length(min=1, max=200))
    description = fields.String(load_default="", validate=validate.Length(max=5000))
    department_id = fields.Integer(required=True, data_key="departmentId")


class TicketUpdateSchema(Schema):
    """Full replacement of the editable ticket fields (admin only)."""

    ticket_id = fields.Integer(load_default=None, data_key="ticketId")
    title = fields.String(required=True, validate=validate.Length(min=1, max=200))
    description = fields.String(required=True, validate=validate.Length(max=5000))
    status = fields.String(required=True, validate=validate.OneOf(TICKET_STATUSES))
    user_id = fields.Integer(required=True, data_key="userId")
    department_id = fields.Integer(required=True, data_key="departmentId")


class TicketPatchSchema(Schema):
    title = fields.String(validate=validate.Length(min=1, max=200))
    description = fields.String(validate=validate.Length(max=5000))
    status = fields.String(validate=validate.OneOf(TICKET_STATUSES))
    user_id = fields.Integer(data_key="userId")
    department_id = fields.Integer(data_key="departmentId")


class TicketStatusSchema(Schema):
    status = fields.String(required=True, validate=validate.OneOf(TICKET_STATUSES))


class TicketFilterSchema(Schema):
    """Supported query parameters for listing tickets."""

    class Meta:
        unknown = EXCLUDE

    status = fields.String(load_default=None, validate=validate.OneOf(TICKET_STATUSES))
