"""Comment resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class CommentSchema(Schema):
    id = fields.Integer(required=True)
    ticket_id = fields.Integer(required=True, data_key="ticketId")
    user_id = fields.Integer(required=True, data_key="userId")
    username = fields.String()
    text = fields.String(required=True)
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")
    updated_at = fields.DateTime(allow_none=True, data_key="updatedAt")


class CommentInSchema(Schema):
    text = fields.String(required=True, validate=validate.Length(min=1, max=2000))
