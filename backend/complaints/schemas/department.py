"""Department resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class DepartmentSchema(Schema):
    id = fields.Integer(required=True)
    name = fields.String(required=True)


class DepartmentInSchema(Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
