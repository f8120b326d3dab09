"""Role resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class RoleSchema(Schema):
    id = fields.Integer(required=True)
    name = fields.String(required=True)


class RoleInSchema(Schema):
    """Payload for creating or renaming a role (``ROLE_`` prefix enforced by the service)."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=50))
