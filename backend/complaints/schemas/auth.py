"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    username = fields.String(required=True, validate=validate.Length(min=1, max=50))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class RefreshSchema(Schema):
    """Input payload for exchanging a refresh token."""

    refresh_token = fields.String(
        required=True, data_key="refreshToken", validate=validate.Length(min=1, max=64)
    )


class RegisterSchema(Schema):
    """Input payload for account registration."""

    username = fields.String(required=True, validate=validate.Length(min=3, max=50))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    first_name = fields.String(
        required=True, data_key="firstName", validate=validate.Length(min=1, max=100)
    )
    last_name = fields.String(
        required=True, data_key="lastName", validate=validate.Length(min=1, max=100)
    )
    department_id = fields.Integer(load_default=None, data_key="departmentId")


class TokenResponseSchema(Schema):
    """Response payload containing the access and refresh tokens."""

    access_token = fields.String(required=True, data_key="accessToken")
    token_type = fields.String(dump_default="Bearer", data_key="tokenType")
    refresh_token = fields.String(required=True, data_key="refreshToken")


class WhoAmISchema(Schema):
    """Response payload exposing the identity carried by the access token."""

    user_id = fields.Integer(required=True, data_key="userId")
    username = fields.String(required=True)
    roles = fields.List(fields.String())
    is_admin = fields.Boolean(data_key="isAdmin")


class LogoutResponseSchema(Schema):
    revoked = fields.Integer(required=True)
