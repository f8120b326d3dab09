"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class UserSchema(Schema):
    """Administrative representation of a user entity."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)
    first_name = fields.String(data_key="firstName")
    last_name = fields.String(data_key="lastName")
    role = fields.String(required=True)
    department_id = fields.Integer(allow_none=True, data_key="departmentId")
    department_name = fields.String(allow_none=True, data_key="departmentName")
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")


class UserProfileSchema(Schema):
    username = fields.String(required=True)
    email = fields.Email(required=True)
    first_name = fields.String(data_key="firstName")
    last_name = fields.String(data_key="lastName")
    role = fields.String(required=True)
    department_name = fields.String(allow_none=True, data_key="departmentName")


class UserUpdateSchema(Schema):
    """Partial update; absent keys are left unchanged."""

    email = fields.Email(validate=validate.Length(max=254))
    first_name = fields.String(data_key="firstName", validate=validate.Length(min=1, max=100))
    last_name = fields.String(data_key="lastName", validate=validate.Length(min=1, max=100))
    username = fields.String(validate=validate.Length(min=3, max=50))
    role = fields.String(validate=validate.Length(min=1, max=50))
    department_id = fields.Integer(data_key="departmentId")


class PasswordChangeSchema(Schema):
    old_password = fields.String(load_default=None, data_key="oldPassword")
    new_password = fields.String(
        required=True, data_key="newPassword", validate=validate.Length(min=8, max=128)
    )


class UsernameChangeSchema(Schema):
    username = fields.String(required=True, validate=validate.Length(min=3, max=50))


class RoleChangeSchema(Schema):
    role = fields.String(required=True, validate=validate.Length(min=1, max=50))
