"""Convenience exports for application schemas."""

from __future__ import annotations

from .assignment import AssignmentCreateSchema, AssignmentFilterSchema, AssignmentSchema
from .auth import (
    LoginSchema,
    LogoutResponseSchema,
    RefreshSchema,
    RegisterSchema,
    TokenResponseSchema,
    WhoAmISchema,
)
from .comment import CommentInSchema, CommentSchema
from .department import DepartmentInSchema, DepartmentSchema
from .role import RoleInSchema, RoleSchema
from .ticket import (
    TicketCreateSchema,
    TicketFilterSchema,
    TicketPatchSchema,
    TicketSchema,
    TicketStatusSchema,
    TicketUpdateSchema,
)
from .user import (
    PasswordChangeSchema,
    RoleChangeSchema,
    UserProfileSchema,
    UserSchema,
    UsernameChangeSchema,
    UserUpdateSchema,
)

__all__ = [
    "AssignmentCreateSchema",
    "AssignmentFilterSchema",
    "AssignmentSchema",
    "LoginSchema",
    "LogoutResponseSchema",
    "RefreshSchema",
    "RegisterSchema",
    "TokenResponseSchema",
    "WhoAmISchema",
    "CommentInSchema",
    "CommentSchema",
    "DepartmentInSchema",
    "DepartmentSchema",
    "RoleInSchema",
    "RoleSchema",
    "TicketCreateSchema",
    "TicketFilterSchema",
    "TicketPatchSchema",
    "TicketSchema",
    "TicketStatusSchema",
    "TicketUpdateSchema",
    "PasswordChangeSchema",
    "RoleChangeSchema",
    "UserProfileSchema",
    "UserSchema",
    "UsernameChangeSchema",
    "UserUpdateSchema",
]
