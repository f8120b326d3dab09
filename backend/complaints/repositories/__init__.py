"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from complaints.repositories.base import BaseRepository, apply_sorting
from complaints.repositories.assignment import TicketAssignmentRepository
from complaints.repositories.comment import CommentRepository
from complaints.repositories.department import DepartmentRepository
from complaints.repositories.refresh_token import RefreshTokenRepository
from complaints.repositories.role import RoleRepository
from complaints.repositories.ticket import TicketRepository
from complaints.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "apply_sorting",
    "CommentRepository",
    "DepartmentRepository",
    "RefreshTokenRepository",
    "RoleRepository",
    "TicketAssignmentRepository",
    "TicketRepository",
    "UserRepository",
]
