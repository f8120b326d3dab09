"""User repository: lookups used by authentication and administration."""

from __future__ import annotations

from typing import cast

from sqlalchemy import func, select

from complaints.models.comment import Comment
from complaints.models.ticket import Ticket
from complaints.models.user import User
from complaints.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It NEVER issues tokens; it only reads and writes account rows.
    """

    model = User

    def _sortable_fields(self):
        return {
            "id": User.id,
            "username": User.username,
            "email": User.email,
            "created_at": User.created_at,
        }

    def _filterable_fields(self):
        return {
            "username": User.username,
            "email": User.email,
            "role_id": User.role_id,
            "department_id": User.department_id,
        }

    def _updatable_fields(self):
        """Profile fields; password, role and username have dedicated paths."""
        return {"email", "first_name", "last_name", "department_id"}

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by exact (trimmed) username."""
        stmt = select(User).where(User.username == username.strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_username(self, username: str) -> bool:
        stmt = select(User.id).where(User.username == username.strip())
        return self.session.execute(stmt).first() is not None

    def exists_by_email(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email.strip().lower())
        return self.session.execute(stmt).first() is not None

    def count_owned_content(self, user_id: int) -> int:
        """Number of tickets and comments authored by ``user_id``."""
        tickets = self.session.execute(
            select(func.count()).select_from(Ticket).where(Ticket.user_id == user_id)
        ).scalar_one()
        comments = self.session.execute(
            select(func.count()).select_from(Comment).where(Comment.user_id == user_id)
        ).scalar_one()
        return int(tickets) + int(comments)
