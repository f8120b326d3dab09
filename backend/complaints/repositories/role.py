"""Role repository."""

from __future__ import annotations

from typing import cast

from sqlalchemy import func, select

from complaints.models.role import Role
from complaints.models.user import User
from complaints.repositories.base import BaseRepository


class RoleRepository(BaseRepository[Role]):
    model = Role

    def _sortable_fields(self):
        return {"id": Role.id, "name": Role.name}

    def _filterable_fields(self):
        return {"name": Role.name}

    def _updatable_fields(self):
        return {"name"}

    def get_by_name(self, name: str) -> Role | None:
        stmt = select(Role).where(Role.name == name.strip())
        return cast(Role | None, self.session.execute(stmt).scalars().first())

    def count_holders(self, role_id: int) -> int:
        """How many users currently hold ``role_id``."""
        stmt = select(func.count()).select_from(User).where(User.role_id == role_id)
        return int(self.session.execute(stmt).scalar_one())
