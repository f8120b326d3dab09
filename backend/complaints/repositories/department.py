"""Department repository."""

from __future__ import annotations

from typing import cast

from sqlalchemy import func, select

from complaints.models.department import Department
from complaints.models.ticket import Ticket
from complaints.models.user import User
from complaints.repositories.base import BaseRepository


class DepartmentRepository(BaseRepository[Department]):
    model = Department

    def _sortable_fields(self):
        return {"id": Department.id, "name": Department.name}

    def _filterable_fields(self):
        return {"name": Department.name}

    def _updatable_fields(self):
        return {"name"}

    def get_by_name(self, name: str) -> Department | None:
        stmt = select(Department).where(Department.name == name.strip())
        return cast(Department | None, self.session.execute(stmt).scalars().first())

    def count_references(self, department_id: int) -> int:
        """Users plus tickets still pointing at ``department_id``."""
        users = self.session.execute(
            select(func.count()).select_from(User).where(User.department_id == department_id)
        ).scalar_one()
        tickets = self.session.execute(
            select(func.count()).select_from(Ticket).where(Ticket.department_id == department_id)
        ).scalar_one()
        return int(users) + int(tickets)
