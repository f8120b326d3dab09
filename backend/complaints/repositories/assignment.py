"""Ticket assignment repository."""

from __future__ import annotations

from sqlalchemy import select

from complaints.models.assignment import TicketAssignment
from complaints.repositories.base import BaseRepository


class TicketAssignmentRepository(BaseRepository[TicketAssignment]):
    model = TicketAssignment

    def _sortable_fields(self):
        return {"id": TicketAssignment.id, "created_at": TicketAssignment.created_at}

    def _filterable_fields(self):
        return {"ticket_id": TicketAssignment.ticket_id, "user_id": TicketAssignment.user_id}

    def list_for_ticket(self, ticket_id: int) -> list[TicketAssignment]:
        return self.list(filters={"ticket_id": ticket_id})

    def list_for_user(self, user_id: int) -> list[TicketAssignment]:
        return self.list(filters={"user_id": user_id})

    def get_by_ticket_and_user(self, ticket_id: int, user_id: int) -> TicketAssignment | None:
        stmt = select(TicketAssignment).where(
            TicketAssignment.ticket_id == ticket_id, TicketAssignment.user_id == user_id
        )
        return self.session.execute(stmt).scalars().first()
