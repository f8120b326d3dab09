"""Ticket repository."""

from __future__ import annotations

from complaints.models.ticket import Ticket
from complaints.repositories.base import BaseRepository


class TicketRepository(BaseRepository[Ticket]):
    model = Ticket

    def _sortable_fields(self):
        return {"id": Ticket.id, "created_at": Ticket.created_at, "status": Ticket.status}

    def _filterable_fields(self):
        return {
            "status": Ticket.status,
            "user_id": Ticket.user_id,
            "department_id": Ticket.department_id,
        }

    def _updatable_fields(self):
        return {"title", "description", "status", "user_id", "department_id"}
