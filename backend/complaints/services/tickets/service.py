"""
TicketService
=============

Ticket surface: public reads, authenticated creation (owner is the caller),
and administrative edits, status changes and deletion.
"""

from __future__ import annotations

import logging
from dataclasses import asdict

from complaints.models.ticket import TICKET_STATUSES, Ticket
from complaints.services._shared.base import BaseService
from complaints.services._shared.errors import NotFoundError, ServiceError
from complaints.services.tickets.dto import TicketCreateIn, TicketOut, TicketUpdateIn

log = logging.getLogger(__name__)


def _to_out(ticket: Ticket) -> TicketOut:
    return TicketOut(
        id=ticket.id,
        title=ticket.title,
        description=ticket.description,
        status=ticket.status,
        user_id=ticket.user_id,
        username=ticket.owner.username,
        department_id=ticket.department_id,
        department_name=ticket.department.name,
        created_at=ticket.created_at,
        updated_at=ticket.updated_at,
    )


class TicketService(BaseService):
    """Application service for the `Ticket` aggregate."""

    def list_tickets(self, *, status: str | None = None) -> list[TicketOut]:
        filters = {"status": status} if status else None
        with self.ro_uow() as uow:
            return [_to_out(t) for t in uow.tickets.list(filters=filters, sort=["-created_at"])]

    def get_ticket(self, ticket_id: int) -> TicketOut:
        with self.ro_uow() as uow:
            ticket = uow.tickets.get(ticket_id)
            if ticket is None:
                raise NotFoundError("Ticket", ticket_id)
            return _to_out(ticket)

    def create_ticket(self, dto: TicketCreateIn) -> TicketOut:
        """File a ticket owned by the caller."""
        with self.rw_uow() as uow:
            owner_id = self.require_existing_actor(uow)
            if uow.departments.get(dto.department_id) is None:
                raise NotFoundError("Department", dto.department_id)
            ticket = uow.tickets.add(
                Ticket(
                    title=dto.title.strip(),
                    description=dto.description,
                    department_id=dto.department_id,
                    user_id=owner_id,
                )
            )
            out = _to_out(ticket)
        log.info("Ticket id=%s filed by user_id=%s", out.id, owner_id)
        return out

    def change_status(self, ticket_id: int, status: str) -> TicketOut:
        if status not in TICKET_STATUSES:
            raise ServiceError(f"Unknown ticket status '{status}'")
        with self.rw_uow() as uow:
            ticket = uow.tickets.get_for_update(ticket_id)
            if ticket is None:
                raise NotFoundError("Ticket", ticket_id)
            uow.tickets.update(ticket, status=status)
            out = _to_out(ticket)
        log.info("Ticket id=%s moved to %s", ticket_id, status)
        return out

    def update_ticket(
        self, ticket_id: int, dto: TicketUpdateIn, *, body_id: int | None = None
    ) -> TicketOut:
        """
        Apply an administrative edit.

        :param body_id: Ticket id echoed in a full-replacement body; must
            match ``ticket_id`` when given.
        :raises NotFoundError: When the ticket, new owner or department is missing.
        """
        if body_id is not None and body_id != ticket_id:
            raise ServiceError(
                f"Ticket ID {body_id} in the body does not match path ID {ticket_id}"
            )
        if dto.status is not None and dto.status not in TICKET_STATUSES:
            raise ServiceError(f"Unknown ticket status '{dto.status}'")
        changes = {k: v for k, v in asdict(dto).items() if v is not None}
        if "title" in changes:
            changes["title"] = changes["title"].strip()
            if not changes["title"]:
                raise ServiceError("Ticket title must not be blank")
        with self.rw_uow() as uow:
            ticket = uow.tickets.get_for_update(ticket_id)
            if ticket is None:
                raise NotFoundError("Ticket", ticket_id)
            if dto.user_id is not None and uow.users.get(dto.user_id) is None:
                raise NotFoundError("User", dto.user_id)
            if dto.department_id is not None and uow.departments.get(dto.department_id) is None:
                raise NotFoundError("Department", dto.department_id)
            if changes:
                uow.tickets.update(ticket, **changes)
                # reload relationships whose foreign key may have moved
                uow.session.expire(ticket, ["owner", "department"])
            out = _to_out(ticket)
        log.info("Ticket id=%s updated fields=%s", ticket_id, sorted(changes))
        return out

    def delete_ticket(self, ticket_id: int) -> None:
        """Delete a ticket together with its comments and assignments."""
        with self.rw_uow() as uow:
            ticket = uow.tickets.get_for_update(ticket_id)
            if ticket is None:
                raise NotFoundError("Ticket", ticket_id)
            uow.tickets.delete(ticket)
        log.info("Deleted ticket id=%s", ticket_id)
