"""
AssignmentService
=================

Administrative links between tickets and the users charged with them. A
user is assigned to a ticket at most once; both ends must exist.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from complaints.models.assignment import TicketAssignment
from complaints.services._shared.base import BaseService
from complaints.services._shared.errors import NotFoundError, ServiceError, violates
from complaints.services.assignments.dto import AssignmentOut
from complaints.uow.sqlalchemy_uow import SQLAlchemyRepositoryContainer

log = logging.getLogger(__name__)


def _already_assigned(ticket_id: int, user_id: int) -> str:
    return f"User with ID {user_id} is already assigned to ticket with ID {ticket_id}"


def _to_out(assignment: TicketAssignment) -> AssignmentOut:
    return AssignmentOut(
        id=assignment.id,
        ticket_id=assignment.ticket_id,
        ticket_title=assignment.ticket.title,
        user_id=assignment.user_id,
        username=assignment.user.username,
        created_at=assignment.created_at,
    )


class AssignmentService(BaseService):
    """Application service for `TicketAssignment` rows."""

    def list_assignments(
        self, *, ticket_id: int | None = None, user_id: int | None = None
    ) -> list[AssignmentOut]:
        """
        List assignments, narrowed by ticket and/or user.

        :raises NotFoundError: When a given ticket or user does not exist.
        """
        with self.ro_uow() as uow:
            self._check_ends(uow, ticket_id=ticket_id, user_id=user_id)
            filters = {"ticket_id": ticket_id, "user_id": user_id}
            filters = {k: v for k, v in filters.items() if v is not None}
            items = uow.assignments.list(filters=filters or None, sort=["created_at"])
            return [_to_out(a) for a in items]

    def get_assignment(self, assignment_id: int) -> AssignmentOut:
        with self.ro_uow() as uow:
            assignment = uow.assignments.get(assignment_id)
            if assignment is None:
                raise NotFoundError("TicketAssignment", assignment_id)
            return _to_out(assignment)

    def create_assignment(self, ticket_id: int, user_id: int) -> AssignmentOut:
        """
        :raises NotFoundError: When the ticket or the user does not exist.
        :raises ServiceError: When the user is already assigned to the ticket.
        """
        with self.rw_uow() as uow:
            self._check_ends(uow, ticket_id=ticket_id, user_id=user_id)
            if uow.assignments.get_by_ticket_and_user(ticket_id, user_id) is not None:
                raise ServiceError(_already_assigned(ticket_id, user_id))
            try:
                assignment = uow.assignments.add(
                    TicketAssignment(ticket_id=ticket_id, user_id=user_id)
                )
            except IntegrityError as exc:
                # Lost a race with a concurrent assignment
                if violates(exc, "uq_ticket_assignments_ticket_id_user_id") or violates(
                    exc, "ticket_assignments.ticket_id"
                ):
                    raise ServiceError(_already_assigned(ticket_id, user_id)) from exc
                raise
            out = _to_out(assignment)
        log.info("Assigned user_id=%s to ticket_id=%s", user_id, ticket_id)
        return out

    def delete_assignment(self, assignment_id: int) -> None:
        with self.rw_uow() as uow:
            assignment = uow.assignments.get_for_update(assignment_id)
            if assignment is None:
                raise NotFoundError("TicketAssignment", assignment_id)
            uow.assignments.delete(assignment)
        log.info("Deleted assignment id=%s", assignment_id)

    def unassign(self, ticket_id: int, user_id: int) -> None:
        """Remove the assignment linking ``user_id`` to ``ticket_id``."""
        with self.rw_uow() as uow:
            assignment = uow.assignments.get_by_ticket_and_user(ticket_id, user_id)
            if assignment is None:
                raise NotFoundError("TicketAssignment", f"ticket {ticket_id}, user {user_id}")
            uow.assignments.delete(assignment)
        log.info("Unassigned user_id=%s from ticket_id=%s", user_id, ticket_id)

    @staticmethod
    def _check_ends(
        uow: SQLAlchemyRepositoryContainer, *, ticket_id: int | None, user_id: int | None
    ) -> None:
        if ticket_id is not None and uow.tickets.get(ticket_id) is None:
            raise NotFoundError("Ticket", ticket_id)
        if user_id is not None and uow.users.get(user_id) is None:
            raise NotFoundError("User", user_id)
