"""Ticket assignment (a user charged with handling a ticket)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from complaints.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .ticket import Ticket
    from .user import User


class TicketAssignment(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Link between a ticket and an assignee.

    A user is assigned to a given ticket at most once. Rows go away with
    either side.
    """

    __tablename__ = "ticket_assignments"

    ticket_id: Mapped[int] = mapped_column(
        ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    ticket: Mapped[Ticket] = relationship("Ticket", back_populates="assignments")
    user: Mapped[User] = relationship("User", lazy="joined")

    __table_args__ = (
        UniqueConstraint("ticket_id", "user_id", name="uq_ticket_assignments_ticket_id_user_id"),
        Index("ix_ticket_assignments_user_id", "user_id"),
    )
