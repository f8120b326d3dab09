"""Ticket model (complaint filed by a user against a department)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from complaints.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .assignment import TicketAssignment
    from .comment import Comment
    from .department import Department
    from .user import User

# --- Domain Enum ---
TICKET_STATUSES = ("OPEN", "IN_PROGRESS", "RESOLVED", "CLOSED")
TicketStatus = Enum(*TICKET_STATUSES, name="ticket_status")


class Ticket(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Complaint ticket.

    Owned by the user who filed it; administrators may reassign the owner,
    edit the ticket and attach assignees. Status history is not kept.
    """

    __tablename__ = "tickets"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(
        TicketStatus, nullable=False, default="OPEN", server_default="OPEN"
    )

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    department_id: Mapped[int] = mapped_column(
        ForeignKey("departments.id", ondelete="RESTRICT"), nullable=False
    )

    owner: Mapped[User] = relationship("User", lazy="joined")
    department: Mapped[Department] = relationship(
        "Department", back_populates="tickets", lazy="joined"
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="ticket",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Comment.id",
    )
    assignments: Mapped[list[TicketAssignment]] = relationship(
        "TicketAssignment",
        back_populates="ticket",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TicketAssignment.id",
    )

    __table_args__ = (
        Index("ix_tickets_user_id", "user_id"),
        Index("ix_tickets_department_id", "department_id"),
    )
