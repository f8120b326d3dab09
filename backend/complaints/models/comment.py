"""Comment model (message posted on a ticket thread)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from complaints.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .ticket import Ticket
    from .user import User


class Comment(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """Comment authored by ``user_id``; only the author or an admin may edit it."""

    __tablename__ = "comments"

    ticket_id: Mapped[int] = mapped_column(
        ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)

    ticket: Mapped[Ticket] = relationship("Ticket", back_populates="comments")
    author: Mapped[User] = relationship("User", lazy="joined")

    __table_args__ = (
        Index("ix_comments_ticket_id", "ticket_id"),
        Index("ix_comments_user_id", "user_id"),
    )
