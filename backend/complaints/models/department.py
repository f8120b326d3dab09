"""Department model: organisational unit tickets are filed against."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from complaints.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .ticket import Ticket
    from .user import User


class Department(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Department with a unique display name."""

    __tablename__ = "departments"

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    users: Mapped[list[User]] = relationship(
        "User", back_populates="department", passive_deletes="all"
    )
    tickets: Mapped[list[Ticket]] = relationship(
        "Ticket", back_populates="department", passive_deletes="all"
    )

    __table_args__ = (UniqueConstraint("name", name="uq_departments_name"),)

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Department name is required.")
        return value.strip()
