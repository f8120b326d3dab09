"""Role model: the single authority carried by each user."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from complaints.core.extensions import db

from .base import PKMixin, ReprMixin

if TYPE_CHECKING:
    from .user import User

ROLE_PREFIX = "ROLE_"


class Role(PKMixin, ReprMixin, db.Model):
    """
    Named authority such as ``ROLE_ADMIN`` or ``ROLE_USER``.

    The name is emitted verbatim in the ``roles`` claim of access tokens.
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(String(50), nullable=False)

    users: Mapped[list[User]] = relationship("User", back_populates="role", passive_deletes="all")

    __table_args__ = (UniqueConstraint("name", name="uq_roles_name"),)

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Role name is required.")
        return value.strip()
