"""Persisted refresh token (at most one per user)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from complaints.core.extensions import db

from .base import PKMixin, ReprMixin


class RefreshToken(PKMixin, ReprMixin, db.Model):
    """
    Opaque refresh token bound to a single user.

    The unique constraint on ``user_id`` is the storage-level guarantee that
    a user never holds two active refresh tokens at once.
    """

    __tablename__ = "refresh_tokens"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    token: Mapped[str] = mapped_column(String(64), nullable=False)
    expiry_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", name="uq_refresh_tokens_user_id"),
        UniqueConstraint("token", name="uq_refresh_tokens_token"),
    )
