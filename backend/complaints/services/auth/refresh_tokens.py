"""
RefreshTokenService
===================

Lifecycle of the opaque refresh token that backs ``POST /auth/refresh``.

Invariants
----------
- A user holds at most one refresh token; creating a new one replaces the old.
- Expiry is checked lazily, when a token is presented.
- An expired token is deleted as soon as it is presented.
"""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import IntegrityError

from complaints.models.refresh_token import RefreshToken
from complaints.services._shared.base import BaseService, ServiceContext
from complaints.services._shared.errors import NotFoundError, TokenRefreshError, violates
from complaints.services.auth.dto import RefreshTokenView

log = logging.getLogger(__name__)

EXPIRED_REASON = "Refresh token was expired. Please make a new signin request"


def _is_user_collision(exc: IntegrityError) -> bool:
    # PostgreSQL names the constraint, SQLite names the column
    return violates(exc, "uq_refresh_tokens_user_id") or violates(exc, "refresh_tokens.user_id")


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; they are stored as UTC."""
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


class RefreshTokenService(BaseService):
    """
    Create, look up, expire and revoke refresh tokens.

    :param refresh_ttl: Lifetime of newly created tokens.
    """

    def __init__(self, *, refresh_ttl: timedelta, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.refresh_ttl = refresh_ttl

    # ------------------------------------------------------------------ #
    # Creation
    # ------------------------------------------------------------------ #

    def create_refresh_token(self, user_id: int) -> RefreshTokenView:
        """
        Issue a fresh token for ``user_id``, replacing any existing one.

        The replace runs in a single read-write unit of work with the user row
        locked. If a concurrent login for the same user still wins the unique
        ``user_id`` constraint, the whole unit is retried once.

        :raises NotFoundError: If the user does not exist.
        """
        try:
            return self._replace_token(user_id)
        except IntegrityError as exc:
            if not _is_user_collision(exc):
                raise
            log.warning("Concurrent refresh token creation for user_id=%s; retrying", user_id)
            return self._replace_token(user_id)

    def _replace_token(self, user_id: int) -> RefreshTokenView:
        with self.rw_uow() as uow:
            if uow.users.get_for_update(user_id) is None:
                raise NotFoundError("User", user_id)
            removed = uow.refresh_tokens.delete_by_user_id(user_id)
            row = uow.refresh_tokens.add(
                RefreshToken(
                    user_id=user_id,
                    token=self.new_token(),
                    expiry_date=self.now_utc() + self.refresh_ttl,
                )
            )
            view = self._to_view(row)
        log.info("Refresh token issued for user_id=%s (replaced=%s)", user_id, removed)
        return view

    @staticmethod
    def new_token() -> str:
        # uuid4 draws from os.urandom
        return str(uuid.uuid4())

    # ------------------------------------------------------------------ #
    # Lookup / expiry
    # ------------------------------------------------------------------ #

    def find_by_token(self, token: str) -> RefreshTokenView | None:
        if not token:
            return None
        with self.ro_uow() as uow:
            row = uow.refresh_tokens.get_by_token(token)
            return self._to_view(row) if row is not None else None

    def verify_expiration(self, view: RefreshTokenView) -> RefreshTokenView:
        """
        Return ``view`` unchanged while it is still valid.

        :raises TokenRefreshError: When expired; the stored token is deleted first.
        """
        if _as_utc(view.expiry_date) < self.now_utc():
            with self.rw_uow() as uow:
                row = uow.refresh_tokens.get_by_token(view.token)
                if row is not None:
                    uow.refresh_tokens.delete(row)
            log.info("Expired refresh token removed for user_id=%s", view.user_id)
            raise TokenRefreshError(view.token, EXPIRED_REASON)
        return view

    # ------------------------------------------------------------------ #
    # Revocation
    # ------------------------------------------------------------------ #

    def delete_by_user_id(self, user_id: int) -> int:
        """
        Remove the user's refresh token.

        :returns: Number of tokens removed (0 or 1).
        :raises NotFoundError: If the user does not exist.
        """
        with self.rw_uow() as uow:
            if uow.users.get(user_id) is None:
                raise NotFoundError("User", user_id)
            removed = uow.refresh_tokens.delete_by_user_id(user_id)
        log.info("Refresh token revoked for user_id=%s (removed=%s)", user_id, removed)
        return removed

    # ------------------------------------------------------------------ #

    @staticmethod
    def _to_view(row: RefreshToken) -> RefreshTokenView:
        return RefreshTokenView(
            token=row.token,
            user_id=row.user_id,
            expiry_date=_as_utc(row.expiry_date),
        )
