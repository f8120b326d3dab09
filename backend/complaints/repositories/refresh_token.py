"""Refresh token repository (one row per user at most)."""

from __future__ import annotations

from typing import cast

from sqlalchemy import delete, select

from complaints.models.refresh_token import RefreshToken
from complaints.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    model = RefreshToken

    def _filterable_fields(self):
        return {"user_id": RefreshToken.user_id, "token": RefreshToken.token}

    def get_by_token(self, token: str) -> RefreshToken | None:
        stmt = select(RefreshToken).where(RefreshToken.token == token)
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def delete_by_user_id(self, user_id: int) -> int:
        """Delete the user's token (if any) with a single statement.

        :returns: Rows removed (0 or 1).
        """
        result = self.session.execute(
            delete(RefreshToken)
            .where(RefreshToken.user_id == user_id)
            .execution_options(synchronize_session="fetch")
        )
        return int(result.rowcount or 0)
