# complaints/services/auth/service.py
from __future__ import annotations

import logging

from complaints.services._shared.base import BaseService, ServiceContext
from complaints.services._shared.errors import AuthenticationError, TokenRefreshError
from complaints.services._shared.ports.token_provider import TokenIssuer
from complaints.services.auth.dto import (
    AuthenticatedUser,
    LoginIn,
    Principal,
    RefreshIn,
    TokenPairOut,
)
from complaints.services.auth.refresh_tokens import RefreshTokenService

log = logging.getLogger(__name__)

NOT_FOUND_REASON = "Refresh token not found!"


class AuthService(BaseService):
    """
    Authentication lifecycle service (login / refresh / logout).

    Access tokens come from a pluggable :class:`TokenIssuer`; the opaque
    refresh token is owned by :class:`RefreshTokenService`.
    """

    def __init__(
        self,
        *,
        token_issuer: TokenIssuer,
        refresh_tokens: RefreshTokenService,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.tokens = token_issuer
        self.refresh_tokens = refresh_tokens

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> TokenPairOut:
        """
        Verify credentials and issue an access token plus a new refresh token.

        Any previous refresh token of the user stops working.

        :raises AuthenticationError: On unknown username or wrong password
            (same message for both).
        """
        with self.ro_uow() as uow:
            user = uow.users.get_by_username(dto.username)
            if user is None or not user.verify_password(dto.password):
                log.warning("Failed login attempt for username=%s", dto.username)
                raise AuthenticationError()
            identity = AuthenticatedUser(
                id=user.id,
                username=user.username,
                role=user.role.name,
                password_hash=user.password_hash,
            )

        access = self.tokens.issue(identity)
        refresh = self.refresh_tokens.create_refresh_token(identity.id)
        log.info("User %s logged in", identity.username)
        return TokenPairOut(access_token=access, refresh_token=refresh.token)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Exchange a stored, unexpired refresh token for a new access token.

        The refresh token itself is not rotated and is returned unchanged.

        :raises TokenRefreshError: When the token is unknown or expired.
        """
        view = self.refresh_tokens.find_by_token(dto.refresh_token)
        if view is None:
            raise TokenRefreshError(dto.refresh_token, NOT_FOUND_REASON)
        view = self.refresh_tokens.verify_expiration(view)

        with self.ro_uow() as uow:
            user = uow.users.get(view.user_id)
            if user is None:
                raise TokenRefreshError(dto.refresh_token, NOT_FOUND_REASON)
            identity = AuthenticatedUser(
                id=user.id,
                username=user.username,
                role=user.role.name,
                password_hash=user.password_hash,
            )

        access = self.tokens.issue(identity)
        return TokenPairOut(access_token=access, refresh_token=view.token)

    # ------------------------------------------------------------------ #
    # Logout / whoami
    # ------------------------------------------------------------------ #

    def logout(self) -> int:
        """Revoke the caller's refresh token; returns how many were removed."""
        return self.refresh_tokens.delete_by_user_id(self.require_actor())

    def whoami(self) -> Principal:
        user_id = self.require_actor()
        return Principal(
            user_id=user_id,
            username=self.ctx.actor_username or "",
            roles=self.ctx.actor_roles,
        )
