"""Ports for issuing and verifying access tokens."""

from __future__ import annotations

from typing import Protocol

from complaints.services.auth.dto import AccessTokenClaims, AuthenticatedUser


class TokenIssuer(Protocol):
    """Port for minting signed access tokens."""

    def issue(self, user: AuthenticatedUser) -> str: ...


class TokenVerifier(Protocol):
    """
    Port for checking access tokens.

    Implementations never raise for bad tokens: every failure collapses to
    ``None`` / ``False`` and is logged.
    """

    def parse_claims(self, token: str | None) -> AccessTokenClaims | None: ...

    def validate_token(self, token: str | None) -> bool: ...

    def get_username_from_token(self, token: str | None) -> str | None: ...

    def get_user_id_from_token(self, token: str | None) -> int | None: ...
