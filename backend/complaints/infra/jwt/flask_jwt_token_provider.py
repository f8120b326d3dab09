# complaints/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

import jwt as pyjwt
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTDecodeError

from complaints.services._shared.ports import TokenIssuer, TokenVerifier
from complaints.services.auth.dto import AccessTokenClaims, AuthenticatedUser

log = logging.getLogger(__name__)

USER_ID_CLAIM = "userId"
ROLES_CLAIM = "roles"


@dataclass(slots=True)
class JWTTokenIssuer(TokenIssuer):
    """
    Mint access tokens through Flask-JWT-Extended.

    Algorithm and key come from the app config populated at startup by
    :mod:`complaints.core.keys`. Requires an active app context.

    :param expires_delta: Override for the configured lifetime (tests only).
    """

    expires_delta: timedelta | None = None

    def issue(self, user: AuthenticatedUser) -> str:
        token = create_access_token(
            identity=user.username,
            additional_claims={USER_ID_CLAIM: user.id, ROLES_CLAIM: user.authorities},
            expires_delta=self.expires_delta,
        )
        return cast(str, token)


@dataclass(slots=True)
class JWTTokenVerifier(TokenVerifier):
    """
    Verify access tokens against the configured key material.

    Every failure is logged and reported as ``None`` / ``False``; nothing
    raises to the caller.
    """

    def parse_claims(self, token: str | None) -> AccessTokenClaims | None:
        if token is None or not token.strip():
            log.warning("JWT claims string is empty")
            return None
        try:
            decoded = cast(dict[str, Any], decode_token(token.strip()))
        except pyjwt.ExpiredSignatureError:
            log.info("JWT token is expired")
            return None
        except pyjwt.InvalidSignatureError:
            log.warning("Invalid JWT signature")
            return None
        except pyjwt.InvalidAlgorithmError:
            log.warning("JWT token is unsupported: algorithm not allowed")
            return None
        except (pyjwt.DecodeError, JWTDecodeError) as exc:
            log.warning("Invalid JWT token: %s", exc)
            return None
        except pyjwt.InvalidTokenError as exc:
            log.warning("JWT token rejected: %s", exc)
            return None
        return self._to_claims(decoded)

    def validate_token(self, token: str | None) -> bool:
        return self.parse_claims(token) is not None

    def get_username_from_token(self, token: str | None) -> str | None:
        claims = self.parse_claims(token)
        return claims.subject if claims else None

    def get_user_id_from_token(self, token: str | None) -> int | None:
        claims = self.parse_claims(token)
        return claims.user_id if claims else None

    # ------------------------------------------------------------------ #

    @staticmethod
    def _to_claims(decoded: dict[str, Any]) -> AccessTokenClaims | None:
        """Check the claim set shape; anything unexpected is a rejection."""
        if decoded.get("type", "access") != "access":
            log.warning("JWT token is unsupported: type=%s", decoded.get("type"))
            return None

        # PyJWT only checks exp when present; a token without it never expires
        issued_at = _from_epoch(decoded.get("iat"))
        expires_at = _from_epoch(decoded.get("exp"))
        if expires_at is None:
            log.warning("Invalid JWT claims: missing or non-numeric exp")
            return None
        if issued_at is None:
            log.warning("Invalid JWT claims: missing or non-numeric iat")
            return None

        subject = decoded.get("sub")
        user_id = decoded.get(USER_ID_CLAIM)
        roles = decoded.get(ROLES_CLAIM)
        if not isinstance(subject, str) or not subject:
            log.warning("Invalid JWT claims: missing subject")
            return None
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            log.warning("Invalid JWT claims: %s must be an integer", USER_ID_CLAIM)
            return None
        if not isinstance(roles, list) or not all(isinstance(r, str) for r in roles):
            log.warning("Invalid JWT claims: %s must be a list of strings", ROLES_CLAIM)
            return None

        return AccessTokenClaims(
            subject=subject,
            user_id=user_id,
            roles=tuple(roles),
            issued_at=issued_at,
            expires_at=expires_at,
        )


def _from_epoch(value: Any) -> datetime | None:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=UTC)
    return None
