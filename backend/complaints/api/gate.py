"""Authentication gate: turns a bearer token into a request principal.

Runs as a ``before_request`` hook on every request. It never rejects a
request itself; a missing or invalid token just leaves ``g.principal`` as
``None`` and the policy hook decides what that means for the route.
"""

from __future__ import annotations

import logging

from flask import Flask, current_app, g, request

from complaints.infra.jwt.flask_jwt_token_provider import JWTTokenVerifier
from complaints.services._shared.ports.token_provider import TokenVerifier
from complaints.services.auth.dto import Principal

log = logging.getLogger(__name__)

VERIFIER_KEY = "token_verifier"
BEARER_PREFIX = "Bearer "


def extract_bearer_token(header: str | None) -> str | None:
    """Return the token part of ``Authorization: Bearer <token>``.

    ``None`` when the header is absent or uses another scheme; an empty
    string when the scheme is present without a token.
    """
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    return header[len(BEARER_PREFIX) :].strip()


def get_verifier() -> TokenVerifier:
    return current_app.extensions[VERIFIER_KEY]


def authenticate_request() -> None:
    # The test client may keep one app context across requests
    g.principal = None

    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        return

    claims = get_verifier().parse_claims(token)
    if claims is None:
        return

    g.principal = Principal.from_claims(claims)
    log.debug("Authenticated request as %s", claims.subject)


def init_app(app: Flask, verifier: TokenVerifier | None = None) -> None:
    """Install the verifier and register the gate ahead of the policy hook."""
    app.extensions[VERIFIER_KEY] = verifier or JWTTokenVerifier()
    app.before_request(authenticate_request)


__all__ = ["authenticate_request", "extract_bearer_token", "get_verifier", "init_app"]
