"""Shared API helpers: responses, timing, and request-scoped service wiring."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from complaints.core.logger import ensure_request_id
from complaints.infra.jwt.flask_jwt_token_provider import JWTTokenIssuer
from complaints.services._shared.base import ServiceContext
from complaints.services.auth.dto import Principal
from complaints.services.auth.refresh_tokens import RefreshTokenService
from complaints.services.auth.service import AuthService

F = TypeVar("F", bound=Callable[..., Any])


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# --------------------------------------------------------------------------- #
# Request principal / service context
# --------------------------------------------------------------------------- #


def current_principal() -> Principal | None:
    """Principal set by the authentication gate for this request, if any."""
    return getattr(g, "principal", None)


def service_context() -> ServiceContext:
    """Build the explicit context handed to services from the request principal."""
    principal = current_principal()
    if principal is None:
        return ServiceContext(request_id=ensure_request_id())
    return ServiceContext(
        actor_id=principal.user_id,
        actor_username=principal.username,
        actor_roles=principal.roles,
        request_id=ensure_request_id(),
    )


def refresh_token_service(ctx: ServiceContext | None = None) -> RefreshTokenService:
    # Set from JWT_REFRESH_EXPIRATION_MS by complaints.core.keys at startup
    return RefreshTokenService(refresh_ttl=current_app.config["JWT_REFRESH_TOKEN_EXPIRES"], ctx=ctx)


def auth_service() -> AuthService:
    ctx = service_context()
    return AuthService(
        token_issuer=JWTTokenIssuer(),
        refresh_tokens=refresh_token_service(ctx),
        ctx=ctx,
    )
