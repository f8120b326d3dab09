"""Authentication endpoints: login, refresh, register, logout, whoami."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from complaints.api.deps import auth_service, json_response, service_context, timing
from complaints.core.extensions import limiter
from complaints.schemas import (
    LoginSchema,
    LogoutResponseSchema,
    RefreshSchema,
    RegisterSchema,
    TokenResponseSchema,
    UserSchema,
    WhoAmISchema,
)
from complaints.services.auth.dto import LoginIn, RefreshIn
from complaints.services.identity.dto import UserRegisterIn
from complaints.services.identity.service import IdentityService

bp = Blueprint("auth", __name__)

login_schema = LoginSchema()
refresh_schema = RefreshSchema()
register_schema = RegisterSchema()
token_schema = TokenResponseSchema()
user_schema = UserSchema()
whoami_schema = WhoAmISchema()
logout_schema = LogoutResponseSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """
    Exchange credentials for an access token and a refresh token.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [username, password]
          properties:
            username: { type: string }
            password: { type: string }
    responses:
      200: { description: Token pair }
      401: { description: Invalid username or password }
      429: { description: Too many attempts }
    """
    data = login_schema.load(request.get_json(silent=True) or {})
    pair = auth_service().login(LoginIn(**data))
    return json_response({"data": token_schema.dump(pair)})


@bp.post("/refresh")
@timing
def refresh():
    """
    Issue a new access token for a stored, unexpired refresh token.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [refreshToken]
          properties:
            refreshToken: { type: string }
    responses:
      200: { description: Token pair (refresh token unchanged) }
      403: { description: Refresh token not found or expired }
    """
    data = refresh_schema.load(request.get_json(silent=True) or {})
    pair = auth_service().refresh(RefreshIn(**data))
    return json_response({"data": token_schema.dump(pair)})


@bp.post("/register")
@timing
def register():
    """
    Create an account with the default role.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    responses:
      201: { description: Created }
      400: { description: Username or email already taken }
    """
    data = register_schema.load(request.get_json(silent=True) or {})
    service = IdentityService(
        ctx=service_context(),
        default_role=current_app.config.get("DEFAULT_USER_ROLE", "ROLE_USER"),
    )
    user = service.register_user(UserRegisterIn(**data))
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.post("/logout")
@timing
def logout():
    """
    Revoke the caller's refresh token.
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200: { description: Number of revoked tokens }
      401: { description: Unauthorized }
    """
    revoked = auth_service().logout()
    return json_response({"data": logout_schema.dump({"revoked": revoked})})


@bp.get("/whoami")
@timing
def whoami():
    """
    Identity carried by the presented access token.
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200: { description: OK }
      401: { description: Unauthorized }
    """
    principal = auth_service().whoami()
    return json_response({"data": whoami_schema.dump(principal)})
