# complaints/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from complaints.core import errors as api_errors
from complaints.services._shared.errors import (
    AUTHENTICATION_REQUIRED,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    TokenRefreshError,
)
from complaints.services._shared.policies.common import is_admin, is_owner
from complaints.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(frozen=True, slots=True)
class ServiceContext:
    """
    Request-scoped data threaded explicitly into services.

    :param actor_id: Authenticated user identifier (``None`` when anonymous).
    :param actor_username: Authenticated username.
    :param actor_roles: Role authorities taken from the access token.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    actor_username: str | None = None
    actor_roles: tuple[str, ...] = ()
    request_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.actor_id is not None

    @property
    def is_admin(self) -> bool:
        return is_admin(self.actor_roles)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Translate domain errors into API errors.
    * Host the imperative ownership check shared by services.

    Notes
    -----
    - Services never touch the global session directly; always use a Unit of Work.
    - Services never import Flask request state; callers pass a ServiceContext.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork()

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(UTC)

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :returns: Translated exception ready to be rendered.
        """
        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))

        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc))

        if isinstance(exc, AuthenticationError):
            return api_errors.Unauthorized(str(exc))

        if isinstance(exc, TokenRefreshError):
            return api_errors.APIError(
                message=str(exc),
                status_code=403,
                code="token_refresh_failed",
            )

        if isinstance(exc, AuthorizationError):
            return api_errors.Forbidden(str(exc))

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(
                message=str(exc),
                status_code=400,
                code="bad_request",
            )

        return exc

    # --------------------------- AuthZ --------------------------------

    def require_actor(self) -> int:
        """Return the caller's id or raise when the context is anonymous."""
        if not self.ctx.is_authenticated:
            raise AuthenticationError(AUTHENTICATION_REQUIRED)
        return self.ctx.actor_id

    def require_existing_actor(self, uow: SQLAlchemyUnitOfWork) -> int:
        """
        Like :meth:`require_actor`, but also require the account to still exist.

        Access tokens outlive account deletion, so writes that store the
        caller as owner or author check the row first.

        :raises AuthenticationError: When anonymous or the user is gone.
        """
        actor_id = self.require_actor()
        if uow.users.get(actor_id) is None:
            raise AuthenticationError(AUTHENTICATION_REQUIRED)
        return actor_id

    def ensure_owner_or_admin(self, owner_id: int, *, msg: str | None = None) -> None:
        """
        Allow the resource owner or any ``ROLE_ADMIN`` caller; deny everyone else.

        :param owner_id: User id that owns the resource.
        :param msg: Optional custom error message.
        :raises AuthorizationError: If the caller is neither owner nor admin.
        """
        if self.ctx.is_admin:
            return
        if not is_owner(actor_id=self.ctx.actor_id, owner_id=owner_id):
            raise AuthorizationError(msg) if msg else AuthorizationError()
