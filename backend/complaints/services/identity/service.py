"""
IdentityService
===============

Aggregate service responsible for the `User` aggregate:
- Self-registration (always with the default role)
- Profile reads and updates
- Password, username and role lifecycle
- Deletion guarded against orphaning tickets/comments
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from complaints.models.role import Role
from complaints.models.user import User
from complaints.services._shared.base import BaseService, ServiceContext
from complaints.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    violates,
)
from complaints.services._shared.policies.common import USER_ROLE
from complaints.services.identity.dto import (
    UserOut,
    UserPasswordChangeIn,
    UserProfileOut,
    UserRegisterIn,
    UserUpdateIn,
)
from complaints.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)

USERNAME_TAKEN = "Username is already taken!"
EMAIL_TAKEN = "Email is already taken!"
INCORRECT_OLD_PASSWORD = "Incorrect old password"


def _to_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role.name,
        department_id=user.department_id,
        department_name=user.department.name if user.department else None,
        created_at=user.created_at,
    )


class IdentityService(BaseService):
    """
    Application service for the `User` aggregate.

    :param default_role: Role assigned on self-registration.
    """

    def __init__(self, *, ctx: ServiceContext | None = None, default_role: str = USER_ROLE) -> None:
        super().__init__(ctx=ctx)
        self.default_role = default_role

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def register_user(self, dto: UserRegisterIn) -> UserOut:
        """
        Register a new account with the default role.

        The caller cannot choose a role; the default role row is created on
        first use.

        :raises ServiceError: When the username or email is already taken.
        :raises NotFoundError: When ``department_id`` does not exist.
        """
        with self.rw_uow() as uow:
            if uow.users.exists_by_username(dto.username):
                raise ServiceError(USERNAME_TAKEN)
            if uow.users.exists_by_email(dto.email):
                raise ServiceError(EMAIL_TAKEN)
            if dto.department_id is not None and uow.departments.get(dto.department_id) is None:
                raise NotFoundError("Department", dto.department_id)

            role = uow.roles.get_by_name(self.default_role)
            if role is None:
                role = uow.roles.add(Role(name=self.default_role))

            try:
                user = uow.users.add(
                    User(
                        username=dto.username,
                        email=dto.email,
                        password=dto.password,
                        first_name=dto.first_name,
                        last_name=dto.last_name,
                        role_id=role.id,
                        department_id=dto.department_id,
                    )
                )
            except IntegrityError as exc:
                # Lost a race with a concurrent registration
                if violates(exc, "users.username") or violates(exc, "uq_users_username"):
                    raise ServiceError(USERNAME_TAKEN) from exc
                if violates(exc, "users.email") or violates(exc, "uq_users_email"):
                    raise ServiceError(EMAIL_TAKEN) from exc
                raise
            out = _to_out(user)

        log.info("Registered user id=%s username=%s", out.id, out.username)
        return out

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def list_users(self) -> list[UserOut]:
        with self.ro_uow() as uow:
            return [_to_out(u) for u in uow.users.list(sort=["id"])]

    def get_user(self, user_id: int) -> UserOut:
        """
        :raises NotFoundError: If the user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return _to_out(user)

    def get_profile(self, user_id: int) -> UserProfileOut:
        self.ensure_owner_or_admin(user_id)
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserProfileOut(
                username=user.username,
                email=user.email,
                first_name=user.first_name,
                last_name=user.last_name,
                role=user.role.name,
                department_name=user.department.name if user.department else None,
            )

    # --------------------------------------------------------------------- #
    # Update
    # --------------------------------------------------------------------- #

    def update_user(self, user_id: int, dto: UserUpdateIn) -> UserOut:
        """
        Update profile fields; username, role and department need ``ROLE_ADMIN``.

        :raises AuthorizationError: When a non-admin touches admin-only fields
            or someone else's account.
        :raises ConflictError: When the new email is taken.
        :raises ServiceError: When the new username is taken.
        """
        self.ensure_owner_or_admin(user_id)
        if dto.touches_admin_fields and not self.ctx.is_admin:
            raise AuthorizationError()

        with self.rw_uow() as uow:
            user = self._lock_user(uow, user_id)

            if dto.email is not None and dto.email.strip().lower() != user.email:
                if uow.users.exists_by_email(dto.email):
                    raise ConflictError("User", EMAIL_TAKEN)
            department = None
            if dto.department_id is not None:
                department = uow.departments.get(dto.department_id)
                if department is None:
                    raise NotFoundError("Department", dto.department_id)

            updates = {
                k: v
                for k, v in {
                    "email": dto.email,
                    "first_name": dto.first_name,
                    "last_name": dto.last_name,
                }.items()
                if v is not None
            }
            uow.users.update(user, **updates)
            if department is not None:
                user.department = department

            if dto.role is not None:
                self._assign_role(uow, user, dto.role)
            if dto.username is not None and dto.username.strip() != user.username:
                self._rename(uow, user, dto.username)
            out = _to_out(user)
        return out

    def change_password(self, dto: UserPasswordChangeIn) -> None:
        """
        Replace the password. Non-admins must present the current password.

        :raises ServiceError: When the old password does not match.
        """
        self.ensure_owner_or_admin(dto.user_id)
        with self.rw_uow() as uow:
            user = self._lock_user(uow, dto.user_id)
            if not self.ctx.is_admin and not user.verify_password(dto.old_password or ""):
                raise ServiceError(INCORRECT_OLD_PASSWORD)
            user.password = dto.new_password
            uow.users.flush()
        log.info("Password changed for user_id=%s by actor_id=%s", dto.user_id, self.ctx.actor_id)

    def change_username(self, user_id: int, new_username: str) -> UserOut:
        """
        Rename a user exactly once and revoke their refresh token.

        Access tokens already issued keep the old ``sub`` until they expire.

        :raises ServiceError: When the new username is taken.
        """
        with self.rw_uow() as uow:
            user = self._lock_user(uow, user_id)
            if new_username.strip() != user.username:
                self._rename(uow, user, new_username)
            out = _to_out(user)
        return out

    def change_role(self, user_id: int, role_name: str) -> UserOut:
        """
        :raises NotFoundError: When the user or the role does not exist.
        """
        with self.rw_uow() as uow:
            user = self._lock_user(uow, user_id)
            self._assign_role(uow, user, role_name)
            out = _to_out(user)
        log.info("Role of user_id=%s set to %s", user_id, out.role)
        return out

    # --------------------------------------------------------------------- #
    # Deletion
    # --------------------------------------------------------------------- #

    def delete_user(self, user_id: int) -> None:
        """
        :raises ConflictError: While the user still owns tickets or comments.
        """
        with self.rw_uow() as uow:
            user = self._lock_user(uow, user_id)
            if uow.users.count_owned_content(user_id):
                raise ConflictError("User", "user still owns tickets or comments")
            uow.refresh_tokens.delete_by_user_id(user_id)
            uow.users.delete(user)
        log.info("Deleted user_id=%s", user_id)

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    @staticmethod
    def _lock_user(uow: SQLAlchemyUnitOfWork, user_id: int) -> User:
        user = uow.users.get_for_update(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    @staticmethod
    def _assign_role(uow: SQLAlchemyUnitOfWork, user: User, role_name: str) -> None:
        role = uow.roles.get_by_name(role_name)
        if role is None:
            raise NotFoundError("Role", role_name)
        user.role = role
        uow.users.flush()

    @staticmethod
    def _rename(uow: SQLAlchemyUnitOfWork, user: User, new_username: str) -> None:
        if uow.users.exists_by_username(new_username):
            raise ServiceError(USERNAME_TAKEN)
        old = user.username
        user.username = new_username
        uow.users.flush()
        # next access token only after a fresh login under the new name
        uow.refresh_tokens.delete_by_user_id(user.id)
        log.info("User id=%s renamed %s -> %s", user.id, old, user.username)
