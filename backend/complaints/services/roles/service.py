"""
RoleService
===========

Administration of role authorities. Names must start with ``ROLE_`` and be
unique; a role cannot be deleted while any user holds it.
"""

from __future__ import annotations

import logging

from complaints.models.role import ROLE_PREFIX, Role
from complaints.services._shared.base import BaseService
from complaints.services._shared.errors import NotFoundError, ServiceError
from complaints.services.roles.dto import RoleOut
from complaints.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


def _to_out(role: Role) -> RoleOut:
    return RoleOut(id=role.id, name=role.name)


class RoleService(BaseService):
    """Application service for the `Role` aggregate."""

    def list_roles(self) -> list[RoleOut]:
        with self.ro_uow() as uow:
            return [_to_out(r) for r in uow.roles.list(sort=["name"])]

    def get_role(self, role_id: int) -> RoleOut:
        with self.ro_uow() as uow:
            role = uow.roles.get(role_id)
            if role is None:
                raise NotFoundError("Role", role_id)
            return _to_out(role)

    def create_role(self, name: str) -> RoleOut:
        """
        :raises ServiceError: On a bad prefix or a duplicate name.
        """
        name = self._validate_name(name)
        with self.rw_uow() as uow:
            self._ensure_unique(uow, name)
            out = _to_out(uow.roles.add(Role(name=name)))
        log.info("Created role %s", out.name)
        return out

    def update_role(self, role_id: int, name: str) -> RoleOut:
        name = self._validate_name(name)
        with self.rw_uow() as uow:
            role = uow.roles.get_for_update(role_id)
            if role is None:
                raise NotFoundError("Role", role_id)
            if role.name != name:
                self._ensure_unique(uow, name)
                uow.roles.update(role, name=name)
            out = _to_out(role)
        return out

    def delete_role(self, role_id: int) -> None:
        """
        :raises ServiceError: While users still hold the role.
        """
        with self.rw_uow() as uow:
            role = uow.roles.get_for_update(role_id)
            if role is None:
                raise NotFoundError("Role", role_id)
            holders = uow.roles.count_holders(role_id)
            if holders:
                raise ServiceError(f"Cannot delete role {role.name}: assigned to {holders} user(s)")
            uow.roles.delete(role)
        log.info("Deleted role id=%s", role_id)

    # ------------------------------------------------------------------ #

    @staticmethod
    def _validate_name(name: str) -> str:
        name = (name or "").strip()
        if not name.startswith(ROLE_PREFIX) or len(name) == len(ROLE_PREFIX):
            raise ServiceError(f"Role name must start with '{ROLE_PREFIX}'")
        return name

    @staticmethod
    def _ensure_unique(uow: SQLAlchemyUnitOfWork, name: str) -> None:
        if uow.roles.get_by_name(name) is not None:
            raise ServiceError(f"Role {name} already exists")
