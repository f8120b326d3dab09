"""Factory Boy definition for :class:`complaints.models.role.Role`."""

from __future__ import annotations

import factory

from complaints.models.role import Role
from tests.factories import BaseFactory


class RoleFactory(BaseFactory):
    class Meta:
        model = Role
        sqlalchemy_get_or_create = ("name",)

    name = factory.Sequence(lambda n: f"ROLE_TEAM_{n}")
