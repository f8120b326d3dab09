"""Factory Boy definition for :class:`complaints.models.department.Department`."""

from __future__ import annotations

import factory

from complaints.models.department import Department
from tests.factories import BaseFactory


class DepartmentFactory(BaseFactory):
    class Meta:
        model = Department

    name = factory.Sequence(lambda n: f"Department {n}")
