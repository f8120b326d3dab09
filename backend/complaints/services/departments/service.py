"""
DepartmentService
=================

Administration of departments. Names are unique; a department cannot be
deleted while users or tickets still reference it.
"""

from __future__ import annotations

import logging

from complaints.models.department import Department
from complaints.services._shared.base import BaseService
from complaints.services._shared.errors import ConflictError, NotFoundError, ServiceError
from complaints.services.departments.dto import DepartmentOut

log = logging.getLogger(__name__)


def _to_out(department: Department) -> DepartmentOut:
    return DepartmentOut(id=department.id, name=department.name)


class DepartmentService(BaseService):
    """Application service for the `Department` aggregate."""

    def list_departments(self) -> list[DepartmentOut]:
        with self.ro_uow() as uow:
            return [_to_out(d) for d in uow.departments.list(sort=["name"])]

    def get_department(self, department_id: int) -> DepartmentOut:
        with self.ro_uow() as uow:
            department = uow.departments.get(department_id)
            if department is None:
                raise NotFoundError("Department", department_id)
            return _to_out(department)

    def create_department(self, name: str) -> DepartmentOut:
        with self.rw_uow() as uow:
            if uow.departments.get_by_name(name) is not None:
                raise ConflictError("Department", f"name '{name.strip()}' already in use")
            out = _to_out(uow.departments.add(Department(name=name)))
        log.info("Created department id=%s", out.id)
        return out

    def update_department(self, department_id: int, name: str) -> DepartmentOut:
        with self.rw_uow() as uow:
            department = uow.departments.get_for_update(department_id)
            if department is None:
                raise NotFoundError("Department", department_id)
            if department.name != name.strip():
                if uow.departments.get_by_name(name) is not None:
                    raise ConflictError("Department", f"name '{name.strip()}' already in use")
                uow.departments.update(department, name=name)
            out = _to_out(department)
        return out

    def delete_department(self, department_id: int) -> None:
        """
        :raises ServiceError: While users or tickets reference the department.
        """
        with self.rw_uow() as uow:
            department = uow.departments.get_for_update(department_id)
            if department is None:
                raise NotFoundError("Department", department_id)
            if uow.departments.count_references(department_id):
                raise ServiceError("Cannot delete a department that still has users or tickets")
            uow.departments.delete(department)
        log.info("Deleted department id=%s", department_id)
