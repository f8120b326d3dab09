"""Read-only and read-write unit of work behaviour."""

from __future__ import annotations

import pytest

from complaints.models.department import Department
from complaints.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


def test_read_write_uow_commits_on_clean_exit(app):
    with SQLAlchemyUnitOfWork() as uow:
        uow.departments.add(Department(name="Facilities"))

    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        assert uow.departments.get_by_name("Facilities") is not None


def test_read_write_uow_rolls_back_on_error(app):
    with pytest.raises(RuntimeError):
        with SQLAlchemyUnitOfWork() as uow:
            uow.departments.add(Department(name="Ghost"))
            raise RuntimeError("boom")

    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        assert uow.departments.get_by_name("Ghost") is None


def test_read_only_uow_blocks_flush_and_commit(app):
    with pytest.raises(RuntimeError, match="flush blocked"):
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            uow.session.add(Department(name="Sneaky"))
            uow.session.flush()

    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        with pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()


def test_read_only_guard_is_removed_after_exit(app):
    with SQLAlchemyReadOnlyUnitOfWork():
        pass

    with SQLAlchemyUnitOfWork() as uow:
        uow.departments.add(Department(name="Allowed"))
