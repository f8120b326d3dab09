"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.orm import Session

from complaints.core.extensions import db
from complaints.repositories import (
    CommentRepository,
    DepartmentRepository,
    RefreshTokenRepository,
    RoleRepository,
    TicketAssignmentRepository,
    TicketRepository,
    UserRepository,
)
from complaints.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.roles = RoleRepository(session=self.session)
        self.departments = DepartmentRepository(session=self.session)
        self.tickets = TicketRepository(session=self.session)
        self.comments = CommentRepository(session=self.session)
        self.assignments = TicketAssignmentRepository(session=self.session)
        self.refresh_tokens = RefreshTokenRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-write UoW on the Flask-scoped session.

    Commits when the block exits cleanly; rolls back otherwise.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session begins lazily on first use.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only UoW on the Flask-scoped session.

    Any flush carrying new/dirty/deleted objects is blocked while the scope
    is open, ``commit()`` is refused, and the transaction is always rolled
    back on exit.
    """

    def __init__(self) -> None:
        # the concrete Session, so the flush guard is scoped to this instance
        super().__init__(session=db.session())
        self._guard_installed = False

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        event.listen(self.session, "before_flush", self._block_flush)
        self._guard_installed = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.session.rollback()
        finally:
            if self._guard_installed:
                event.remove(self.session, "before_flush", self._block_flush)
                self._guard_installed = False

    @staticmethod
    def _block_flush(session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

    def commit(self) -> None:
        """:raises RuntimeError: always, to prevent accidental writes."""
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()
