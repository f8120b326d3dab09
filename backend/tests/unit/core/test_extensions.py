"""SQLite connections enforce foreign keys."""

from __future__ import annotations

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from complaints.models.comment import Comment


def test_foreign_key_pragma_is_on(session):
    assert session.execute(text("PRAGMA foreign_keys")).scalar() == 1


def test_orphan_comment_is_rejected(session, alice):
    session.add(Comment(ticket_id=424242, user_id=alice.id, text="orphan"))

    with pytest.raises(IntegrityError):
        session.flush()
    session.rollback()
