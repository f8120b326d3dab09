"""Comment repository."""

from __future__ import annotations

from complaints.models.comment import Comment
from complaints.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    def _sortable_fields(self):
        return {"id": Comment.id, "created_at": Comment.created_at}

    def _filterable_fields(self):
        return {"ticket_id": Comment.ticket_id, "user_id": Comment.user_id}

    def _updatable_fields(self):
        return {"text"}

    def list_for_ticket(self, ticket_id: int) -> list[Comment]:
        return self.list(filters={"ticket_id": ticket_id}, sort=["created_at"])
