"""
CommentService
==============

Comment threads on tickets. Any authenticated user may read and post;
editing and deleting are limited to the author or an administrator, checked
here against the stored row.
"""

from __future__ import annotations

import logging

from complaints.models.comment import Comment
from complaints.services._shared.base import BaseService
from complaints.services._shared.errors import NotFoundError
from complaints.services.comments.dto import CommentOut
from complaints.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


def _to_out(comment: Comment) -> CommentOut:
    return CommentOut(
        id=comment.id,
        ticket_id=comment.ticket_id,
        user_id=comment.user_id,
        username=comment.author.username,
        text=comment.text,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


class CommentService(BaseService):
    """Application service for `Comment` rows."""

    def list_for_ticket(self, ticket_id: int) -> list[CommentOut]:
        with self.ro_uow() as uow:
            if uow.tickets.get(ticket_id) is None:
                raise NotFoundError("Ticket", ticket_id)
            return [_to_out(c) for c in uow.comments.list_for_ticket(ticket_id)]

    def get_comment(self, comment_id: int) -> CommentOut:
        with self.ro_uow() as uow:
            comment = uow.comments.get(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            return _to_out(comment)

    def add_comment(self, ticket_id: int, text: str) -> CommentOut:
        with self.rw_uow() as uow:
            author_id = self.require_existing_actor(uow)
            if uow.tickets.get(ticket_id) is None:
                raise NotFoundError("Ticket", ticket_id)
            comment = uow.comments.add(Comment(ticket_id=ticket_id, user_id=author_id, text=text))
            out = _to_out(comment)
        log.info("Comment id=%s added to ticket id=%s", out.id, ticket_id)
        return out

    def update_comment(self, comment_id: int, text: str) -> CommentOut:
        """
        :raises AuthorizationError: If the caller is neither author nor admin.
        """
        with self.rw_uow() as uow:
            comment = self._load_owned(uow, comment_id)
            uow.comments.update(comment, text=text)
            out = _to_out(comment)
        return out

    def delete_comment(self, comment_id: int) -> None:
        """
        :raises AuthorizationError: If the caller is neither author nor admin.
        """
        with self.rw_uow() as uow:
            comment = self._load_owned(uow, comment_id)
            uow.comments.delete(comment)
        log.info("Comment id=%s deleted by user_id=%s", comment_id, self.ctx.actor_id)

    def _load_owned(self, uow: SQLAlchemyUnitOfWork, comment_id: int) -> Comment:
        self.require_actor()
        comment = uow.comments.get_for_update(comment_id)
        if comment is None:
            raise NotFoundError("Comment", comment_id)
        self.ensure_owner_or_admin(comment.user_id)
        return comment
