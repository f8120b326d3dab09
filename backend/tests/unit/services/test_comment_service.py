"""Comment ownership is enforced inside the service."""

from __future__ import annotations

import pytest

from complaints.services._shared.base import ServiceContext
from complaints.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
)
from complaints.services.comments.service import CommentService
from tests.factories.ticket import CommentFactory, TicketFactory
from tests.factories.user import UserFactory


def _ctx(user) -> ServiceContext:
    return ServiceContext(actor_id=user.id, actor_username=user.username, actor_roles=(user.role.name,))


@pytest.fixture()
def comment(alice):
    return CommentFactory(author=alice, text="first!")


def test_author_can_edit_own_comment(app, alice, comment):
    out = CommentService(ctx=_ctx(alice)).update_comment(comment.id, "edited")

    assert out.text == "edited"
    assert out.username == "alice"


def test_other_user_cannot_edit_or_delete(app, comment):
    mallory = UserFactory(username="mallory")
    service = CommentService(ctx=_ctx(mallory))

    with pytest.raises(AuthorizationError):
        service.update_comment(comment.id, "hijacked")
    with pytest.raises(AuthorizationError):
        service.delete_comment(comment.id)


def test_admin_can_delete_any_comment(app, admin, comment):
    service = CommentService(ctx=_ctx(admin))
    service.delete_comment(comment.id)

    with pytest.raises(NotFoundError):
        service.get_comment(comment.id)


def test_anonymous_cannot_comment(app):
    ticket = TicketFactory()

    with pytest.raises(AuthenticationError):
        CommentService().add_comment(ticket.id, "hello")


def test_comments_listed_per_ticket(app, alice):
    ticket = TicketFactory()
    service = CommentService(ctx=_ctx(alice))
    service.add_comment(ticket.id, "one")
    service.add_comment(ticket.id, "two")
    CommentFactory()  # on another ticket

    assert [c.text for c in service.list_for_ticket(ticket.id)] == ["one", "two"]


def test_listing_comments_of_missing_ticket(app, alice):
    with pytest.raises(NotFoundError):
        CommentService(ctx=_ctx(alice)).list_for_ticket(404)


def test_deleted_account_cannot_comment(app, alice):
    ticket = TicketFactory()
    ghost = ServiceContext(actor_id=alice.id + 1000, actor_username="ghost", actor_roles=("ROLE_USER",))

    with pytest.raises(AuthenticationError):
        CommentService(ctx=ghost).add_comment(ticket.id, "boo")
    assert CommentService().list_for_ticket(ticket.id) == []
