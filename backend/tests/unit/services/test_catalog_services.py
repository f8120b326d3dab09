"""Role, department and ticket administration rules."""

from __future__ import annotations

import pytest

from complaints.services._shared.base import ServiceContext
from complaints.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
)
from complaints.services.comments.service import CommentService
from complaints.services.departments.service import DepartmentService
from complaints.services.roles.service import RoleService
from complaints.services.tickets.dto import TicketCreateIn, TicketUpdateIn
from complaints.services.tickets.service import TicketService
from tests.factories.department import DepartmentFactory
from tests.factories.ticket import CommentFactory, TicketFactory


@pytest.mark.parametrize("name", ["SUPPORT", "ROLE_", "  "])
def test_role_names_need_prefix(app, name):
    with pytest.raises(ServiceError):
        RoleService().create_role(name)


def test_role_names_are_unique(app, user_role):
    with pytest.raises(ServiceError):
        RoleService().create_role("ROLE_USER")


def test_held_role_cannot_be_deleted(app, alice, user_role):
    with pytest.raises(ServiceError):
        RoleService().delete_role(user_role.id)


def test_unused_role_can_be_renamed_and_deleted(app):
    service = RoleService()
    role = service.create_role("ROLE_SUPPORT")

    assert service.update_role(role.id, "ROLE_HELPDESK").name == "ROLE_HELPDESK"
    service.delete_role(role.id)
    with pytest.raises(NotFoundError):
        service.get_role(role.id)


def test_department_names_are_unique(app):
    DepartmentFactory(name="Billing")

    with pytest.raises(ConflictError):
        DepartmentService().create_department("Billing")


def test_referenced_department_cannot_be_deleted(app):
    ticket = TicketFactory()

    with pytest.raises(ServiceError):
        DepartmentService().delete_department(ticket.department_id)


def test_ticket_is_owned_by_the_caller(app, alice):
    dept = DepartmentFactory()
    ctx = ServiceContext(actor_id=alice.id, actor_username="alice", actor_roles=("ROLE_USER",))

    out = TicketService(ctx=ctx).create_ticket(TicketCreateIn(title=" Broken tap ", department_id=dept.id))

    assert out.user_id == alice.id
    assert out.title == "Broken tap"
    assert out.status == "OPEN"


def test_anonymous_cannot_file_ticket(app):
    dept = DepartmentFactory()

    with pytest.raises(AuthenticationError):
        TicketService().create_ticket(TicketCreateIn(title="x", department_id=dept.id))


def test_status_changes_are_validated(app):
    ticket = TicketFactory()
    service = TicketService()

    with pytest.raises(ServiceError):
        service.change_status(ticket.id, "REOPENED")
    assert service.change_status(ticket.id, "RESOLVED").status == "RESOLVED"
    assert [t.id for t in service.list_tickets(status="RESOLVED")] == [ticket.id]
    assert service.list_tickets(status="OPEN") == []


def test_deleted_account_cannot_file_ticket(app, alice):
    dept = DepartmentFactory()
    ctx = ServiceContext(actor_id=alice.id + 1000, actor_username="ghost", actor_roles=("ROLE_USER",))

    with pytest.raises(AuthenticationError):
        TicketService(ctx=ctx).create_ticket(TicketCreateIn(title="x", department_id=dept.id))
    assert TicketService().list_tickets() == []


def test_admin_edit_keeps_unset_fields(app, alice):
    ticket = TicketFactory(title="Old", description="keep me")
    billing = DepartmentFactory(name="Billing")

    out = TicketService().update_ticket(
        ticket.id, TicketUpdateIn(title=" New ", user_id=alice.id, department_id=billing.id)
    )

    assert (out.title, out.description, out.status) == ("New", "keep me", "OPEN")
    assert (out.username, out.department_name) == ("alice", "Billing")


def test_full_edit_rejects_mismatched_body_id(app):
    ticket = TicketFactory()

    with pytest.raises(ServiceError, match="does not match"):
        TicketService().update_ticket(ticket.id, TicketUpdateIn(title="x"), body_id=ticket.id + 1)


@pytest.mark.parametrize(
    "dto",
    [TicketUpdateIn(user_id=424242), TicketUpdateIn(department_id=424242)],
)
def test_edit_needs_existing_owner_and_department(app, dto):
    ticket = TicketFactory()

    with pytest.raises(NotFoundError):
        TicketService().update_ticket(ticket.id, dto)


def test_deleting_ticket_removes_its_comments(app):
    comment = CommentFactory()
    comment_id, ticket_id = comment.id, comment.ticket_id
    service = TicketService()

    service.delete_ticket(ticket_id)

    with pytest.raises(NotFoundError):
        service.get_ticket(ticket_id)
    with pytest.raises(NotFoundError):
        service.delete_ticket(ticket_id)
    with pytest.raises(NotFoundError):
        CommentService().get_comment(comment_id)
