"""Factory Boy definitions for tickets, their comments and assignees."""

from __future__ import annotations

import factory

from complaints.models.assignment import TicketAssignment
from complaints.models.comment import Comment
from complaints.models.ticket import Ticket
from tests.factories import BaseFactory
from tests.factories.department import DepartmentFactory
from tests.factories.user import UserFactory


class TicketFactory(BaseFactory):
    class Meta:
        model = Ticket

    title = factory.Faker("sentence", nb_words=4)
    description = factory.Faker("paragraph")
    status = "OPEN"
    owner = factory.SubFactory(UserFactory)
    department = factory.SubFactory(DepartmentFactory)


class CommentFactory(BaseFactory):
    class Meta:
        model = Comment

    text = factory.Faker("sentence")
    ticket = factory.SubFactory(TicketFactory)
    author = factory.SubFactory(UserFactory)


class AssignmentFactory(BaseFactory):
    class Meta:
        model = TicketAssignment

    ticket = factory.SubFactory(TicketFactory)
    user = factory.SubFactory(UserFactory)
