"""Factory Boy definition for :class:`complaints.models.user.User`."""

from __future__ import annotations

import factory
from werkzeug.security import generate_password_hash

from complaints.models.user import User
from tests.factories import BaseFactory
from tests.factories.role import RoleFactory

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """
    Build persisted :class:`complaints.models.user.User` instances.

    Notes
    -----
    - ``password`` is a factory parameter; its hash is a declared column so
      it is part of the committed INSERT.
    - ``role`` defaults to ``ROLE_USER`` (created on demand).
    """

    class Meta:
        model = User

    class Params:
        password = DEFAULT_PASSWORD

    id = None  # let autoincrement handle it
    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    role = factory.SubFactory(RoleFactory, name="ROLE_USER")
    department = None
    password_hash = factory.LazyAttribute(lambda o: generate_password_hash(o.password))
