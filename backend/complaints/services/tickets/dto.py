"""DTOs for TicketService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class TicketCreateIn:
    """
    :param title: Short summary.
    :param description: Free text body.
    :param department_id: Department the complaint is filed against.
    """

    title: str
    department_id: int
    description: str = ""


@dataclass(frozen=True, slots=True)
class TicketUpdateIn:
    """
    Administrative edit. Fields left as ``None`` keep their current value.

    :param user_id: New owner of the ticket.
    """

    title: str | None = None
    description: str | None = None
    status: str | None = None
    user_id: int | None = None
    department_id: int | None = None


@dataclass(frozen=True, slots=True)
class TicketOut:
    id: int
    title: str
    description: str
    status: str
    user_id: int
    username: str
    department_id: int
    department_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
