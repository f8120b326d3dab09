"""DTOs for AssignmentService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class AssignmentOut:
    id: int
    ticket_id: int
    ticket_title: str
    user_id: int
    username: str
    created_at: datetime | None = None
