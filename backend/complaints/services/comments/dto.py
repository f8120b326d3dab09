"""DTOs for CommentService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class CommentOut:
    id: int
    ticket_id: int
    user_id: int
    username: str
    text: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
