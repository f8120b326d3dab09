"""DTOs for RoleService."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RoleOut:
    id: int
    name: str
