"""DTOs for DepartmentService."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DepartmentOut:
    id: int
    name: str
