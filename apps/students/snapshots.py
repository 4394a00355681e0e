"""
Typed student snapshots.

The admission and progression rules work on these plain records rather than
on model instances, so they can run on data fetched from any store.
"""

from dataclasses import dataclass
from datetime import datetime

from .models import Belt


@dataclass(frozen=True)
class StudentSnapshot:
    id: object
    active: bool
    current_belt: str
    current_degree: int
    belt_since: datetime

    @classmethod
    def from_model(cls, student):
        """Snapshot a Student; a missing belt_since falls back to enrollment time."""
        return cls(
            id=student.id,
            active=bool(student.active),
            current_belt=student.current_belt or Belt.WHITE,
            current_degree=int(student.current_degree or 0),
            belt_since=student.belt_since or student.created_at,
        )
