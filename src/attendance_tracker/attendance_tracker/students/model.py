from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..core.constants import STUDENT_ID_PREFIX, STUDENT_ID_WIDTH


@dataclass(frozen=True)
class Student:
    """Domain entity: a roster member.

    Note: plain data object, no storage access.
    """

    student_id: str
    name: str
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Student":
        created_at = data.get("created_at")
        return cls(
            student_id=str(data["id"]),
            name=str(data["name"]),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )


def next_student_id(existing: Sequence[Student]) -> str:
    """'S' + (highest existing number + 1), zero-padded; 'S01' for an empty roster."""
    highest = 0
    for s in existing:
        digits = s.student_id[len(STUDENT_ID_PREFIX):]
        if s.student_id.startswith(STUDENT_ID_PREFIX) and digits.isdigit():
            highest = max(highest, int(digits))
    return f"{STUDENT_ID_PREFIX}{highest + 1:0{STUDENT_ID_WIDTH}d}"
