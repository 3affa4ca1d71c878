from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one date's attendance snapshot.

    `record_date` is kept as the YYYY-MM-DD string it is keyed by; at most one
    record exists per date in storage.
    """

    record_date: str
    present_ids: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, record_date: str, present_ids: Iterable[str]) -> "AttendanceRecord":
        return cls(record_date=record_date, present_ids=frozenset(present_ids))

    def is_present(self, student_id: str) -> bool:
        return student_id in self.present_ids

    @property
    def present_count(self) -> int:
        return len(self.present_ids)

    def to_dict(self) -> dict:
        return {"date": self.record_date, "present_ids": sorted(self.present_ids)}

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceRecord":
        return cls.of(str(data["date"]), data.get("present_ids") or [])
