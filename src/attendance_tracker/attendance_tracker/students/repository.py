from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for the roster.

    Note: services depend on this interface, never on a concrete store.
    """

    def list_all(self) -> Sequence[Student]:
        """All students ordered by id."""
        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def create(self, *, student_id: str, name: str, created_at: datetime) -> Student:
        """Insert with a caller-chosen id. Raises ConflictError if the id is taken."""
        raise NotImplementedError

    def create_next(self, *, name: str, created_at: datetime) -> Student:
        """Assign the next free id and insert, as one atomic step."""
        raise NotImplementedError

    def rename(self, student_id: str, *, name: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, student_id: str) -> bool:
        raise NotImplementedError
