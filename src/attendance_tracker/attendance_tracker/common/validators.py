from __future__ import annotations

import re

from ..core.constants import STUDENT_ID_PREFIX
from ..core.exceptions import ValidationError

_STUDENT_ID_RE = re.compile(rf"^{STUDENT_ID_PREFIX}\d+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_student_id(value: str) -> str:
    if not isinstance(value, str) or not _STUDENT_ID_RE.match(value):
        raise ValidationError(f"Invalid student id: {value!r}")
    return value
