from __future__ import annotations

import logging
from typing import Iterable, Union

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import InvalidDateFormat
from .model import PreparedRecords

logger = logging.getLogger(__name__)

RecordsInput = Union[PreparedRecords, Iterable[AttendanceRecord]]


def prepare_records(records: RecordsInput) -> PreparedRecords:
    """Validate, deduplicate and sort an attendance history.

    Records with a malformed date are dropped and counted in `skipped`.
    Duplicate dates keep the last record seen (upsert semantics). The result
    is ordered by date string, which is chronological for YYYY-MM-DD.
    Already-prepared input is returned as is.
    """
    if isinstance(records, PreparedRecords):
        return records

    by_date: dict[str, AttendanceRecord] = {}
    skipped = 0
    for record in records:
        try:
            parse_iso_date(record.record_date)
        except InvalidDateFormat as exc:
            skipped += 1
            logger.warning("Skipping attendance record: %s", exc)
            continue
        by_date[record.record_date] = record

    ordered = tuple(by_date[d] for d in sorted(by_date))
    return PreparedRecords(records=ordered, skipped=skipped)
