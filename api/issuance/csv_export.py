"""
CSV serialization for exports.
"""

from __future__ import annotations

import csv
import io
from datetime import date, datetime, timezone
from typing import Any, Iterable, Mapping


def format_timestamp(value: datetime) -> str:
    """
    UTC with millisecond precision and a "Z" suffix, e.g. 2024-06-01T09:30:00.000Z.

    Naive values are taken as UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _format_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def rows_to_csv(rows: Iterable[Mapping[str, Any]]) -> str:
    """
    Render rows as CSV text. The header comes from the first row's keys.

    No rows means no header either: the result is "".
    """
    rows = list(rows)
    if not rows:
        return ""

    fieldnames = list(rows[0].keys())
    buf = io.StringIO()
    writer = csv.DictWriter(
        buf,
        fieldnames=fieldnames,
        extrasaction="ignore",
        quoting=csv.QUOTE_NONNUMERIC,
        lineterminator="\n",
    )
    writer.writeheader()
    for row in rows:
        writer.writerow({key: _format_value(row.get(key)) for key in fieldnames})
    return buf.getvalue()
