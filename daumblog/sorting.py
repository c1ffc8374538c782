"""Ordering of display records for the result list."""

from datetime import datetime, timezone
from typing import Iterable, Literal, Optional

from daumblog.models import DisplayRecord, SortAction
from daumblog.normalize import normalize_timestamp

MissingDatetime = Literal["now", "last"]


def _title_key(record: DisplayRecord) -> str:
    return record.title or ""


def _datetime_key(record: DisplayRecord) -> Optional[datetime]:
    return normalize_timestamp(record.timestamp)


def sort_records(
    records: Iterable[DisplayRecord],
    action: SortAction,
    missing_datetime: MissingDatetime = "now",
    now: Optional[datetime] = None,
) -> list[DisplayRecord]:
    """
    Order records for display.

    TITLE sorts ascending by title, with a missing title keyed as "".
    DATETIME sorts most recent first. Undated records are keyed as ``now``
    (so they lead the list) unless ``missing_datetime`` is "last".
    CANCEL and CONFIRM return the records in their current order.
    Both sorts are stable.
    """
    items = list(records)
    if action is SortAction.TITLE:
        return sorted(items, key=_title_key)
    if action is SortAction.DATETIME:
        if missing_datetime == "last":
            dated = [r for r in items if r.timestamp is not None]
            undated = [r for r in items if r.timestamp is None]
            return sorted(dated, key=_datetime_key, reverse=True) + undated
        fallback = normalize_timestamp(now) or datetime.now(timezone.utc)
        return sorted(items, key=lambda r: _datetime_key(r) or fallback, reverse=True)
    return items
