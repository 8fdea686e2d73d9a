"""
Day-level aggregation of raw step records.

All records sharing the same ``date`` value are merged into one: counts are
summed and the interval is widened to the earliest start and latest end.
The ``date`` field is used verbatim as the merge key.
"""

import logging
from typing import Iterable

from steplog.models import ActivityRecord

logger = logging.getLogger(__name__)


def aggregate_by_day(records: Iterable[ActivityRecord]) -> list[ActivityRecord]:
    """Merge records per ``date`` and return them sorted ascending by date.

    Sentinel values take part like any other integer. An empty input
    yields an empty list.
    """
    by_date: dict[int, ActivityRecord] = {}
    for record in records:
        current = by_date.get(record.date)
        by_date[record.date] = record if current is None else current.merged_with(record)

    days = sorted(by_date.values(), key=lambda r: r.date)
    logger.info("Aggregated step records into %d day(s)", len(days))
    return days
