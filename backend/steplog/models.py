from dataclasses import dataclass
from enum import Enum

# Stands in for any field value that could not be parsed.
SENTINEL = -1


class RecordField(str, Enum):
    """Keys of the embedded step records, in the order they appear."""

    DATE = "date"
    INTERVAL_START = "startTime"
    INTERVAL_END = "endTime"
    COUNT = "steps"


@dataclass(frozen=True)
class ActivityRecord:
    """One step record: the day it belongs to, the observed interval and the step count.

    All values are epoch seconds except ``count``. ``SENTINEL`` marks a value
    that was missing or unparseable and must not be read as zero.
    """

    date: int
    interval_start: int
    interval_end: int
    count: int

    def merged_with(self, other: "ActivityRecord") -> "ActivityRecord":
        """Fold another record of the same day into this one."""
        return ActivityRecord(
            date=self.date,
            interval_start=min(self.interval_start, other.interval_start),
            interval_end=max(self.interval_end, other.interval_end),
            count=self.count + other.count,
        )


@dataclass(frozen=True)
class DailySummary:
    """Grand totals over the aggregated days."""

    total: int
    days: int
    average: int
