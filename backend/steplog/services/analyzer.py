"""
End-to-end step log analysis: scan, extract, aggregate, render.

The whole input is read before anything is rendered. A read failure aborts
the run; no partial report is produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from steplog.models import ActivityRecord, DailySummary
from steplog.parsers.step_log import parse_step_log, parse_step_log_file
from steplog.services.aggregator import aggregate_by_day
from steplog.services.report import format_report, get_locale, get_timezone, summarize

logger = logging.getLogger(__name__)


@dataclass
class StepReport:
    """Result of one analysis run."""

    days: list[ActivityRecord]
    summary: Optional[DailySummary]
    text: str


def build_report(
    records: Iterable[ActivityRecord],
    locale: Optional[str] = None,
    tz: Optional[str] = None,
) -> StepReport:
    """Aggregate raw records and render them."""
    # Fail on bad presentation settings before doing any work.
    get_locale(locale)
    get_timezone(tz)

    days = aggregate_by_day(records)
    return StepReport(
        days=days,
        summary=summarize(days),
        text=format_report(days, locale=locale, tz=tz),
    )


def analyze_stream(
    lines: Iterable[str],
    locale: Optional[str] = None,
    tz: Optional[str] = None,
) -> StepReport:
    """Analyze an already-open step log."""
    return build_report(parse_step_log(lines), locale=locale, tz=tz)


def analyze_file(
    path: str,
    locale: Optional[str] = None,
    tz: Optional[str] = None,
) -> StepReport:
    """Analyze a step log on disk.

    Raises:
        FileNotFoundError: If *path* does not exist.
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    logger.info("Analyzing step log %s", path)
    return build_report(parse_step_log_file(path), locale=locale, tz=tz)
