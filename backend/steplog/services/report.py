"""
Human-readable step report.

One line per day (weekday, date, interval, count) followed by a summary line
with the grand total, the number of days and the floor average. All times are
rendered in a single time zone so a rendered day and hour:minute always map
back to the same instant at minute resolution.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Iterable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from steplog.config import settings
from steplog.models import ActivityRecord, DailySummary

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d-%m-%Y"
TIME_FORMAT = "%H:%M"
_INVALID_DATE = "??-??-????"
_INVALID_TIME = "--:--"

# Weekday names are indexed by ``date.weekday()`` (Monday == 0).
LOCALES: dict[str, dict] = {
    "de": {
        "weekdays": (
            "Montag", "Dienstag", "Mittwoch", "Donnerstag",
            "Freitag", "Samstag", "Sonntag",
        ),
        "day_line": "{weekday}, {date}, zwischen {start} und {end} Uhr, {count} {unit}",
        "summary_line": (
            "Das sind {total} {unit} in {days} Tagen, "
            "also im Schnitt {average} {unit} pro Tag"
        ),
        "no_data": "Keine Schrittdaten gefunden.",
        "unit": "Schritte",
    },
    "en": {
        "weekdays": (
            "Monday", "Tuesday", "Wednesday", "Thursday",
            "Friday", "Saturday", "Sunday",
        ),
        "day_line": "{weekday}, {date}, between {start} and {end}, {count} {unit}",
        "summary_line": (
            "That is {total} {unit} in {days} days, "
            "an average of {average} {unit} per day"
        ),
        "no_data": "No step data found.",
        "unit": "steps",
    },
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def get_locale(name: Optional[str] = None) -> dict:
    """Return the message table for *name* (defaults to the configured locale)."""
    name = (name or settings.REPORT_LOCALE).lower()
    try:
        return LOCALES[name]
    except KeyError:
        raise ValueError(
            f"Unsupported report locale {name!r}. Supported: {', '.join(sorted(LOCALES))}"
        ) from None


def get_timezone(name: Optional[str] = None) -> tzinfo:
    """Resolve an IANA zone name (defaults to the configured report zone)."""
    name = name or settings.REPORT_TIMEZONE
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(
            f"Unknown time zone {name!r}. Use an IANA identifier such as 'Europe/Berlin'."
        ) from None


def _to_datetime(epoch_seconds: int, tz: tzinfo) -> Optional[datetime]:
    """Convert epoch seconds to an aware datetime, or ``None`` if out of range."""
    try:
        return datetime.fromtimestamp(epoch_seconds, tz)
    except (OverflowError, OSError, ValueError):
        logger.warning("Timestamp %d cannot be rendered", epoch_seconds)
        return None


def _format_time(epoch_seconds: int, tz: tzinfo) -> str:
    dt = _to_datetime(epoch_seconds, tz)
    return dt.strftime(TIME_FORMAT) if dt else _INVALID_TIME


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


def summarize(days: list[ActivityRecord]) -> Optional[DailySummary]:
    """Grand totals over aggregated days, or ``None`` when there are none."""
    if not days:
        return None
    total = sum(day.count for day in days)
    return DailySummary(total=total, days=len(days), average=total // len(days))


def format_day_line(
    day: ActivityRecord,
    locale: Optional[str] = None,
    tz: Optional[str] = None,
) -> str:
    """Render one aggregated day."""
    messages = get_locale(locale)
    zone = get_timezone(tz)

    day_dt = _to_datetime(day.date, zone)
    if day_dt is None:
        weekday, date_text = "?", _INVALID_DATE
    else:
        weekday = messages["weekdays"][day_dt.weekday()]
        date_text = day_dt.strftime(DATE_FORMAT)

    return messages["day_line"].format(
        weekday=weekday,
        date=date_text,
        start=_format_time(day.interval_start, zone),
        end=_format_time(day.interval_end, zone),
        count=day.count,
        unit=messages["unit"],
    )


def format_summary_line(summary: DailySummary, locale: Optional[str] = None) -> str:
    messages = get_locale(locale)
    return messages["summary_line"].format(
        total=summary.total,
        days=summary.days,
        average=summary.average,
        unit=messages["unit"],
    )


def format_report(
    days: Iterable[ActivityRecord],
    locale: Optional[str] = None,
    tz: Optional[str] = None,
) -> str:
    """Render the full multi-line report for sorted, aggregated days.

    With no days the report is the single localized "no data" line.
    """
    days = list(days)
    summary = summarize(days)
    if summary is None:
        return get_locale(locale)["no_data"]

    lines = [format_day_line(day, locale=locale, tz=tz) for day in days]
    lines.append(format_summary_line(summary, locale=locale))
    return "\n".join(lines)
