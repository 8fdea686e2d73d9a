"""
Parser for step-synchronizer log files.

The synchronizer writes free-form log lines. Some of them carry an embedded,
JSON-like ``"items":[...]`` array of step records such as::

    ... "items":[{"date":1682899200,"startTime":1682928000,"endTime":1682929800,"steps":1500}, ...

Lines are not valid JSON (they are truncated, prefixed with log noise, or
cut mid-record), so records are located by key instead of being decoded.
Each field value is read up to the next ``,`` or ``}``; values that are
missing or not integers become ``SENTINEL`` rather than aborting the run.
Exact duplicates (all four fields equal) are dropped across the whole file.
"""

import logging
import os
from typing import Iterable, Iterator, Optional

from steplog.models import SENTINEL, ActivityRecord, RecordField

logger = logging.getLogger(__name__)

LINE_MARKER = '"items":['
RECORD_START = "{"
RECORD_END = "}"
_VALUE_DELIMITERS = (",", RECORD_END)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _field_marker(field: RecordField) -> str:
    return f'"{field.value}":'


DATE_MARKER = _field_marker(RecordField.DATE)


def find_marker(
    text: str, marker: str, start: int = 0, end: Optional[int] = None
) -> Optional[int]:
    """Return the offset of *marker* in ``text[start:end]``, or ``None`` if absent.

    An offset of 0 is a real match; only ``None`` means "not found".
    """
    if end is None:
        end = len(text)
    idx = text.find(marker, start, end)
    return None if idx < 0 else idx


def find_last_marker(text: str, marker: str, start: int, end: int) -> Optional[int]:
    """Like :func:`find_marker`, but return the last match in ``text[start:end]``."""
    idx = text.rfind(marker, start, end)
    return None if idx < 0 else idx


def _parse_int(raw: str, field: RecordField) -> int:
    """Parse a field token as a base-10 integer, returning ``SENTINEL`` on failure.

    Only an optional leading ``-`` followed by ASCII digits is accepted.
    """
    token = raw.strip()
    digits = token[1:] if token.startswith("-") else token
    if digits.isascii() and digits.isdigit():
        return int(token)
    logger.warning("Unparseable %s value %r, using %d", field.value, token, SENTINEL)
    return SENTINEL


def _read_field(text: str, window_start: int, window_end: int, field: RecordField) -> int:
    """Look up *field* by key inside one record window and parse its value."""
    marker = _field_marker(field)
    pos = find_marker(text, marker, window_start, window_end)
    if pos is None:
        logger.warning(
            "Missing %s field in record at offset %d, using %d",
            field.value, window_start, SENTINEL,
        )
        return SENTINEL

    value_start = pos + len(marker)
    delimiters = [
        idx
        for idx in (find_marker(text, d, value_start, window_end) for d in _VALUE_DELIMITERS)
        if idx is not None
    ]
    value_end = min(delimiters, default=window_end)
    return _parse_int(text[value_start:value_end], field)


# ---------------------------------------------------------------------------
# Record extraction
# ---------------------------------------------------------------------------


def extract_record(text: str, cursor: int = 0) -> Optional[tuple[ActivityRecord, int]]:
    """Extract the next record at or after *cursor*.

    A record starts at the ``{`` opening the object that holds its
    ``"date":`` key (or at the key itself when there is no such brace), so
    fields may appear in any order. It ends at the first ``}`` after the
    date key, or at the next record's start when that comes first (an
    unclosed record), or at the end of *text* for a truncated record.

    Returns:
        ``(record, next_cursor)`` where *next_cursor* points just past the
        record, or ``None`` when no further date key exists.
    """
    date_pos = find_marker(text, DATE_MARKER, cursor)
    if date_pos is None:
        return None

    opening = find_last_marker(text, RECORD_START, cursor, date_pos)
    start = date_pos if opening is None else opening

    after_date = date_pos + len(DATE_MARKER)
    close = find_marker(text, RECORD_END, after_date)
    next_date = find_marker(text, DATE_MARKER, after_date)

    if close is not None and (next_date is None or close < next_date):
        end = close
        next_cursor = close + 1
    elif next_date is not None:
        reopening = find_last_marker(text, RECORD_START, after_date, next_date)
        end = next_cursor = next_date if reopening is None else reopening
    else:
        end = next_cursor = len(text)

    values = {field: _read_field(text, start, end, field) for field in RecordField}
    record = ActivityRecord(
        date=values[RecordField.DATE],
        interval_start=values[RecordField.INTERVAL_START],
        interval_end=values[RecordField.INTERVAL_END],
        count=values[RecordField.COUNT],
    )
    return record, next_cursor


def collect_records(
    fragment: str, records: list[ActivityRecord], seen: set[ActivityRecord]
) -> int:
    """Append every new record found in *fragment* to *records*.

    *seen* holds every record collected so far in this run. Membership is a
    hash lookup on the four-field record, so deduplication stays linear in
    the number of records. The first occurrence wins and extraction order
    is preserved.

    Returns:
        The number of records appended.
    """
    added = 0
    cursor = 0
    while True:
        result = extract_record(fragment, cursor)
        if result is None:
            break
        record, cursor = result
        if record in seen:
            logger.debug("Skipping duplicate record %s", record)
            continue
        seen.add(record)
        records.append(record)
        added += 1
    return added


# ---------------------------------------------------------------------------
# Line scanning
# ---------------------------------------------------------------------------


def scan_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, fragment)`` for every line carrying step data.

    The fragment starts at the ``"items":[`` marker; everything before it is
    log noise and is dropped. Line numbers start at 1.
    """
    for line_no, line in enumerate(lines, start=1):
        pos = find_marker(line, LINE_MARKER)
        if pos is None:
            continue
        logger.info("Found step data in line %d", line_no)
        yield line_no, line[pos:]


def parse_step_log(lines: Iterable[str]) -> list[ActivityRecord]:
    """Parse an open step log (any iterable of lines) into unique raw records.

    Read errors from the underlying stream propagate unchanged.
    """
    records: list[ActivityRecord] = []
    seen: set[ActivityRecord] = set()
    for _, fragment in scan_lines(lines):
        collect_records(fragment, records, seen)
    logger.info("Extracted %d unique step records", len(records))
    return records


def parse_step_log_file(path: str) -> list[ActivityRecord]:
    """Read a step log from disk and parse it.

    Raises:
        FileNotFoundError: If *path* does not exist.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Step log not found: {path}")

    with open(path, "r", encoding="utf-8-sig") as f:
        return parse_step_log(f)
