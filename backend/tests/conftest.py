"""
Shared pytest fixtures for the step log analyzer test suite.

Provides:
  - client:      A FastAPI TestClient for the upload API.
  - make_item:   Builds one embedded step record the way the synchronizer writes it.
  - sample_log:  A realistic log with noise, duplicates and two days of data.
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from steplog.main import app


def epoch(*args) -> int:
    """Epoch seconds for a UTC wall-clock time, e.g. ``epoch(2023, 5, 1, 8, 0)``."""
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


def item(date: int, start: int, end: int, steps) -> str:
    return f'{{"date":{date},"startTime":{start},"endTime":{end},"steps":{steps}}}'


def log_line(*items: str, prefix: str = "2023-05-02 07:12:44 INFO SyncClient - response: ") -> str:
    return prefix + '{"status":"ok","items":[' + ",".join(items) + "]}\n"


MAY_1 = epoch(2023, 5, 1)
MAY_2 = epoch(2023, 5, 2)


# ---------------------------------------------------------------------------
# FastAPI TestClient fixture
# ---------------------------------------------------------------------------

@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


# ---------------------------------------------------------------------------
# Sample-data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def make_item():
    return item


@pytest.fixture()
def sample_log() -> str:
    """Two days of data spread over three data lines.

    The morning record of May 1st appears twice (once repeated on a later
    line) and must be counted once.
    """
    morning = item(MAY_1, epoch(2023, 5, 1, 8, 0), epoch(2023, 5, 1, 8, 30), 1500)
    evening = item(MAY_1, epoch(2023, 5, 1, 17, 0), epoch(2023, 5, 1, 17, 15), 2300)
    next_day = item(MAY_2, epoch(2023, 5, 2, 9, 5), epoch(2023, 5, 2, 9, 45), 4000)
    return (
        "2023-05-02 07:12:40 INFO Launcher - starting step synchronizer\n"
        "2023-05-02 07:12:41 DEBUG HttpClient - GET /api/steps?from=1682899200\n"
        + log_line(morning)
        + "2023-05-02 07:12:45 WARN SyncClient - retrying page 2\n"
        + log_line(morning, evening)
        + log_line(next_day)
        + "2023-05-02 07:12:50 INFO Launcher - done\n"
    )
