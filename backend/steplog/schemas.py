from typing import List, Optional

from pydantic import BaseModel


class DayOut(BaseModel):
    """One aggregated day, timestamps as epoch seconds."""
    date: int
    interval_start: int
    interval_end: int
    count: int


class SummaryOut(BaseModel):
    total: int
    days: int
    average: int


class StepReportOut(BaseModel):
    """Response body of the step log upload."""
    report: str
    days: List[DayOut]
    summary: Optional[SummaryOut] = None
