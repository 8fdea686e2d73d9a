import logging
import os
from dataclasses import asdict
from io import StringIO
from typing import Optional

from fastapi import APIRouter, File, HTTPException, Query, UploadFile

from steplog.config import settings
from steplog.schemas import DayOut, StepReportOut, SummaryOut
from steplog.services.analyzer import analyze_stream

logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])


@router.post("/upload/log", response_model=StepReportOut)
async def upload_step_log(
    file: UploadFile = File(...),
    locale: Optional[str] = Query(None),
    tz: Optional[str] = Query(None),
):
    """Upload a step-synchronizer log and return the per-day step report."""
    extension = os.path.splitext(file.filename or "")[1].lower()
    if extension not in settings.ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"File must be one of: {', '.join(settings.ALLOWED_EXTENSIONS)}",
        )

    content = await file.read()
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        logger.warning("Rejected %s: %s", file.filename, exc)
        raise HTTPException(status_code=400, detail="Log file is not valid UTF-8 text")

    try:
        result = analyze_stream(StringIO(text), locale=locale, tz=tz)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return StepReportOut(
        report=result.text,
        days=[DayOut(**asdict(day)) for day in result.days],
        summary=SummaryOut(**asdict(result.summary)) if result.summary else None,
    )
