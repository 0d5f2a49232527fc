import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from attendance_engine.core.dependencies import (
    get_current_principal,
    get_ledger,
    get_report_aggregator,
    get_roster_builder,
)
from attendance_engine.core.exceptions import AttendanceError
from attendance_engine.schemas.attendance import (
    AttendanceRecordResponse,
    AttendanceSummary,
    CustomerAttendance,
    MarkAttendanceRequest,
)
from attendance_engine.schemas.envelope import Envelope, failure, ok
from attendance_engine.services.identity import Principal
from attendance_engine.services.ledger import AttendanceLedger
from attendance_engine.services.report import ReportAggregator
from attendance_engine.services.roster import RosterBuilder

logger = logging.getLogger(__name__)

router = APIRouter()

# Ids are stored as 64-bit integers
MAX_ID = 2**63 - 1


# -----------------------------------------------------------------------------
# 1. ROSTER (eligible customers for a class session on a date)
# -----------------------------------------------------------------------------
@router.get(
    "/sessions/{session_id}/roster",
    response_model=Envelope[List[CustomerAttendance]],
    response_model_exclude_none=True,
)
async def get_roster(
    session_id: int = Path(..., ge=1, le=MAX_ID),
    date: str = Query(..., description="YYYY-MM-DD"),
    builder: RosterBuilder = Depends(get_roster_builder),
):
    """Customers to track for a class session on a date, with their current status."""
    try:
        return ok(await builder.roster(session_id, date))
    except AttendanceError as exc:
        logger.warning("Roster for session %s on %s failed: %s", session_id, date, exc)
        return failure(exc, "Failed to fetch customers for attendance")


# -----------------------------------------------------------------------------
# 2. MARK ATTENDANCE (insert or replace one record)
# -----------------------------------------------------------------------------
@router.post(
    "/enrollment-sessions/{enrollment_session_id}/mark",
    response_model=Envelope[dict],
    response_model_exclude_none=True,
)
async def mark_attendance(
    body: MarkAttendanceRequest,
    enrollment_session_id: int = Path(..., ge=1, le=MAX_ID),
    principal: Optional[Principal] = Depends(get_current_principal),
    ledger: AttendanceLedger = Depends(get_ledger),
):
    """Record a status for one enrollment session on one date. Re-marking overwrites."""
    try:
        await ledger.mark_attendance(enrollment_session_id, body.date, body.status, principal)
        return ok({})
    except AttendanceError as exc:
        logger.warning(
            "Marking enrollment session %s on %s failed: %s", enrollment_session_id, body.date, exc
        )
        return failure(exc, "Failed to mark attendance")


# -----------------------------------------------------------------------------
# 3. REPORT (per-customer totals over a date range)
# -----------------------------------------------------------------------------
@router.get(
    "/sessions/{session_id}/report",
    response_model=Envelope[List[AttendanceSummary]],
    response_model_exclude_none=True,
)
async def get_report(
    session_id: int = Path(..., ge=1, le=MAX_ID),
    start_date: str = Query(..., description="YYYY-MM-DD, inclusive"),
    end_date: str = Query(..., description="YYYY-MM-DD, inclusive"),
    aggregator: ReportAggregator = Depends(get_report_aggregator),
):
    try:
        return ok(await aggregator.report(session_id, start_date, end_date))
    except AttendanceError as exc:
        logger.warning(
            "Report for session %s (%s..%s) failed: %s", session_id, start_date, end_date, exc
        )
        return failure(exc, "Failed to generate attendance report")


# -----------------------------------------------------------------------------
# 4. LEDGER HISTORY (all records of one enrollment session)
# -----------------------------------------------------------------------------
@router.get(
    "/enrollment-sessions/{enrollment_session_id}/records",
    response_model=Envelope[List[AttendanceRecordResponse]],
    response_model_exclude_none=True,
)
async def get_records(
    enrollment_session_id: int = Path(..., ge=1, le=MAX_ID),
    ledger: AttendanceLedger = Depends(get_ledger),
):
    try:
        records = await ledger.history(enrollment_session_id)
        return ok([AttendanceRecordResponse.model_validate(r) for r in records])
    except AttendanceError as exc:
        logger.warning("Ledger for enrollment session %s failed: %s", enrollment_session_id, exc)
        return failure(exc, "Failed to fetch attendance records")
