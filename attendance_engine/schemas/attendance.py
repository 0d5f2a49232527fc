from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime
from attendance_engine.models.enums import AttendanceStatus


# --- REQUEST MODELS ---

class MarkAttendanceRequest(BaseModel):
    """Body of the mark endpoint. ``date`` must be YYYY-MM-DD."""
    date: str
    status: AttendanceStatus


# --- RESPONSE MODELS ---

class AttendanceRecordResponse(BaseModel):
    date: date
    status: AttendanceStatus
    marked_by: int
    marked_at: datetime

    class Config:
        from_attributes = True


class CustomerAttendance(BaseModel):
    """
    One eligible customer on the roster for a date.
    ``attendance_status`` is None while the customer is unmarked.
    """
    id: int
    enrollment_id: int
    session_id: int
    customer_name: str
    email: str
    contact_no: Optional[str] = None
    enrollment_type: str
    attendance_status: Optional[AttendanceStatus] = None


class AttendanceSummary(BaseModel):
    """Per-customer attendance totals over a date range."""
    enrollment_session_id: int
    customer_name: str
    email: str
    enrollment_type: str
    attendance_records: List[AttendanceRecordResponse] = []
    total_sessions: int = 0
    present_count: int = 0
    absent_count: int = 0
    late_count: int = 0
