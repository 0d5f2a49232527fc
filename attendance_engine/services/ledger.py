import logging
from datetime import date, datetime, timezone
from typing import Callable, List, Optional, Union

from attendance_engine.core.dates import parse_iso_date
from attendance_engine.core.exceptions import NotFoundError, ValidationError
from attendance_engine.db.store import EnrollmentStore
from attendance_engine.models.attendance import AttendanceRecord
from attendance_engine.models.enums import AttendanceStatus
from attendance_engine.services.eligibility import eligible, rule_for_session
from attendance_engine.services.identity import InstructorDirectory, Principal

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_status(value: Union[str, AttendanceStatus]) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"Unrecognized attendance status {value!r} (expected one of: {allowed})")


class AttendanceLedger:
    """
    Per-enrollment-session attendance, one record per date.

    ``mark_attendance`` is the only writer. Each call is a single upsert
    keyed by (enrollment session, date), so repeated marks converge on the
    latest status and marks for different dates never overwrite each other.
    """

    def __init__(
        self,
        store: EnrollmentStore,
        directory: InstructorDirectory,
        *,
        enforce_eligibility: bool = True,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._store = store
        self._directory = directory
        self._enforce_eligibility = enforce_eligibility
        self._clock = clock

    async def mark_attendance(
        self,
        enrollment_session_id: int,
        on: Union[str, date],
        status: Union[str, AttendanceStatus],
        principal: Optional[Principal],
    ) -> AttendanceRecord:
        instructor = await self._directory.resolve(principal)

        day = parse_iso_date(on)
        status = parse_status(status)

        enrollment_session = await self._store.get_enrollment_session(enrollment_session_id)
        if enrollment_session is None:
            raise NotFoundError(f"Enrollment session {enrollment_session_id} not found")

        if self._enforce_eligibility and not eligible(rule_for_session(enrollment_session), day):
            raise ValidationError(
                f"Enrollment session {enrollment_session_id} ({enrollment_session.enrollment_type}) "
                f"is not eligible for attendance on {day.isoformat()}"
            )

        record = await self._store.upsert_attendance(
            enrollment_session_id=enrollment_session_id,
            on=day,
            status=status,
            marked_by=instructor.id,
            marked_at=self._clock(),
        )
        logger.info(
            "Marked enrollment session %s %s on %s (instructor %s)",
            enrollment_session_id, status.value, day.isoformat(), instructor.id,
        )
        return record

    async def history(self, enrollment_session_id: int) -> List[AttendanceRecord]:
        """Every record of one enrollment session, ordered by date."""
        enrollment_session = await self._store.get_enrollment_session(enrollment_session_id)
        if enrollment_session is None:
            raise NotFoundError(f"Enrollment session {enrollment_session_id} not found")
        return await self._store.records_for(enrollment_session_id)
