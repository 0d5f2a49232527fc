from collections import Counter, defaultdict
from datetime import date
from typing import List, Union

from attendance_engine.core.dates import parse_iso_date
from attendance_engine.core.exceptions import ValidationError
from attendance_engine.db.store import EnrollmentStore
from attendance_engine.models.enums import AttendanceStatus
from attendance_engine.schemas.attendance import AttendanceRecordResponse, AttendanceSummary


class ReportAggregator:
    """Aggregates recorded attendance over an inclusive date range."""

    def __init__(self, store: EnrollmentStore):
        self._store = store

    async def report(
        self,
        session_id: int,
        start_date: Union[str, date],
        end_date: Union[str, date],
    ) -> List[AttendanceSummary]:
        start = parse_iso_date(start_date, "start_date")
        end = parse_iso_date(end_date, "end_date")
        if start > end:
            raise ValidationError(
                f"start_date {start.isoformat()} is after end_date {end.isoformat()}"
            )

        enrollment_sessions = await self._store.sessions_for_class(session_id)
        records = await self._store.records_between((es.id for es in enrollment_sessions), start, end)

        by_session = defaultdict(list)
        for record in records:
            by_session[record.enrollment_session_id].append(record)

        summaries = []
        for es in enrollment_sessions:
            in_range = by_session.get(es.id, [])
            counts = Counter(r.status for r in in_range)
            customer = es.enrollment.customer
            summaries.append(AttendanceSummary(
                enrollment_session_id=es.id,
                customer_name=customer.full_name,
                email=customer.email,
                enrollment_type=es.enrollment_type,
                attendance_records=[AttendanceRecordResponse.model_validate(r) for r in in_range],
                total_sessions=len(in_range),
                present_count=counts[AttendanceStatus.PRESENT],
                absent_count=counts[AttendanceStatus.ABSENT],
                late_count=counts[AttendanceStatus.LATE],
            ))
        return summaries
