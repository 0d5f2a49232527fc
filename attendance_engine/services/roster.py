from datetime import date
from typing import List, Union

from attendance_engine.core.dates import parse_iso_date
from attendance_engine.db.store import EnrollmentStore
from attendance_engine.schemas.attendance import CustomerAttendance
from attendance_engine.services.eligibility import eligible, rule_for_session


class RosterBuilder:
    """Builds the per-date list of eligible customers for a class session."""

    def __init__(self, store: EnrollmentStore):
        self._store = store

    async def roster(self, session_id: int, on: Union[str, date]) -> List[CustomerAttendance]:
        """
        Eligible customers of ``session_id`` on ``on`` with their current status.

        Ineligible enrollment sessions are left out entirely; an unknown
        class session yields an empty roster. Never writes.
        """
        day = parse_iso_date(on)
        enrollment_sessions = await self._store.sessions_for_class(session_id)
        included = [es for es in enrollment_sessions if eligible(rule_for_session(es), day)]

        marked = await self._store.records_on((es.id for es in included), day)

        roster = []
        for es in included:
            customer = es.enrollment.customer
            record = marked.get(es.id)
            roster.append(CustomerAttendance(
                id=es.id,
                enrollment_id=es.enrollment_id,
                session_id=es.session_id,
                customer_name=customer.full_name,
                email=customer.email,
                contact_no=customer.contact_no,
                enrollment_type=es.enrollment_type,
                attendance_status=record.status if record else None,
            ))
        return roster
