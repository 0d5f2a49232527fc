import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Dict, Iterable, Iterator, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from attendance_engine.core.exceptions import StoreError
from attendance_engine.models.attendance import AttendanceRecord
from attendance_engine.models.customer import Enrollment
from attendance_engine.models.enrollment import EnrollmentSession
from attendance_engine.models.enums import AttendanceStatus
from attendance_engine.models.instructor import Instructor

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class EnrollmentStore:
    """
    Persistence handle for enrollment sessions, attendance rows and instructors.

    Wraps one ``AsyncSession``; every SQLAlchemy failure leaves the store as a
    ``StoreError`` after the transaction has been rolled back.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except (SQLAlchemyError, OverflowError) as exc:
            logger.error("Store failure while %s", action, exc_info=True)
            raise StoreError(f"Store failure while {action}") from exc

    async def sessions_for_class(self, session_id: int) -> List[EnrollmentSession]:
        """All enrollment sessions of a class session, with their customer loaded."""
        q = (
            select(EnrollmentSession)
            .where(EnrollmentSession.session_id == session_id)
            .options(selectinload(EnrollmentSession.enrollment).selectinload(Enrollment.customer))
            .order_by(EnrollmentSession.id)
        )
        with self._guard(f"reading enrollment sessions of session {session_id}"):
            result = await self._session.execute(q)
            return list(result.scalars().all())

    async def get_enrollment_session(self, enrollment_session_id: int) -> Optional[EnrollmentSession]:
        with self._guard(f"reading enrollment session {enrollment_session_id}"):
            result = await self._session.execute(
                select(EnrollmentSession).where(EnrollmentSession.id == enrollment_session_id)
            )
            return result.scalar_one_or_none()

    async def records_on(self, enrollment_session_ids: Iterable[int], on: date) -> Dict[int, AttendanceRecord]:
        """Records for one date, keyed by enrollment session id."""
        ids = list(enrollment_session_ids)
        if not ids:
            return {}
        q = select(AttendanceRecord).where(
            AttendanceRecord.enrollment_session_id.in_(ids),
            AttendanceRecord.date == on,
        )
        with self._guard(f"reading attendance for {on.isoformat()}"):
            result = await self._session.execute(q)
            return {r.enrollment_session_id: r for r in result.scalars().all()}

    async def records_between(
        self, enrollment_session_ids: Iterable[int], start: date, end: date
    ) -> List[AttendanceRecord]:
        """Records with start <= date <= end, ordered by date."""
        ids = list(enrollment_session_ids)
        if not ids:
            return []
        q = (
            select(AttendanceRecord)
            .where(
                AttendanceRecord.enrollment_session_id.in_(ids),
                AttendanceRecord.date >= start,
                AttendanceRecord.date <= end,
            )
            .order_by(AttendanceRecord.date, AttendanceRecord.id)
        )
        with self._guard(f"reading attendance between {start.isoformat()} and {end.isoformat()}"):
            result = await self._session.execute(q)
            return list(result.scalars().all())

    async def records_for(self, enrollment_session_id: int) -> List[AttendanceRecord]:
        q = (
            select(AttendanceRecord)
            .where(AttendanceRecord.enrollment_session_id == enrollment_session_id)
            .order_by(AttendanceRecord.date)
        )
        with self._guard(f"reading ledger of enrollment session {enrollment_session_id}"):
            result = await self._session.execute(q)
            return list(result.scalars().all())

    async def instructor_for_user(self, user_id: str) -> Optional[Instructor]:
        with self._guard("resolving instructor"):
            result = await self._session.execute(
                select(Instructor).where(Instructor.user_id == user_id, Instructor.is_active.is_(True))
            )
            return result.scalar_one_or_none()

    async def upsert_attendance(
        self,
        *,
        enrollment_session_id: int,
        on: date,
        status: AttendanceStatus,
        marked_by: int,
        marked_at: datetime,
    ) -> AttendanceRecord:
        """
        Insert or replace the record keyed by (enrollment_session_id, on).

        Runs as one statement where the dialect supports ON CONFLICT;
        elsewhere the parent enrollment session row is locked for the
        duration of the delete + insert.
        """
        values = {
            "enrollment_session_id": enrollment_session_id,
            "date": on,
            "status": status,
            "marked_by": marked_by,
            "marked_at": marked_at,
        }
        key = (
            AttendanceRecord.enrollment_session_id == enrollment_session_id,
            AttendanceRecord.date == on,
        )
        action = f"marking enrollment session {enrollment_session_id} on {on.isoformat()}"

        try:
            with self._guard(action):
                dialect = self._session.get_bind().dialect.name
                insert = UPSERT_INSERTS.get(dialect)
                if insert is not None:
                    stmt = insert(AttendanceRecord).values(**values)
                    stmt = stmt.on_conflict_do_update(
                        index_elements=["enrollment_session_id", "date"],
                        set_={
                            "status": stmt.excluded.status,
                            "marked_by": stmt.excluded.marked_by,
                            "marked_at": stmt.excluded.marked_at,
                        },
                    )
                    await self._session.execute(stmt)
                else:
                    await self._session.execute(
                        select(EnrollmentSession.id)
                        .where(EnrollmentSession.id == enrollment_session_id)
                        .with_for_update()
                    )
                    await self._session.execute(delete(AttendanceRecord).where(*key))
                    self._session.add(AttendanceRecord(**values))
                await self._session.commit()
        except StoreError:
            await self._session.rollback()
            raise

        with self._guard(action):
            result = await self._session.execute(
                select(AttendanceRecord).where(*key).execution_options(populate_existing=True)
            )
            return result.scalar_one()
