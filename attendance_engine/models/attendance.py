from typing import Optional, TYPE_CHECKING
from datetime import date, datetime

from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, DateTime, Enum as SQLAEnum, UniqueConstraint

from attendance_engine.models.enums import AttendanceStatus

if TYPE_CHECKING:
    from attendance_engine.models.enrollment import EnrollmentSession


class AttendanceRecord(SQLModel, table=True):
    """
    One day's outcome for one enrollment session.

    Rows are keyed by (enrollment_session_id, date); a later mark for the
    same key replaces status, marked_by and marked_at in a single upsert.
    """
    __tablename__ = "attendance_records"
    __table_args__ = (
        UniqueConstraint("enrollment_session_id", "date", name="uq_attendance_session_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    enrollment_session_id: int = Field(
        foreign_key="enrollment_sessions.id", ondelete="CASCADE", index=True
    )
    date: date

    status: AttendanceStatus = Field(
        sa_column=Column(
            SQLAEnum(
                AttendanceStatus,
                name="attendance_status",
                values_callable=lambda enum: [member.value for member in enum],
            ),
            nullable=False,
        )
    )
    marked_by: int = Field(foreign_key="instructors.id")
    marked_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))

    # Relationships
    enrollment_session: "EnrollmentSession" = Relationship(back_populates="attendance")
