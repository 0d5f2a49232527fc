from typing import Optional, List, TYPE_CHECKING
from datetime import date, datetime, timezone

from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, JSON

if TYPE_CHECKING:
    from attendance_engine.models.customer import Enrollment
    from attendance_engine.models.attendance import AttendanceRecord


class EnrollmentSession(SQLModel, table=True):
    """One customer's participation in one recurring class session."""
    __tablename__ = "enrollment_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    enrollment_id: int = Field(foreign_key="enrollments.id", index=True)
    # Class session id from the scheduling system (no local table)
    session_id: int = Field(index=True)

    # Stored as text so unknown values reach the eligibility resolver
    enrollment_type: str
    trial_date: Optional[date] = None
    # ISO "YYYY-MM-DD" strings
    partial_dates: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    enrollment: "Enrollment" = Relationship(back_populates="sessions")
    attendance: List["AttendanceRecord"] = Relationship(
        back_populates="enrollment_session",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
