from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, timezone

if TYPE_CHECKING:
    from attendance_engine.models.enrollment import EnrollmentSession


class Customer(SQLModel, table=True):
    """Customer display record. Owned by the booking system; read-only here."""
    __tablename__ = "customers"

    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str
    surname: str
    email: str = Field(index=True)
    contact_no: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    enrollments: List["Enrollment"] = Relationship(back_populates="customer")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.surname}"


class Enrollment(SQLModel, table=True):
    """An enrollment owns one or more enrollment sessions for a single customer."""
    __tablename__ = "enrollments"

    id: Optional[int] = Field(default=None, primary_key=True)
    customer_id: int = Field(foreign_key="customers.id")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    customer: "Customer" = Relationship(back_populates="enrollments")
    sessions: List["EnrollmentSession"] = Relationship(back_populates="enrollment")
