# attendance_engine/db/base.py

from attendance_engine.models.customer import Customer, Enrollment
from attendance_engine.models.enrollment import EnrollmentSession
from attendance_engine.models.attendance import AttendanceRecord
from attendance_engine.models.instructor import Instructor

# This list tells Alembic what to look for
__all__ = [
    "Customer",
    "Enrollment",
    "EnrollmentSession",
    "AttendanceRecord",
    "Instructor",
]
