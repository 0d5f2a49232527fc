from enum import Enum


class EnrollmentType(str, Enum):
    FULL = "full"
    TRIAL = "trial"
    PARTIAL = "partial"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
