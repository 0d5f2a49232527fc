from fastapi import status


class AttendanceError(Exception):
    """Base exception for attendance engine failures."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    @property
    def kind(self) -> str:
        return type(self).__name__


class NotFoundError(AttendanceError):
    """Raised when an enrollment session or instructor record does not exist."""
    status_code = status.HTTP_404_NOT_FOUND


class AuthorizationError(AttendanceError):
    """Raised when the acting principal does not resolve to an instructor."""
    status_code = status.HTTP_403_FORBIDDEN


class ValidationError(AttendanceError):
    """Raised for malformed dates, unknown statuses or enrollment types."""
    status_code = 422


class StoreError(AttendanceError):
    """Raised when the underlying store fails."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
