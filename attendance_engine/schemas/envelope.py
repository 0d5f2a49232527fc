from typing import Generic, Optional, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from attendance_engine.core.exceptions import AttendanceError

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Uniform result wrapper returned by every attendance endpoint."""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None
    detail: Optional[str] = None


def ok(data: T) -> Envelope:
    return Envelope(success=True, data=data)


def failure(exc: AttendanceError, message: str) -> JSONResponse:
    body = Envelope(success=False, error=message, error_kind=exc.kind, detail=str(exc) or None)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )
