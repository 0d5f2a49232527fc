import re
from datetime import date, datetime
from typing import Union

from attendance_engine.core.exceptions import ValidationError

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: Union[str, date], field: str = "date") -> date:
    """
    Parse a canonical ``YYYY-MM-DD`` date.

    ``date`` instances pass through; non-canonical strings such as
    ``2024-3-5`` or ``20240305`` are rejected.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not ISO_DATE.match(value):
        raise ValidationError(f"{field} must be a YYYY-MM-DD date, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"{field} is not a valid calendar date: {value!r}")
