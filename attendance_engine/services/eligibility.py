"""
Eligibility resolution for enrollment sessions.

An enrollment session is tracked on a date according to its enrollment
type: full enrollments on every date the class runs, trial enrollments on
their single trial date, partial enrollments on their chosen dates. The
stored ``(enrollment_type, trial_date, partial_dates)`` triple is turned into
one of three rule objects so that evaluation is exhaustive.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, Iterable, Optional, Union

from attendance_engine.core.dates import parse_iso_date
from attendance_engine.core.exceptions import ValidationError
from attendance_engine.models.enums import EnrollmentType


@dataclass(frozen=True)
class Full:
    pass


@dataclass(frozen=True)
class Trial:
    on: Optional[date] = None


@dataclass(frozen=True)
class Partial:
    dates: FrozenSet[date] = field(default_factory=frozenset)


EligibilityRule = Union[Full, Trial, Partial]


def parse_enrollment_type(value: Union[str, EnrollmentType]) -> EnrollmentType:
    if isinstance(value, EnrollmentType):
        return value
    try:
        return EnrollmentType(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unrecognized enrollment type: {value!r}")


def rule_for(
    enrollment_type: Union[str, EnrollmentType],
    trial_date: Optional[Union[str, date]] = None,
    partial_dates: Optional[Iterable[Union[str, date]]] = None,
) -> EligibilityRule:
    """Build the eligibility rule for stored enrollment data."""
    kind = parse_enrollment_type(enrollment_type)
    if kind is EnrollmentType.FULL:
        return Full()
    if kind is EnrollmentType.TRIAL:
        on = parse_iso_date(trial_date, "trial_date") if trial_date is not None else None
        return Trial(on)
    return Partial(frozenset(parse_iso_date(d, "partial_dates") for d in (partial_dates or ())))


def eligible(rule: EligibilityRule, query_date: date) -> bool:
    if isinstance(rule, Full):
        # Occurrence dates belong to the scheduling system
        return True
    if isinstance(rule, Trial):
        return rule.on is not None and rule.on == query_date
    if isinstance(rule, Partial):
        return query_date in rule.dates
    raise ValidationError(f"Unsupported eligibility rule: {rule!r}")


def is_eligible(
    enrollment_type: Union[str, EnrollmentType],
    query_date: Union[str, date],
    trial_date: Optional[Union[str, date]] = None,
    partial_dates: Optional[Iterable[Union[str, date]]] = None,
) -> bool:
    """Whether an enrollment of this type is tracked on ``query_date``."""
    rule = rule_for(enrollment_type, trial_date, partial_dates)
    return eligible(rule, parse_iso_date(query_date))


def rule_for_session(enrollment_session) -> EligibilityRule:
    """Rule for a stored row; errors name the enrollment session."""
    try:
        return rule_for(
            enrollment_session.enrollment_type,
            enrollment_session.trial_date,
            enrollment_session.partial_dates,
        )
    except ValidationError as exc:
        raise ValidationError(f"Enrollment session {enrollment_session.id}: {exc}") from exc
