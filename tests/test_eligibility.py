from datetime import date, timedelta

import pytest

from attendance_engine.core.dates import parse_iso_date
from attendance_engine.core.exceptions import ValidationError
from attendance_engine.services.eligibility import (
    Full,
    Partial,
    Trial,
    eligible,
    is_eligible,
    rule_for,
)

SAMPLE_DATES = [date(2024, 3, 5) + timedelta(days=n) for n in range(0, 60, 7)] + [date(2023, 12, 31)]


@pytest.mark.parametrize("query_date", SAMPLE_DATES)
def test_full_enrollment_is_always_eligible(query_date):
    assert is_eligible("full", query_date) is True
    assert is_eligible("Full", query_date, trial_date="2020-01-01", partial_dates=[]) is True


@pytest.mark.parametrize("query_date", SAMPLE_DATES)
def test_trial_enrollment_matches_only_its_trial_date(query_date):
    trial = date(2024, 3, 19)
    assert is_eligible("trial", query_date, trial_date=trial) == (query_date == trial)


@pytest.mark.parametrize("query_date", SAMPLE_DATES)
def test_partial_enrollment_is_set_membership(query_date):
    chosen = {date(2024, 3, 5), date(2024, 3, 26), date(2024, 4, 16)}
    assert is_eligible("partial", query_date, partial_dates=[d.isoformat() for d in chosen]) == (
        query_date in chosen
    )


def test_trial_scenario():
    assert is_eligible("trial", "2024-03-05", trial_date="2024-03-05") is True
    assert is_eligible("trial", "2024-03-12", trial_date="2024-03-05") is False


def test_partial_scenario():
    partial_dates = ["2024-03-05", "2024-03-19"]
    assert is_eligible("partial", "2024-03-12", partial_dates=partial_dates) is False
    assert is_eligible("partial", "2024-03-19", partial_dates=partial_dates) is True


def test_trial_is_exact_match_not_on_or_after():
    assert is_eligible("trial", "2024-03-06", trial_date="2024-03-05") is False


@pytest.mark.parametrize("partial_dates", [None, []])
def test_partial_without_dates_is_never_eligible(partial_dates):
    assert is_eligible("partial", "2024-03-05", partial_dates=partial_dates) is False


def test_trial_without_trial_date_is_never_eligible():
    assert is_eligible("trial", "2024-03-05") is False


def test_unrecognized_type_fails_loudly():
    with pytest.raises(ValidationError):
        is_eligible("weekly", "2024-03-05")


def test_rule_for_builds_tagged_variants():
    assert rule_for("full") == Full()
    assert rule_for("trial", "2024-03-05") == Trial(date(2024, 3, 5))
    assert rule_for("partial", partial_dates=["2024-03-05"]) == Partial(frozenset({date(2024, 3, 5)}))


def test_eligible_rejects_foreign_rule():
    with pytest.raises(ValidationError):
        eligible("full", date(2024, 3, 5))


def test_malformed_partial_date_is_rejected():
    with pytest.raises(ValidationError):
        rule_for("partial", partial_dates=["2024-3-5"])


@pytest.mark.parametrize("value", ["2024-3-5", "20240305", "2024-02-30", "05/03/2024", "", None])
def test_parse_iso_date_rejects_non_canonical(value):
    with pytest.raises(ValidationError):
        parse_iso_date(value)


def test_parse_iso_date_accepts_canonical():
    assert parse_iso_date("2024-03-05") == date(2024, 3, 5)
    assert parse_iso_date(date(2024, 3, 5)) == date(2024, 3, 5)
