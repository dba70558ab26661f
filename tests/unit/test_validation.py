"""Unit tests for wizard input validation"""

import pytest
from score_projector.domain.exceptions import ProfileValidationError
from score_projector.domain.models import ProgramPhase, Scenario
from score_projector.domain.validation import build_profile, ensure_valid, validate_profile


def test_validate_profile_accepts_complete_payload(profile_payload):
    assert validate_profile(profile_payload) == []


def test_validate_profile_reports_each_bad_field(profile_payload):
    """Test every violated field gets its own message"""
    payload = dict(profile_payload, fico_score=900, total_debt=500, monthly_income=0)

    errors = validate_profile(payload, step=1)

    assert [e.field for e in errors] == ["fico_score", "total_debt", "monthly_income"]
    assert errors[0].message == "Please enter a valid FICO Score (300-850)."
    assert errors[1].message == "Please enter a valid Total Debt (over $1,000)."
    assert len({e.message for e in errors}) == 3


@pytest.mark.parametrize("value", [None, "", "abc", True])
def test_validate_profile_blank_or_garbage_fico(profile_payload, value):
    errors = validate_profile(dict(profile_payload, fico_score=value), step=1)

    assert [e.field for e in errors] == ["fico_score"]


@pytest.mark.parametrize("bucket,valid", [(30, True), (100, True), ("70", True), (40, False), ("", False)])
def test_validate_profile_utilization_bucket(profile_payload, bucket, valid):
    errors = validate_profile(dict(profile_payload, utilization_bucket=bucket), step=1)

    assert (errors == []) is valid


def test_validate_profile_accepts_zero_counts(profile_payload):
    """Test zero positive accounts, age and credit limit are allowed"""
    payload = dict(profile_payload, positive_accounts=0, oldest_account_age_years=0, total_credit_limit=0)

    assert validate_profile(payload, step=1) == []


def test_validate_profile_existing_client_needs_months(profile_payload):
    """Test months in program is required only for existing clients"""
    payload = dict(profile_payload, scenario="progress-tracker", months_in_program=0)

    errors = validate_profile(payload, step=2)

    assert [e.field for e in errors] == ["months_in_program"]
    assert validate_profile(dict(payload, scenario="pre-enrollment"), step=2) == []
    assert validate_profile(dict(payload, months_in_program=14), step=2) == []


def test_validate_profile_scenario_step_choices(profile_payload):
    payload = dict(profile_payload, scenario="someday", program_timeline_months=18, program_phase="limbo")

    fields = [e.field for e in validate_profile(payload, step=2)]

    assert fields == ["scenario", "program_timeline_months", "program_phase"]


def test_validate_profile_step_scoping(profile_payload):
    """Test a step only checks the fields it owns"""
    payload = dict(profile_payload, fico_score=100, program_timeline_months=7)

    assert [e.field for e in validate_profile(payload, step=1)] == ["fico_score"]
    assert [e.field for e in validate_profile(payload, step=2)] == ["program_timeline_months"]
    assert validate_profile(payload, step=3) == []
    assert len(validate_profile(payload)) == 2


def test_ensure_valid_raises_with_all_errors(profile_payload):
    with pytest.raises(ProfileValidationError) as exc_info:
        ensure_valid(dict(profile_payload, accounts_enrolling=0, positive_accounts=-1))

    assert [e.field for e in exc_info.value.errors] == ["accounts_enrolling", "positive_accounts"]
    assert "accounts_enrolling" in str(exc_info.value)


def test_build_profile_converts_form_values(profile_payload):
    """Test string form values are parsed and defaults are applied"""
    payload = dict(profile_payload, fico_score="705", total_debt="15000.50", email="sam@example.com")
    payload.pop("secured_card")

    profile = build_profile(payload)

    assert profile.fico_score == 705
    assert profile.total_debt == 15000.5
    assert profile.scenario == Scenario.NEW_CLIENT
    assert profile.program_phase == ProgramPhase.NEGOTIATION
    assert profile.secured_card is True
    assert profile.months_in_program == 0
    assert profile.email == "sam@example.com"


def test_build_profile_rejects_invalid_input(profile_payload):
    with pytest.raises(ProfileValidationError):
        build_profile(dict(profile_payload, monthly_income=-5))


@pytest.mark.parametrize(
    "value,expected",
    [("false", False), ("no", False), ("0", False), ("off", False), ("true", True), ("Yes", True), (1, True), ("", True)],
)
def test_build_profile_parses_tool_flags(profile_payload, value, expected):
    """Test string flags from the form are parsed, not truth-tested"""
    profile = build_profile(dict(profile_payload, secured_card=value))

    assert profile.secured_card is expected


def test_validate_profile_tools_step_rejects_unknown_flag(profile_payload):
    payload = dict(profile_payload, credit_builder="maybe", authorized_user=[1])

    errors = validate_profile(payload, step=3)

    assert [e.field for e in errors] == ["credit_builder", "authorized_user"]
    assert errors[0].message == "Please choose yes or no for this tool."
    with pytest.raises(ProfileValidationError):
        build_profile(payload)
