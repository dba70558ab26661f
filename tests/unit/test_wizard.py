"""Unit tests for the wizard state container"""

import pytest
from score_projector.domain.exceptions import ProfileValidationError
from score_projector.domain.projection import run_simulation
from score_projector.domain.validation import build_profile, validate_profile
from score_projector.domain.wizard import WizardSession, default_draft


def test_wizard_starts_with_defaults():
    session = WizardSession()

    assert session.current_step == 1
    assert session.step_name == "Profile"
    assert session.draft["program_timeline_months"] == 36
    assert session.draft["scenario"] == "pre-enrollment"
    assert session.draft["secured_card"] is True
    assert session.projection is None


def test_wizard_blocks_invalid_step():
    """Test next() does not advance past a step with invalid fields"""
    session = WizardSession()

    with pytest.raises(ProfileValidationError) as exc_info:
        session.next()

    assert session.current_step == 1
    assert "fico_score" in [e.field for e in exc_info.value.errors]


def test_wizard_full_pass(profile_payload):
    """Test Profile -> Scenario -> Tools -> Results computes the projection"""
    session = WizardSession()
    session.update(**profile_payload)

    assert session.next() == 2
    assert session.next() == 3
    assert session.progress_pct == 100
    assert session.next() == 4

    assert session.step_name == "Results"
    assert session.projection is not None
    assert session.projection.projected_score == 741
    # Results is terminal
    assert session.next() == 4


def test_wizard_existing_client_needs_months(profile_payload):
    session = WizardSession()
    session.update(**profile_payload)
    session.next()
    session.update(scenario="progress-tracker")

    with pytest.raises(ProfileValidationError):
        session.next()

    session.update(months_in_program=10)
    assert session.next() == 3


def test_wizard_previous_and_reset(profile_payload):
    session = WizardSession()
    session.update(**profile_payload)

    assert session.previous() == 1  # nothing before the first step

    session.next()
    session.next()
    assert session.previous() == 2

    session.next()
    session.next()
    assert session.previous() == 4  # results page only leaves via reset

    session.reset()
    assert session.current_step == 1
    assert session.projection is None
    assert session.draft["fico_score"] == ""


def test_wizard_matches_api_validation(profile_payload):
    """Test each step blocks on exactly the fields the per-step validator reports"""
    session = WizardSession()

    with pytest.raises(ProfileValidationError) as exc_info:
        session.next()
    assert exc_info.value.errors == validate_profile(default_draft(), step=1)

    session.update(**profile_payload)
    session.next()
    session.next()
    session.update(secured_card="maybe")

    with pytest.raises(ProfileValidationError) as exc_info:
        session.next()
    assert [e.field for e in exc_info.value.errors] == ["secured_card"]
    assert session.current_step == 3

    session.update(secured_card="false")
    assert session.next() == 4
    assert session.projection == run_simulation(build_profile(profile_payload))
