"""Input validation for the projection wizard, grouped by step"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple
from score_projector.domain.models import (
    FieldError,
    Profile,
    ProgramPhase,
    Scenario,
    PROGRAM_TIMELINES,
    UTILIZATION_BUCKETS,
)
from score_projector.domain.exceptions import ProfileValidationError

PROFILE_STEP = 1
SCENARIO_STEP = 2
TOOLS_STEP = 3


def _as_number(value: Any) -> Optional[float]:
    """Parse form input; blanks, booleans and garbage become None"""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


TRUE_STRINGS = ("true", "on", "yes", "1")
FALSE_STRINGS = ("false", "off", "no", "0")
TOOL_FLAGS = {"secured_card": True, "credit_builder": False, "authorized_user": False}


def _as_bool(value: Any, default: bool) -> Optional[bool]:
    """Parse a yes/no form value; blanks take the default, unrecognized values become None"""
    if isinstance(value, bool):
        return value
    if value is None or value == "":
        return default
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    return None


def _check(data: Mapping[str, Any], field: str, valid: Callable[[float], bool], message: str) -> Optional[FieldError]:
    number = _as_number(data.get(field))
    if number is None or not valid(number):
        return FieldError(field=field, message=message)
    return None


# (field, predicate, message) in the order the form presents them
PROFILE_RULES: List[Tuple[str, Callable[[float], bool], str]] = [
    ("fico_score", lambda v: 300 <= v <= 850, "Please enter a valid FICO Score (300-850)."),
    ("total_debt", lambda v: v > 1000, "Please enter a valid Total Debt (over $1,000)."),
    ("accounts_enrolling", lambda v: v >= 1, "Please enter at least 1 account for enrollment."),
    ("monthly_income", lambda v: v > 0, "Please enter a valid Monthly Income."),
    ("utilization_bucket", lambda v: v in UTILIZATION_BUCKETS, "Please select your Credit Utilization range."),
    ("positive_accounts", lambda v: v >= 0, "Please enter a valid number of positive accounts (0 or more)."),
    ("oldest_account_age_years", lambda v: v >= 0, "Please enter a valid age for your oldest account (0 or more)."),
    (
        "total_credit_limit",
        lambda v: v >= 0,
        "Please enter a valid Total Credit Limit (0 or more). This is crucial for accuracy.",
    ),
]


def _validate_profile_step(data: Mapping[str, Any]) -> List[FieldError]:
    errors = [_check(data, field, rule, message) for field, rule, message in PROFILE_RULES]
    return [e for e in errors if e is not None]


def _validate_scenario_step(data: Mapping[str, Any]) -> List[FieldError]:
    errors = []

    scenario = data.get("scenario", Scenario.NEW_CLIENT)
    try:
        scenario = Scenario(scenario)
    except ValueError:
        errors.append(FieldError(field="scenario", message="Please select a projection scenario."))

    timeline = data.get("program_timeline_months", 36)
    error = _check(
        {"program_timeline_months": timeline},
        "program_timeline_months",
        lambda v: v in PROGRAM_TIMELINES,
        "Please select a program timeline between 12 and 60 months.",
    )
    if error:
        errors.append(error)

    phase = data.get("program_phase")
    if phase not in (None, "") and phase not in tuple(p.value for p in ProgramPhase):
        errors.append(FieldError(field="program_phase", message="Please select your current program phase."))

    if scenario == Scenario.EXISTING_CLIENT:
        error = _check(
            data,
            "months_in_program",
            lambda v: v > 0,
            "Please enter how many months you've been in the program.",
        )
        if error:
            errors.append(error)

    return errors


def _validate_tools_step(data: Mapping[str, Any]) -> List[FieldError]:
    return [
        FieldError(field=flag, message="Please choose yes or no for this tool.")
        for flag, default in TOOL_FLAGS.items()
        if _as_bool(data.get(flag), default) is None
    ]


STEP_VALIDATORS: Dict[int, Callable[[Mapping[str, Any]], List[FieldError]]] = {
    PROFILE_STEP: _validate_profile_step,
    SCENARIO_STEP: _validate_scenario_step,
    TOOLS_STEP: _validate_tools_step,
}


def validate_profile(data: Mapping[str, Any], step: Optional[int] = None) -> List[FieldError]:
    """
    Validate raw wizard input.

    Args:
        data: Field name -> raw value, as submitted by the form
        step: Only check fields owned by this wizard step (default: all steps)

    Returns:
        One FieldError per violated field, empty when the input is valid
    """
    if step is not None:
        validator = STEP_VALIDATORS.get(step)
        return validator(data) if validator else []

    errors: List[FieldError] = []
    for validator in STEP_VALIDATORS.values():
        errors.extend(validator(data))
    return errors


def ensure_valid(data: Mapping[str, Any], step: Optional[int] = None) -> None:
    """Raise ProfileValidationError listing every violated field"""
    errors = validate_profile(data, step)
    if errors:
        raise ProfileValidationError(errors)


def build_profile(data: Mapping[str, Any]) -> Profile:
    """
    Validate raw input across all steps and convert it to a Profile.

    Raises:
        ProfileValidationError: If any field fails validation
    """
    ensure_valid(data)

    def number(field: str, default: float = 0) -> float:
        value = _as_number(data.get(field))
        return default if value is None else value

    return Profile(
        fico_score=int(number("fico_score")),
        total_debt=number("total_debt"),
        monthly_income=number("monthly_income"),
        utilization_bucket=int(number("utilization_bucket")),
        accounts_enrolling=int(number("accounts_enrolling")),
        positive_accounts=int(number("positive_accounts")),
        oldest_account_age_years=number("oldest_account_age_years"),
        total_credit_limit=number("total_credit_limit"),
        program_timeline_months=int(number("program_timeline_months", 36)),
        scenario=Scenario(data.get("scenario", Scenario.NEW_CLIENT)),
        months_in_program=int(number("months_in_program")),
        secured_card=_as_bool(data.get("secured_card"), TOOL_FLAGS["secured_card"]),
        credit_builder=_as_bool(data.get("credit_builder"), TOOL_FLAGS["credit_builder"]),
        authorized_user=_as_bool(data.get("authorized_user"), TOOL_FLAGS["authorized_user"]),
        settled_accounts=int(number("settled_accounts")),
        program_phase=ProgramPhase(data.get("program_phase") or ProgramPhase.NEGOTIATION),
        first_name=data.get("first_name") or "",
        email=data.get("email") or "",
        phone=data.get("phone") or "",
    )
