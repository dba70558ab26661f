"""POST /v1/profile/validate - check wizard fields before moving to the next step"""

from typing import Optional
from fastapi import APIRouter, Query

from score_projector.api.v1.schemas import ProfileSchema, ValidationResponse, FieldErrorSchema
from score_projector.domain.validation import validate_profile

router = APIRouter()


@router.post("/profile/validate", response_model=ValidationResponse)
def validate_profile_step(
    profile: ProfileSchema,
    step: Optional[int] = Query(None, ge=1, le=4, description="Wizard step to check; omit to check all"),
):
    """
    Validate profile fields for a wizard step.

    Always returns 200; invalid input is reported in `errors`, one entry per field.
    """
    errors = validate_profile(profile.model_dump(), step)
    return ValidationResponse(
        valid=not errors,
        errors=[FieldErrorSchema(field=e.field, message=e.message) for e in errors],
    )
