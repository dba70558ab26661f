"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class ProfileSchema(BaseModel):
    """
    Wizard input, accepted as the form sends it.

    Numbers and yes/no flags stay loosely typed (blank strings, "705", "false")
    so that parsing and range checks happen in the domain validator, which
    reports a readable message per field.
    """

    fico_score: Optional[Any] = None
    total_debt: Optional[Any] = None
    monthly_income: Optional[Any] = None
    utilization_bucket: Optional[Any] = Field(None, description="30, 50, 70, 90 or 100")
    accounts_enrolling: Optional[Any] = None
    positive_accounts: Optional[Any] = None
    oldest_account_age_years: Optional[Any] = None
    total_credit_limit: Optional[Any] = None
    program_timeline_months: Optional[Any] = 36
    scenario: str = Field("pre-enrollment", description="pre-enrollment | progress-tracker")
    months_in_program: Optional[Any] = None
    settled_accounts: Optional[Any] = None
    program_phase: str = "negotiation"
    secured_card: Any = True
    credit_builder: Any = False
    authorized_user: Any = False
    first_name: str = ""
    email: str = ""
    phone: str = ""


class SimulationRequest(BaseModel):
    """Request body for POST /v1/simulations"""

    user_id: Optional[str] = Field(None, description="Opaque user identifier; generated when omitted")
    profile: ProfileSchema


class WeightsSchema(BaseModel):
    payment_history: float
    utilization: float
    account_age: float
    credit_mix: float
    new_credit: float


class ProjectionSchema(BaseModel):
    """Projected score trajectory and KPIs"""

    initial_score: int
    low_point_score: int
    projected_score: int
    score_gain: int
    recovery_months: int
    recovery_time: str
    post_program_dti_pct: float
    estimated_savings_usd: float
    impact_penalty: int
    milestone_dip_score: int
    milestone_stabilization_score: int
    milestone_recovery_score: int
    weights: WeightsSchema
    utilization_bucket: Optional[int] = None


class TimelinePointSchema(BaseModel):
    """Single chart point"""

    label: str
    score: int
    month: float
    time_label: str
    x: float
    y: float


class SimulationResponse(BaseModel):
    """Response for POST /v1/simulations"""

    simulation_id: Optional[str] = None
    user_id: str
    saved: bool
    projection: ProjectionSchema
    timeline: List[TimelinePointSchema]


class FieldErrorSchema(BaseModel):
    field: str
    message: str


class ValidationResponse(BaseModel):
    """Response for POST /v1/profile/validate"""

    valid: bool
    errors: List[FieldErrorSchema]


class HistoryItem(BaseModel):
    """Single stored simulation"""

    simulation_id: str
    scenario: str
    projected_score: int
    input: Dict[str, Any]
    results: Dict[str, Any]
    created_at: str


class HistoryResponse(BaseModel):
    """Response for GET /v1/simulations/history"""

    user_id: str
    simulations: List[HistoryItem]
