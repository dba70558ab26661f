"""Domain models - pure Python dataclasses representing the projection inputs and outputs"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional

UTILIZATION_BUCKETS = (30, 50, 70, 90, 100)
PROGRAM_TIMELINES = (12, 24, 36, 48, 60)


class Scenario(str, Enum):
    """Which projection the user asked for"""

    NEW_CLIENT = "pre-enrollment"
    EXISTING_CLIENT = "progress-tracker"


class ProgramPhase(str, Enum):
    """Where an existing client currently sits in the program"""

    NEGOTIATION = "negotiation"
    SETTLEMENT = "settlement"
    GRADUATION = "graduation"


@dataclass
class Profile:
    """Credit profile collected by the wizard"""

    fico_score: int
    total_debt: float
    monthly_income: float
    utilization_bucket: int  # midpoint of the selected range, see UTILIZATION_BUCKETS
    accounts_enrolling: int
    positive_accounts: int
    oldest_account_age_years: float
    total_credit_limit: float
    program_timeline_months: int = 36
    scenario: Scenario = Scenario.NEW_CLIENT
    months_in_program: int = 0
    secured_card: bool = True
    credit_builder: bool = False
    authorized_user: bool = False

    # Informational only, never read by the projection
    settled_accounts: int = 0
    program_phase: ProgramPhase = ProgramPhase.NEGOTIATION
    first_name: str = ""
    email: str = ""
    phone: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["scenario"] = self.scenario.value
        data["program_phase"] = self.program_phase.value
        return data


@dataclass(frozen=True)
class WeightVector:
    """Relative importance of each score factor, normalized to sum to 1.0"""

    payment_history: float
    utilization: float
    account_age: float
    credit_mix: float
    new_credit: float

    def total(self) -> float:
        return (
            self.payment_history
            + self.utilization
            + self.account_age
            + self.credit_mix
            + self.new_credit
        )


@dataclass(frozen=True)
class Projection:
    """Output of a single simulation run"""

    initial_score: int
    low_point_score: int
    projected_score: int
    score_gain: int
    recovery_months: int
    post_program_dti_pct: float
    estimated_savings_usd: float
    impact_penalty: int
    milestone_dip_score: int
    milestone_stabilization_score: int
    milestone_recovery_score: int
    weights: WeightVector
    utilization_bucket: Optional[int] = None

    @property
    def recovery_time(self) -> str:
        return f"{self.recovery_months} months"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["recovery_time"] = self.recovery_time
        return data


@dataclass(frozen=True)
class TimelinePoint:
    """Single point on the score recovery chart"""

    label: str
    score: int
    month: float
    time_label: str
    x: float  # percent along the time axis
    y: float  # percent of the gain span, 0 at the dip


@dataclass(frozen=True)
class FieldError:
    """Human-readable validation failure for one input field"""

    field: str
    message: str
