"""
Four-step projection wizard: Profile -> Scenario -> Tools -> Results.

This is the client-side state model the web form mirrors. The service itself is
stateless: the form checks each step against POST /v1/profile/validate?step=N
and submits the finished draft to POST /v1/simulations. WizardSession drives
the same validate_profile, build_profile and run_simulation functions those
endpoints call, so a draft it accepts is one the API accepts.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from score_projector.domain.models import Projection
from score_projector.domain.projection import run_simulation
from score_projector.domain.validation import TOOLS_STEP, build_profile, ensure_valid

RESULTS_STEP = 4

STEP_NAMES = {1: "Profile", 2: "Scenario", 3: "Tools", 4: "Results"}


def default_draft() -> Dict[str, Any]:
    """Field values a fresh wizard starts with"""
    return {
        "fico_score": "",
        "total_debt": "",
        "monthly_income": "",
        "utilization_bucket": "",
        "accounts_enrolling": "",
        "positive_accounts": "",
        "oldest_account_age_years": "",
        "total_credit_limit": "",
        "program_timeline_months": 36,
        "scenario": "pre-enrollment",
        "months_in_program": "",
        "settled_accounts": "",
        "program_phase": "negotiation",
        "secured_card": True,
        "credit_builder": False,
        "authorized_user": False,
        "first_name": "",
        "email": "",
        "phone": "",
    }


@dataclass
class WizardSession:
    """
    State container for one pass through the wizard, held by the client.

    Transitions are guarded: next() only advances when the current step's
    fields are valid, and leaving the Tools step runs the simulation.
    """

    current_step: int = 1
    draft: Dict[str, Any] = field(default_factory=default_draft)
    projection: Optional[Projection] = None

    @property
    def step_name(self) -> str:
        return STEP_NAMES[self.current_step]

    @property
    def progress_pct(self) -> float:
        """Progress bar fill for the input steps; the results page has no bar"""
        return min(self.current_step, TOOLS_STEP) / TOOLS_STEP * 100

    def update(self, **fields: Any) -> None:
        self.draft.update(fields)

    def next(self) -> int:
        """
        Advance one step.

        Raises:
            ProfileValidationError: Current step has invalid fields; step is unchanged
        """
        if self.current_step >= RESULTS_STEP:
            return self.current_step

        if self.current_step == TOOLS_STEP:
            self.projection = run_simulation(build_profile(self.draft))
        else:
            ensure_valid(self.draft, step=self.current_step)

        self.current_step += 1
        return self.current_step

    def previous(self) -> int:
        """Go back one step; not allowed from the first step or the results page"""
        if 1 < self.current_step < RESULTS_STEP:
            self.current_step -= 1
            self.projection = None
        return self.current_step

    def reset(self) -> None:
        self.current_step = 1
        self.draft = default_draft()
        self.projection = None
