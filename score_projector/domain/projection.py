"""Score projection engine - core heuristic behind every simulation"""

from dataclasses import replace
from typing import Callable, Tuple
from score_projector.domain.models import Profile, Projection, Scenario, WeightVector
from score_projector.utils.math_utils import round_half_up, round_to

BASE_WEIGHTS = WeightVector(
    payment_history=0.35,
    utilization=0.30,
    account_age=0.15,
    credit_mix=0.10,
    new_credit=0.10,
)

# Share of enrolled debt expected to be forgiven through settlement
SETTLEMENT_SAVINGS_RATE = 0.55
# Annual payment on the remaining debt after the program, as a fraction of the balance
POST_PROGRAM_PAYMENT_RATE = 0.05

TOOL_GAINS = {
    "secured_card": 30,
    "credit_builder": 25,
    "authorized_user": 10,
}


def initial_score(profile: Profile) -> int:
    """Starting score; anything at or below the floor is treated as an unknown 500"""
    return profile.fico_score if profile.fico_score > 300 else 500


def _adjust_for_score_band(weights: WeightVector, profile: Profile, fico: int) -> WeightVector:
    # Override, not nudge: the band replaces the base values outright
    if fico >= 740:
        return replace(weights, payment_history=0.25, utilization=0.40, account_age=0.20)
    elif fico <= 580:
        return replace(weights, payment_history=0.45, utilization=0.25, new_credit=0.15)
    return weights


def _adjust_for_debt_to_income(weights: WeightVector, profile: Profile, fico: int) -> WeightVector:
    if profile.monthly_income > 0:
        dti = profile.total_debt / (profile.monthly_income * 12)
    else:
        dti = 1
    if dti > 0.45:
        return replace(
            weights,
            utilization=min(0.45, weights.utilization + 0.05),
            payment_history=max(0.25, weights.payment_history - 0.05),
        )
    return weights


def _adjust_for_overall_utilization(weights: WeightVector, profile: Profile, fico: int) -> WeightVector:
    if profile.total_credit_limit <= 0:
        return weights
    overall_utilization_pct = (profile.total_debt / profile.total_credit_limit) * 100
    if overall_utilization_pct < 30:
        return replace(weights, utilization=max(0.20, weights.utilization - 0.05))
    return weights


def _adjust_for_positive_accounts(weights: WeightVector, profile: Profile, fico: int) -> WeightVector:
    if profile.positive_accounts > 0:
        return replace(
            weights,
            payment_history=max(0.30, weights.payment_history - 0.05),
            credit_mix=min(0.20, weights.credit_mix + 0.05),
        )
    return weights


def _adjust_for_account_age(weights: WeightVector, profile: Profile, fico: int) -> WeightVector:
    if profile.oldest_account_age_years < 4:
        return replace(
            weights,
            account_age=max(0.05, weights.account_age - 0.05),
            new_credit=min(0.20, weights.new_credit + 0.05),
        )
    elif profile.oldest_account_age_years > 10:
        return replace(weights, account_age=min(0.25, weights.account_age + 0.05))
    return weights


# Each step reads the clamped output of the previous one, so order is fixed
WEIGHT_ADJUSTMENTS: Tuple[Callable[[WeightVector, Profile, int], WeightVector], ...] = (
    _adjust_for_score_band,
    _adjust_for_debt_to_income,
    _adjust_for_overall_utilization,
    _adjust_for_positive_accounts,
    _adjust_for_account_age,
)


WEIGHT_FIELDS = ("payment_history", "utilization", "account_age", "credit_mix", "new_credit")


def normalize_weights(weights: WeightVector) -> WeightVector:
    """
    Scale weights to sum to 1.0, each rounded to 4 decimal places.

    Rounding can leave the total a few ten-thousandths off; that residual is
    moved onto the largest weight so the vector sums to exactly 1.0.
    """
    total = weights.total()
    scaled = {name: round_to(getattr(weights, name) / total, 4) for name in WEIGHT_FIELDS}

    residual = round_to(1.0 - sum(scaled.values()), 4)
    if residual:
        largest = max(WEIGHT_FIELDS, key=lambda name: scaled[name])
        scaled[largest] = round_to(scaled[largest] + residual, 4)

    return WeightVector(**scaled)


def raw_weights(profile: Profile) -> WeightVector:
    """Weights after every adjustment step, before normalization"""
    fico = initial_score(profile)
    weights = BASE_WEIGHTS
    for adjust in WEIGHT_ADJUSTMENTS:
        weights = adjust(weights, profile, fico)
    return weights


def derive_weights(profile: Profile) -> WeightVector:
    """
    Derive factor weights for a profile.

    Starts from BASE_WEIGHTS and applies WEIGHT_ADJUSTMENTS in order:
    - Score band: >= 740 leans on utilization, <= 580 leans on payment history
    - DTI > 0.45: utilization matters more, payment history less
    - Overall utilization under 30% of total limit: utilization matters less
    - Positive accounts: payment history relaxes, credit mix counts more
    - Thin file (< 4 years): new credit counts more; deep file (> 10 years): age counts more
    """
    return normalize_weights(raw_weights(profile))


def compute_worst_case_impact(profile: Profile, weights: WeightVector) -> int:
    """
    Expected score drop for a new client before debt resolution starts.

    Higher scores have further to fall; positive tradelines and a long
    history cushion the dip. Always within [20, 150].
    """
    utilization = profile.utilization_bucket or 100
    utilization_factor = max(0, (100 - utilization) / 10)
    drop = utilization_factor * 5 * (weights.utilization * 2)

    severity_factor = max(0, (profile.fico_score - 500) / 20)
    drop += severity_factor * 5

    drop -= (profile.positive_accounts or 0) * 10
    if profile.oldest_account_age_years > 10:
        drop -= 15

    return min(150, max(20, round_half_up(drop)))


def tool_gain(profile: Profile) -> int:
    """Points added by credit-building tools the user plans to use"""
    return sum(points for flag, points in TOOL_GAINS.items() if getattr(profile, flag))


def post_program_dti_pct(total_debt: float, monthly_income: float) -> float:
    """Debt-to-income percentage once the remaining balance is on a repayment plan"""
    if monthly_income <= 0:
        return 0.0
    remaining_debt = total_debt - total_debt * SETTLEMENT_SAVINGS_RATE
    monthly_payment = remaining_debt * POST_PROGRAM_PAYMENT_RATE / 12
    dti_pct = (monthly_payment / monthly_income) * 100
    return round_to(max(0.0, min(50.0, dti_pct)), 1)


def run_simulation(profile: Profile) -> Projection:
    """
    Main entry point: project the score trajectory for a validated profile.

    New clients take a worst-case dip first and recover over the full program
    timeline. Existing clients start from their current score and recover over
    whatever is left of the program (at least 12 months).
    """
    start = initial_score(profile)
    weights = derive_weights(profile)

    if profile.scenario == Scenario.NEW_CLIENT:
        impact_penalty = compute_worst_case_impact(profile, weights)
        low_point = max(300, start - impact_penalty)
        recovery_months = profile.program_timeline_months
    else:
        impact_penalty = 0
        low_point = start
        recovery_months = max(12, profile.program_timeline_months - profile.months_in_program)

    # Potential gain: utilization resets as debts settle, history and age accrue over time
    pace = recovery_months / 36
    total_gain = weights.utilization * 250
    total_gain += weights.payment_history * 150 * pace
    total_gain += weights.account_age * 50 * pace
    total_gain += tool_gain(profile)

    projected = max(300, min(850, round_half_up(low_point + total_gain)))

    gain_span = projected - low_point
    stabilization = min(start, low_point + round_half_up(gain_span * 0.15))
    recovery = low_point + round_half_up(gain_span * 0.65)

    return Projection(
        initial_score=start,
        low_point_score=low_point,
        projected_score=projected,
        score_gain=projected - start,
        recovery_months=recovery_months,
        post_program_dti_pct=post_program_dti_pct(profile.total_debt, profile.monthly_income),
        estimated_savings_usd=profile.total_debt * SETTLEMENT_SAVINGS_RATE,
        impact_penalty=impact_penalty,
        milestone_dip_score=low_point,
        milestone_stabilization_score=stabilization,
        milestone_recovery_score=recovery,
        weights=weights,
        utilization_bucket=profile.utilization_bucket,
    )
