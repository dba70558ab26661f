"""Score recovery timeline - chart coordinates derived from a projection"""

from typing import List
from score_projector.domain.models import Projection, TimelinePoint
from score_projector.utils.math_utils import clamp, round_half_up

# (label, fraction of recovery period, x position in percent)
MILESTONES = [
    ("Start", 0.0, 0),
    ("Dip", 0.10, 10),
    ("Stabilization", 0.25, 25),
    ("Recovery", 0.75, 75),
    ("Projected", 1.0, 100),
]


def build_timeline(projection: Projection) -> List[TimelinePoint]:
    """
    Build the five chart points for a projection.

    The y axis spans dip (0) to projected score (100). A flat projection
    uses a span of 1 so scaling never divides by zero.
    """
    dip = projection.milestone_dip_score
    span = (projection.projected_score - dip) or 1
    months = projection.recovery_months

    scores = {
        "Start": projection.initial_score,
        "Dip": dip,
        "Stabilization": projection.milestone_stabilization_score,
        "Recovery": projection.milestone_recovery_score,
        "Projected": projection.projected_score,
    }

    points = []
    for label, fraction, x in MILESTONES:
        score = scores[label]
        month = months * fraction
        if label == "Dip":
            y = 0.0
        elif label == "Projected":
            y = 100.0
        else:
            y = clamp((score - dip) / span * 100, 0, 100)

        time_label = f"{months} mo" if label == "Projected" else f"{round_half_up(month)} mo"
        points.append(TimelinePoint(label=label, score=score, month=month, time_label=time_label, x=x, y=y))

    return points
