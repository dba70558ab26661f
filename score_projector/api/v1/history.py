"""GET /v1/simulations/history - Fetch a user's saved simulations"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from score_projector.api.v1.schemas import HistoryResponse, HistoryItem
from score_projector.config import settings
from score_projector.infrastructure.database.session import get_db
from score_projector.infrastructure.database.repositories import SimulationRepository

router = APIRouter()


@router.get("/simulations/history", response_model=HistoryResponse)
def get_simulation_history(
    user_id: str = Query(..., min_length=1, description="User identifier"),
    db: Session = Depends(get_db),
):
    """
    Retrieve recent simulations for a user, newest first.

    Returns:
        Stored input profiles with their projection results
    """
    simulation_repo = SimulationRepository(db)
    simulations = simulation_repo.get_simulations_by_user(user_id, settings.app_id, limit=settings.history_limit)

    history_items = [
        HistoryItem(
            simulation_id=str(s.id),
            scenario=s.scenario,
            projected_score=s.projected_score,
            input=s.input,
            results=s.results,
            created_at=s.created_at.isoformat(),
        )
        for s in simulations
    ]

    return HistoryResponse(user_id=user_id, simulations=history_items)
