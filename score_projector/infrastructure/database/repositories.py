"""Data access layer for stored simulations"""

from typing import List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from score_projector.infrastructure.database.models import SimulationRecord
from score_projector.domain.models import Profile, Projection
from score_projector.domain.exceptions import PersistenceError


class SimulationRepository:
    """Repository for simulation (input, results) pairs"""

    def __init__(self, db: Session):
        self.db = db

    def create_simulation(
        self,
        user_id: str,
        app_id: str,
        profile: Profile,
        projection: Projection,
    ) -> SimulationRecord:
        """
        Persist a simulation to the database.

        Raises:
            PersistenceError: If the write fails; the session is rolled back
        """
        db_simulation = SimulationRecord(
            user_id=user_id,
            app_id=app_id,
            scenario=profile.scenario.value,
            projected_score=projection.projected_score,
            input=profile.to_dict(),
            results=projection.to_dict(),
        )
        try:
            self.db.add(db_simulation)
            self.db.commit()
            self.db.refresh(db_simulation)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Could not save simulation: {e}") from e
        return db_simulation

    def get_simulations_by_user(self, user_id: str, app_id: str, limit: int = 10) -> List[SimulationRecord]:
        """Fetch recent simulations for a user"""
        return (
            self.db.query(SimulationRecord)
            .filter(SimulationRecord.user_id == user_id, SimulationRecord.app_id == app_id)
            .order_by(SimulationRecord.created_at.desc())
            .limit(limit)
            .all()
        )
