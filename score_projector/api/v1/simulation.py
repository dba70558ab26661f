"""POST /v1/simulations - run and store a score projection"""

import time
import uuid
import logging
from dataclasses import asdict
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from score_projector.api.v1.schemas import SimulationRequest, SimulationResponse, ProjectionSchema, TimelinePointSchema
from score_projector.api.dependencies import get_notifier, get_request_id
from score_projector.config import settings
from score_projector.infrastructure.database.session import get_db
from score_projector.infrastructure.database.repositories import SimulationRepository
from score_projector.infrastructure.clients.notifier import ResultsNotifier
from score_projector.domain.exceptions import NotificationError, PersistenceError, ProfileValidationError
from score_projector.domain.projection import run_simulation
from score_projector.domain.timeline import build_timeline
from score_projector.domain.validation import build_profile
from score_projector.infrastructure.observability.metrics import (
    persistence_failure_counter,
    record_simulation,
    validation_failure_counter,
)
from score_projector.infrastructure.observability.logging import log_simulation

router = APIRouter()
logger = logging.getLogger(__name__)


async def deliver_results(notifier: ResultsNotifier, payload: dict, request_id: str) -> None:
    """Background delivery; a failed email never affects the stored projection"""
    try:
        await notifier.send_results_event(payload)
    except NotificationError as e:
        logger.error(f"Results webhook failed: {e}", extra={"request_id": request_id})


@router.post("/simulations", response_model=SimulationResponse)
async def create_simulation(
    request_body: SimulationRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    notifier: ResultsNotifier = Depends(get_notifier),
):
    """
    Run a score projection for a profile.

    Flow:
    1. Validate the profile (422 with one message per bad field)
    2. Run the projection and build the chart timeline
    3. Persist input + results; a failed save is reported, not fatal
    4. If saved and an email was given, send the results webhook in the background
    5. Return projection, timeline and save status
    """
    start_time = time.time()
    request_id = get_request_id(request)
    user_id = request_body.user_id or str(uuid.uuid4())

    try:
        profile = build_profile(request_body.profile.model_dump())
    except ProfileValidationError as e:
        for error in e.errors:
            validation_failure_counter.labels(field=error.field).inc()
        logger.warning(f"Invalid profile: {e}", extra={"request_id": request_id})
        raise HTTPException(
            status_code=422,
            detail=[{"field": error.field, "message": error.message} for error in e.errors],
        )

    try:
        projection = run_simulation(profile)
        timeline = build_timeline(projection)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="An error occurred during calculation. Please check inputs.")

    simulation_id = None
    try:
        record = SimulationRepository(db).create_simulation(
            user_id=user_id,
            app_id=settings.app_id,
            profile=profile,
            projection=projection,
        )
        simulation_id = str(record.id)
    except PersistenceError as e:
        persistence_failure_counter.inc()
        logger.warning(f"Simulation not saved: {e}", extra={"request_id": request_id})

    if simulation_id and profile.email:
        background_tasks.add_task(
            deliver_results,
            notifier,
            {
                "event": "SIMULATION_SAVED",
                "simulation_id": simulation_id,
                "user_id": user_id,
                "first_name": profile.first_name,
                "email": profile.email,
                "projected_score": projection.projected_score,
                "score_gain": projection.score_gain,
                "recovery_time": projection.recovery_time,
            },
            request_id,
        )

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_simulation(profile.scenario.value, projection.score_gain)
    log_simulation(
        request_id,
        user_id,
        profile.scenario.value,
        projection.initial_score,
        projection.projected_score,
        simulation_id is not None,
        duration_ms,
    )

    return SimulationResponse(
        simulation_id=simulation_id,
        user_id=user_id,
        saved=simulation_id is not None,
        projection=ProjectionSchema(**projection.to_dict()),
        timeline=[TimelinePointSchema(**asdict(point)) for point in timeline],
    )
