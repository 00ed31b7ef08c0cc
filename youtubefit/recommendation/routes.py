"""Recommendation API routes."""

from __future__ import annotations

import random
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy.orm import Session

from youtubefit.catalog.repository import WorkoutCatalog
from youtubefit.core.clock import get_today
from youtubefit.db.session import get_db
from youtubefit.recommendation.engine import RecommendationEngine
from youtubefit.recommendation.errors import CollaboratorUnavailableError, NoCandidatesError
from youtubefit.recommendation.filters import sanitize_filters
from youtubefit.recommendation.schemas import (
    CompanionsResponse,
    RecommendationResponse,
    companions_to_response,
    recommendation_to_response,
)

router = APIRouter(prefix="/recommendation", tags=["recommendation"])


def get_rng() -> random.Random:
    """Random source for recommendation draws (overridden in tests)."""
    return random.Random()


def get_recommendation_engine(
    db: Session = Depends(get_db),
    rng: random.Random = Depends(get_rng),
    today: date = Depends(get_today),
) -> RecommendationEngine:
    return RecommendationEngine.from_session(db, rng=rng, clock=lambda: today)


def _unavailable(error: CollaboratorUnavailableError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error))


@router.get("/today", response_model=RecommendationResponse)
def recommend_today(
    target: str | None = Query(None, description="Target muscle group (primary or secondary tag)"),
    duration_min: str | None = Query(None, description="Minimum duration in minutes"),
    duration_max: str | None = Query(None, description="Maximum duration in minutes"),
    intensity: str | None = Query(None, description="low, medium or high"),
    equipment: str | None = Query(None, description="none, bands, dumbbells or other"),
    yoga: str | None = Query(None, description="true/1 for a yoga session"),
    special_tag: str | None = Query(None, description="Secondary tag to require"),
    channels: str | None = Query(None, description="Comma-separated channel names"),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
) -> RecommendationResponse:
    """Recommend today's workout with a matching warmup and cooldown.

    Numeric filters that cannot be parsed are ignored. Responds 404 when no
    workout matches outside its cooldown window.
    """
    filters = sanitize_filters(
        target=target,
        duration_min=duration_min,
        duration_max=duration_max,
        intensity=intensity,
        equipment=equipment,
        yoga=yoga,
        special_tag=special_tag,
        channels=channels,
    )
    try:
        recommendation = engine.recommend(filters)
    except NoCandidatesError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.reason) from e
    except CollaboratorUnavailableError as e:
        raise _unavailable(e) from e
    return recommendation_to_response(recommendation)


@router.get("/warmup-cooldown/{workout_id}", response_model=CompanionsResponse)
def warmup_cooldown_for_workout(
    workout_id: str,
    db: Session = Depends(get_db),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
) -> CompanionsResponse:
    """Pick a warmup and cooldown for an existing workout. Yoga gets neither."""
    workout = WorkoutCatalog(db).get(workout_id)
    if workout is None:
        logger.warning(f"Companion lookup for unknown workout {workout_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    try:
        companions = engine.companions_for(workout)
    except CollaboratorUnavailableError as e:
        raise _unavailable(e) from e
    return companions_to_response(companions)
