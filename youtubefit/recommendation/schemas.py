"""Recommendation API schemas (Pydantic)."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from youtubefit.recommendation.types import Companions, Recommendation
from youtubefit.workouts.schemas import WorkoutSchema


class HistoryStatsSchema(BaseModel):
    count_completed: int
    first_attempt_date: date | None
    last_done_date: date | None


class RecommendedWorkoutSchema(WorkoutSchema):
    score: int
    history_stats: HistoryStatsSchema


class RecommendationResponse(BaseModel):
    workout: RecommendedWorkoutSchema
    warmup: WorkoutSchema | None
    cooldown: WorkoutSchema | None


class CompanionsResponse(BaseModel):
    warmup: WorkoutSchema | None
    cooldown: WorkoutSchema | None


def _optional_workout(workout) -> WorkoutSchema | None:
    return WorkoutSchema.model_validate(workout) if workout is not None else None


def recommendation_to_response(recommendation: Recommendation) -> RecommendationResponse:
    selected = recommendation.selected
    workout = RecommendedWorkoutSchema(
        **WorkoutSchema.model_validate(selected.workout).model_dump(),
        score=selected.score,
        history_stats=HistoryStatsSchema(
            count_completed=selected.stats.count,
            first_attempt_date=selected.stats.first_date,
            last_done_date=selected.stats.last_date,
        ),
    )
    return RecommendationResponse(
        workout=workout,
        warmup=_optional_workout(recommendation.warmup),
        cooldown=_optional_workout(recommendation.cooldown),
    )


def companions_to_response(companions: Companions) -> CompanionsResponse:
    return CompanionsResponse(
        warmup=_optional_workout(companions.warmup),
        cooldown=_optional_workout(companions.cooldown),
    )
