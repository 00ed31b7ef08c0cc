"""History API schemas (Pydantic)."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from youtubefit.db.models import Workout


class LinkedWorkouts(BaseModel):
    """Titles and links of the workout, warmup and cooldown a row references."""

    workout_title: str | None = None
    workout_url: str | None = None
    workout_type: str | None = None
    warmup_title: str | None = None
    warmup_url: str | None = None
    cooldown_title: str | None = None
    cooldown_url: str | None = None


def linked_workouts(
    workouts: dict[str, Workout],
    workout_id: str,
    warmup_id: str | None,
    cooldown_id: str | None,
) -> dict[str, str | None]:
    """LinkedWorkouts fields for one row, from a prefetched id -> Workout map."""
    workout = workouts.get(workout_id)
    warmup = workouts.get(warmup_id) if warmup_id else None
    cooldown = workouts.get(cooldown_id) if cooldown_id else None
    return {
        "workout_title": workout.title if workout else None,
        "workout_url": workout.video_url if workout else None,
        "workout_type": workout.category if workout else None,
        "warmup_title": warmup.title if warmup else None,
        "warmup_url": warmup.video_url if warmup else None,
        "cooldown_title": cooldown.title if cooldown else None,
        "cooldown_url": cooldown.video_url if cooldown else None,
    }


class HistoryEntryCreateRequest(BaseModel):
    date: dt.date
    workout_id: str = Field(min_length=1)
    warmup_id: str | None = None
    cooldown_id: str | None = None
    notes: str | None = None


class HistoryNotesUpdateRequest(BaseModel):
    notes: str | None = None


class HistoryEntrySchema(LinkedWorkouts):
    id: int
    date: dt.date
    workout_id: str
    warmup_id: str | None
    cooldown_id: str | None
    notes: str | None


class MessageResponse(BaseModel):
    message: str
