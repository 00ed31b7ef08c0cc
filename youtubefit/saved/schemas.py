"""Favorites and watch-later API schemas (Pydantic)."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class SaveWorkoutRequest(BaseModel):
    workout_id: str = Field(min_length=1)


class SavedWorkoutSchema(BaseModel):
    """A saved workout joined with the catalog fields shown in lists."""

    id: int
    workout_id: str
    added_date: datetime
    title: str
    video_url: str
    duration_min: int
    intensity: str
    primary_target: str
    channel_name: str
    category: str
    notes: str | None
