"""Weekly planner API schemas (Pydantic)."""

from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, Field

from youtubefit.history.schemas import LinkedWorkouts

DayOfWeek = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


class PlanSlotRequest(BaseModel):
    """Create or replace the slot for (week_start_date, day_of_week)."""

    week_start_date: dt.date
    day_of_week: DayOfWeek
    workout_id: str = Field(min_length=1)
    warmup_id: str | None = None
    cooldown_id: str | None = None


class PlanSlotUpdateRequest(BaseModel):
    completed: bool | None = None


class PlanSlotSchema(LinkedWorkouts):
    id: int
    week_start_date: dt.date
    day_of_week: str
    workout_id: str
    warmup_id: str | None
    cooldown_id: str | None
    completed: bool
    duration_min: int | None = None
    intensity: str | None = None
    primary_target: str | None = None
    channel_name: str | None = None


class ClearWeekResponse(BaseModel):
    message: str
    deleted: int
