"""Workout API schemas (Pydantic)."""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from youtubefit.db.models import DEFAULT_REPEAT_COOLDOWN_DAYS, MAX_REPEAT_COOLDOWN_DAYS, SQL_INT_MAX

Category = Literal["workout", "warmup", "cooldown", "yoga"]
Intensity = Literal["low", "medium", "high"]
Equipment = Literal["none", "bands", "dumbbells", "other"]
LinkStatus = Literal["ok", "suspected", "dead", "private"]


class WorkoutSchema(BaseModel):
    """Workout schema for API responses."""

    model_config = ConfigDict(from_attributes=True)

    workout_id: str
    yt_id: str
    title: str
    channel_name: str
    channel_code: str | None
    video_url: str
    category: str
    primary_target: str
    target_tag1: str | None
    target_tag2: str | None
    intensity: str
    duration_min: int
    equipment: str
    vetted: bool
    do_not_recommend: bool
    rating: int | None
    repeat_cooldown_days: int
    link_status: str
    last_checked: date | None
    notes: str | None


class WorkoutCreateRequest(BaseModel):
    """Manual workout entry (admin/local use)."""

    workout_id: str = Field(min_length=1)
    yt_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    channel_name: str | None = None
    channel_code: str | None = None
    video_url: str | None = None
    category: Category
    primary_target: str = "Full Body"
    target_tag1: str | None = None
    target_tag2: str | None = None
    intensity: Intensity
    duration_min: int = Field(default=0, ge=0, le=SQL_INT_MAX)
    equipment: Equipment
    vetted: bool = False
    do_not_recommend: bool = False
    rating: int | None = Field(default=None, ge=1, le=4)
    repeat_cooldown_days: int = Field(default=DEFAULT_REPEAT_COOLDOWN_DAYS, ge=0, le=MAX_REPEAT_COOLDOWN_DAYS)
    link_status: LinkStatus = "ok"
    last_checked: date | None = None
    notes: str | None = None


class WorkoutUpdateRequest(BaseModel):
    """Partial workout update. Only fields present in the request are applied."""

    title: str | None = None
    channel_name: str | None = None
    channel_code: str | None = None
    video_url: str | None = None
    category: Category | None = None
    primary_target: str | None = None
    target_tag1: str | None = None
    target_tag2: str | None = None
    intensity: Intensity | None = None
    duration_min: int | None = Field(default=None, ge=0, le=SQL_INT_MAX)
    equipment: Equipment | None = None
    vetted: bool | None = None
    do_not_recommend: bool | None = None
    rating: int | None = Field(default=None, ge=1, le=4)
    repeat_cooldown_days: int | None = Field(default=None, ge=0, le=MAX_REPEAT_COOLDOWN_DAYS)
    link_status: LinkStatus | None = None
    last_checked: date | None = None
    notes: str | None = None


class ChannelCount(BaseModel):
    channel_name: str
    workout_count: int
