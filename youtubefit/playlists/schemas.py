"""Playlist API schemas (Pydantic)."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class PlaylistCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    week_start_date: dt.date


class PlaylistRenameRequest(BaseModel):
    name: str | None = None


class PlaylistSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    week_start_date: dt.date
    created_date: dt.datetime


class PlaylistSummarySchema(PlaylistSchema):
    workout_count: int
