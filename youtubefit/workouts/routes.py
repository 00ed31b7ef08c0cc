"""Workout catalog API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy.orm import Session

from youtubefit.catalog.repository import CatalogQuery, WorkoutCatalog
from youtubefit.catalog.yoga import classify_category
from youtubefit.db.models import Workout
from youtubefit.db.session import get_db
from youtubefit.ingestion.normalize import extract_channel_code, video_url_for
from youtubefit.recommendation.filters import parse_bool, parse_int
from youtubefit.workouts.schemas import ChannelCount, WorkoutCreateRequest, WorkoutSchema, WorkoutUpdateRequest

router = APIRouter(prefix="/workouts", tags=["workouts"])

NULLABLE_FIELDS = {"channel_code", "target_tag1", "target_tag2", "rating", "last_checked", "notes"}


def get_workout_or_404(db: Session, workout_id: str) -> Workout:
    """Get workout by ID or raise 404."""
    workout = WorkoutCatalog(db).get(workout_id)
    if workout is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    return workout


def _optional_bool(value: str | None) -> bool | None:
    return None if value is None else parse_bool(value)


@router.get("", response_model=list[WorkoutSchema])
def list_workouts(
    type: str | None = Query(None, description="Category; 'yoga' also matches yoga keywords"),
    intensity: str | None = None,
    primary_target: str | None = Query(None, description="Matches primary target or either secondary tag"),
    equipment: str | None = None,
    vetted: str | None = None,
    do_not_recommend: str | None = None,
    link_status: str | None = None,
    min_duration: str | None = None,
    max_duration: str | None = None,
    channel_name: str | None = None,
    db: Session = Depends(get_db),
) -> list[WorkoutSchema]:
    """List workouts ordered by title."""
    query = CatalogQuery(
        category=type if type and type != "yoga" else None,
        yoga=type == "yoga",
        target=primary_target or None,
        intensity=intensity or None,
        equipment=equipment or None,
        vetted=_optional_bool(vetted),
        do_not_recommend=_optional_bool(do_not_recommend),
        link_status=link_status or None,
        min_duration=parse_int(min_duration),
        max_duration=parse_int(max_duration),
        channel_name=channel_name or None,
    )
    return [WorkoutSchema.model_validate(w) for w in WorkoutCatalog(db).query_workouts(query)]


@router.get("/channels", response_model=list[ChannelCount])
def list_channels(db: Session = Depends(get_db)) -> list[ChannelCount]:
    """Workout count per channel across the whole catalog."""
    return [ChannelCount(channel_name=name, workout_count=count) for name, count in WorkoutCatalog(db).channel_counts()]


@router.get("/{workout_id}", response_model=WorkoutSchema)
def get_workout(workout_id: str, db: Session = Depends(get_db)) -> WorkoutSchema:
    return WorkoutSchema.model_validate(get_workout_or_404(db, workout_id))


@router.post("", response_model=WorkoutSchema, status_code=status.HTTP_201_CREATED)
def create_workout(request: WorkoutCreateRequest, db: Session = Depends(get_db)) -> WorkoutSchema:
    """Create a workout (admin/local use).

    Plain workouts whose title or channel indicate yoga are stored as yoga.
    """
    catalog = WorkoutCatalog(db)
    if catalog.get_by_yt_id(request.yt_id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Workout with this YT_ID already exists")
    if catalog.exists(request.workout_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Workout with this Workout_ID already exists")

    data = request.model_dump()
    data["channel_name"] = request.channel_name or "Unknown"
    data["channel_code"] = request.channel_code or extract_channel_code(request.workout_id)
    data["video_url"] = request.video_url or video_url_for(request.yt_id)
    data["category"] = classify_category(request.category, request.title, data["channel_name"])

    workout = Workout(**data)
    db.add(workout)
    db.commit()
    db.refresh(workout)
    logger.info(f"Created workout {workout.workout_id} ({workout.category})")
    return WorkoutSchema.model_validate(workout)


@router.patch("/{workout_id}", response_model=WorkoutSchema)
def update_workout(workout_id: str, request: WorkoutUpdateRequest, db: Session = Depends(get_db)) -> WorkoutSchema:
    """Update the fields present in the request. Empty notes are stored as null."""
    workout = get_workout_or_404(db, workout_id)
    updates = {
        key: value
        for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None or key in NULLABLE_FIELDS
    }
    if not updates:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No valid fields to update")

    if "notes" in updates and updates["notes"] == "":
        updates["notes"] = None
    for field_name, value in updates.items():
        setattr(workout, field_name, value)

    db.commit()
    db.refresh(workout)
    logger.info(f"Updated workout {workout_id}: {sorted(updates)}")
    return WorkoutSchema.model_validate(workout)
