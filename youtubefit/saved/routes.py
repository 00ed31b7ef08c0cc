"""Favorites and watch-later API routes.

Both lists hold at most one row per workout and share one implementation;
build_saved_router() creates the router for either table.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from youtubefit.catalog.repository import WorkoutCatalog
from youtubefit.db.models import Favorite, WatchLater, Workout
from youtubefit.db.session import get_db
from youtubefit.history.schemas import MessageResponse
from youtubefit.saved.schemas import SavedWorkoutSchema, SaveWorkoutRequest

SavedModel = type[Favorite] | type[WatchLater]


def _to_schema(item: Favorite | WatchLater, workout: Workout) -> SavedWorkoutSchema:
    return SavedWorkoutSchema(
        id=item.id,
        workout_id=item.workout_id,
        added_date=item.added_date,
        title=workout.title,
        video_url=workout.video_url,
        duration_min=workout.duration_min,
        intensity=workout.intensity,
        primary_target=workout.primary_target,
        channel_name=workout.channel_name,
        category=workout.category,
        notes=workout.notes,
    )


def build_saved_router(model: SavedModel, prefix: str, label: str) -> APIRouter:
    """Router with list / add / remove endpoints for a saved-workouts table.

    Args:
        model: Favorite or WatchLater
        prefix: URL prefix, also used as the OpenAPI tag
        label: Human readable list name used in messages
    """
    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")])

    @router.get("", response_model=list[SavedWorkoutSchema])
    def list_saved(db: Session = Depends(get_db)) -> list[SavedWorkoutSchema]:
        stmt = (
            select(model, Workout)
            .join(Workout, Workout.workout_id == model.workout_id)
            .order_by(model.added_date.desc(), model.id.desc())
        )
        return [_to_schema(item, workout) for item, workout in db.execute(stmt).all()]

    @router.post("", response_model=SavedWorkoutSchema, status_code=status.HTTP_201_CREATED)
    def add_saved(request: SaveWorkoutRequest, db: Session = Depends(get_db)) -> SavedWorkoutSchema:
        workout = WorkoutCatalog(db).get(request.workout_id)
        if workout is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
        existing = db.execute(select(model.id).where(model.workout_id == request.workout_id)).first()
        if existing is not None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"Workout already in {label}")

        item = model(workout_id=request.workout_id)
        db.add(item)
        db.commit()
        db.refresh(item)
        logger.info(f"Added {request.workout_id} to {label}")
        return _to_schema(item, workout)

    @router.delete("/{workout_id}", response_model=MessageResponse)
    def remove_saved(workout_id: str, db: Session = Depends(get_db)) -> MessageResponse:
        result = db.execute(delete(model).where(model.workout_id == workout_id))
        db.commit()
        if result.rowcount == 0:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Workout not in {label}")
        logger.info(f"Removed {workout_id} from {label}")
        return MessageResponse(message=f"Removed from {label}")

    return router


favorites_router = build_saved_router(Favorite, "/favorites", "favorites")
watchlater_router = build_saved_router(WatchLater, "/watchlater", "watch later")
