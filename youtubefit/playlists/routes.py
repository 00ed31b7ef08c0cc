"""Playlist API routes.

A playlist names a planned week; its workouts are the planner slots whose
week_start_date matches.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from youtubefit.db.models import Playlist, WeeklyPlanSlot
from youtubefit.db.session import get_db
from youtubefit.history.schemas import MessageResponse
from youtubefit.planner.weeks import week_start
from youtubefit.playlists.schemas import (
    PlaylistCreateRequest,
    PlaylistRenameRequest,
    PlaylistSchema,
    PlaylistSummarySchema,
)

router = APIRouter(prefix="/playlists", tags=["playlists"])

DUPLICATE_PLAYLIST_MESSAGE = "Playlist with this name and week already exists"


def _get_playlist_or_404(db: Session, playlist_id: int) -> Playlist:
    playlist = db.get(Playlist, playlist_id)
    if playlist is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Playlist not found")
    return playlist


def _name_taken(db: Session, name: str, week: date, exclude_id: int | None = None) -> bool:
    stmt = select(Playlist.id).where(Playlist.name == name, Playlist.week_start_date == week)
    if exclude_id is not None:
        stmt = stmt.where(Playlist.id != exclude_id)
    return db.execute(stmt).first() is not None


@router.get("", response_model=list[PlaylistSummarySchema])
def list_playlists(db: Session = Depends(get_db)) -> list[PlaylistSummarySchema]:
    """Playlists with the number of planned slots in their week, newest first."""
    stmt = (
        select(Playlist, func.count(WeeklyPlanSlot.id))
        .outerjoin(WeeklyPlanSlot, WeeklyPlanSlot.week_start_date == Playlist.week_start_date)
        .group_by(Playlist.id)
        .order_by(Playlist.created_date.desc(), Playlist.id.desc())
    )
    return [
        PlaylistSummarySchema(
            id=playlist.id,
            name=playlist.name,
            week_start_date=playlist.week_start_date,
            created_date=playlist.created_date,
            workout_count=count,
        )
        for playlist, count in db.execute(stmt).all()
    ]


@router.get("/{playlist_id}", response_model=PlaylistSchema)
def get_playlist(playlist_id: int, db: Session = Depends(get_db)) -> PlaylistSchema:
    return PlaylistSchema.model_validate(_get_playlist_or_404(db, playlist_id))


@router.post("", response_model=PlaylistSchema, status_code=status.HTTP_201_CREATED)
def create_playlist(request: PlaylistCreateRequest, db: Session = Depends(get_db)) -> PlaylistSchema:
    """Create a playlist for the week containing week_start_date, stored as its Monday."""
    monday = week_start(request.week_start_date)
    if _name_taken(db, request.name, monday):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_PLAYLIST_MESSAGE)

    playlist = Playlist(name=request.name, week_start_date=monday)
    db.add(playlist)
    db.commit()
    db.refresh(playlist)
    logger.info(f"Created playlist {playlist.id} '{playlist.name}' for week {playlist.week_start_date.isoformat()}")
    return PlaylistSchema.model_validate(playlist)


@router.patch("/{playlist_id}", response_model=PlaylistSchema)
def rename_playlist(playlist_id: int, request: PlaylistRenameRequest, db: Session = Depends(get_db)) -> PlaylistSchema:
    if not request.name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="name is required")

    playlist = _get_playlist_or_404(db, playlist_id)
    if _name_taken(db, request.name, playlist.week_start_date, exclude_id=playlist.id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_PLAYLIST_MESSAGE)

    playlist.name = request.name
    db.commit()
    db.refresh(playlist)
    return PlaylistSchema.model_validate(playlist)


@router.delete("/{playlist_id}", response_model=MessageResponse)
def delete_playlist(playlist_id: int, db: Session = Depends(get_db)) -> MessageResponse:
    playlist = _get_playlist_or_404(db, playlist_id)
    db.delete(playlist)
    db.commit()
    logger.info(f"Deleted playlist {playlist_id}")
    return MessageResponse(message="Playlist deleted")
