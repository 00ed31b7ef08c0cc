"""Workout history API routes."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from youtubefit.catalog.repository import WorkoutCatalog
from youtubefit.db.models import WorkoutHistory
from youtubefit.db.session import get_db
from youtubefit.history.schemas import (
    HistoryEntryCreateRequest,
    HistoryEntrySchema,
    HistoryNotesUpdateRequest,
    MessageResponse,
    linked_workouts,
)

router = APIRouter(prefix="/history", tags=["history"])


def validate_session_workouts(
    db: Session,
    workout_id: str,
    warmup_id: str | None,
    cooldown_id: str | None,
) -> None:
    """Raise 404 unless the workout exists and the companions have the right category."""
    catalog = WorkoutCatalog(db)
    if not catalog.exists(workout_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    if warmup_id and not catalog.exists(warmup_id, category="warmup"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Warmup not found")
    if cooldown_id and not catalog.exists(cooldown_id, category="cooldown"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cooldown not found")


def _to_schemas(db: Session, entries: list[WorkoutHistory]) -> list[HistoryEntrySchema]:
    ids = [e.workout_id for e in entries] + [e.warmup_id for e in entries] + [e.cooldown_id for e in entries]
    workouts = WorkoutCatalog(db).get_many(ids)
    return [
        HistoryEntrySchema(
            id=e.id,
            date=e.date,
            workout_id=e.workout_id,
            warmup_id=e.warmup_id,
            cooldown_id=e.cooldown_id,
            notes=e.notes,
            **linked_workouts(workouts, e.workout_id, e.warmup_id, e.cooldown_id),
        )
        for e in entries
    ]


def _get_entry_or_404(db: Session, entry_id: int) -> WorkoutHistory:
    entry = db.get(WorkoutHistory, entry_id)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="History entry not found")
    return entry


@router.post("", response_model=HistoryEntrySchema, status_code=status.HTTP_201_CREATED)
def log_session(request: HistoryEntryCreateRequest, db: Session = Depends(get_db)) -> HistoryEntrySchema:
    """Log a completed session."""
    validate_session_workouts(db, request.workout_id, request.warmup_id, request.cooldown_id)

    entry = WorkoutHistory(
        date=request.date,
        workout_id=request.workout_id,
        warmup_id=request.warmup_id or None,
        cooldown_id=request.cooldown_id or None,
        notes=request.notes or None,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info(f"[HISTORY] Logged {entry.workout_id} on {entry.date.isoformat()} (id={entry.id})")
    return _to_schemas(db, [entry])[0]


@router.get("", response_model=list[HistoryEntrySchema])
def list_history(
    start_date: date | None = None,
    end_date: date | None = None,
    workout_id: str | None = None,
    db: Session = Depends(get_db),
) -> list[HistoryEntrySchema]:
    """History entries, newest first."""
    stmt = select(WorkoutHistory)
    if start_date:
        stmt = stmt.where(WorkoutHistory.date >= start_date)
    if end_date:
        stmt = stmt.where(WorkoutHistory.date <= end_date)
    if workout_id:
        stmt = stmt.where(WorkoutHistory.workout_id == workout_id)
    stmt = stmt.order_by(WorkoutHistory.date.desc(), WorkoutHistory.id.desc())
    entries = list(db.execute(stmt).scalars().all())
    return _to_schemas(db, entries)


@router.patch("/{entry_id}", response_model=HistoryEntrySchema)
def update_history_notes(
    entry_id: int,
    request: HistoryNotesUpdateRequest,
    db: Session = Depends(get_db),
) -> HistoryEntrySchema:
    """Only notes are editable; an empty string clears them."""
    entry = _get_entry_or_404(db, entry_id)
    entry.notes = request.notes or None
    db.commit()
    db.refresh(entry)
    return _to_schemas(db, [entry])[0]


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_history_entry(entry_id: int, db: Session = Depends(get_db)) -> MessageResponse:
    entry = _get_entry_or_404(db, entry_id)
    db.delete(entry)
    db.commit()
    logger.info(f"[HISTORY] Deleted entry {entry_id}")
    return MessageResponse(message="History entry deleted successfully")


@router.delete("", response_model=MessageResponse)
def clear_history(db: Session = Depends(get_db)) -> MessageResponse:
    """Delete every history entry."""
    result = db.execute(delete(WorkoutHistory))
    db.commit()
    logger.warning(f"[HISTORY] Cleared all history ({result.rowcount} entries)")
    return MessageResponse(message="All history cleared successfully")
