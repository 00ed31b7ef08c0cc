"""Weekly planner API routes."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from youtubefit.catalog.repository import WorkoutCatalog
from youtubefit.core.clock import get_today
from youtubefit.db.models import WeeklyPlanSlot
from youtubefit.db.session import get_db
from youtubefit.history.routes import validate_session_workouts
from youtubefit.history.schemas import MessageResponse, linked_workouts
from youtubefit.planner.schemas import ClearWeekResponse, PlanSlotRequest, PlanSlotSchema, PlanSlotUpdateRequest
from youtubefit.planner.weeks import day_order, month_week_range, week_start

router = APIRouter(prefix="/weeklyplanner", tags=["weeklyplanner"])


def _to_schemas(db: Session, slots: list[WeeklyPlanSlot]) -> list[PlanSlotSchema]:
    ids = [s.workout_id for s in slots] + [s.warmup_id for s in slots] + [s.cooldown_id for s in slots]
    workouts = WorkoutCatalog(db).get_many(ids)
    result = []
    for slot in slots:
        workout = workouts.get(slot.workout_id)
        result.append(
            PlanSlotSchema(
                id=slot.id,
                week_start_date=slot.week_start_date,
                day_of_week=slot.day_of_week,
                workout_id=slot.workout_id,
                warmup_id=slot.warmup_id,
                cooldown_id=slot.cooldown_id,
                completed=slot.completed,
                duration_min=workout.duration_min if workout else None,
                intensity=workout.intensity if workout else None,
                primary_target=workout.primary_target if workout else None,
                channel_name=workout.channel_name if workout else None,
                **linked_workouts(workouts, slot.workout_id, slot.warmup_id, slot.cooldown_id),
            )
        )
    return result


def _sorted_slots(slots: list[WeeklyPlanSlot]) -> list[WeeklyPlanSlot]:
    return sorted(slots, key=lambda s: (s.week_start_date, day_order(s.day_of_week)))


def _get_slot_or_404(db: Session, slot_id: int) -> WeeklyPlanSlot:
    slot = db.get(WeeklyPlanSlot, slot_id)
    if slot is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan item not found")
    return slot


@router.get("", response_model=list[PlanSlotSchema])
def get_week_plan(
    week_start_date: date | None = Query(None, alias="week_start", description="Any date in the week; defaults to this week"),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
) -> list[PlanSlotSchema]:
    """Planned slots of one week, Monday to Friday. Missing days are rest days."""
    monday = week_start(week_start_date or today)
    slots = db.execute(select(WeeklyPlanSlot).where(WeeklyPlanSlot.week_start_date == monday)).scalars().all()
    return _to_schemas(db, _sorted_slots(list(slots)))


@router.get("/month", response_model=list[PlanSlotSchema])
def get_month_plan(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    db: Session = Depends(get_db),
) -> list[PlanSlotSchema]:
    """Slots of every week overlapping the month, ordered by week then day."""
    first_week, last_week = month_week_range(year, month)
    stmt = select(WeeklyPlanSlot).where(
        WeeklyPlanSlot.week_start_date >= first_week,
        WeeklyPlanSlot.week_start_date <= last_week,
    )
    slots = db.execute(stmt).scalars().all()
    return _to_schemas(db, _sorted_slots(list(slots)))


@router.post("", response_model=PlanSlotSchema, status_code=status.HTTP_201_CREATED)
def save_plan_slot(request: PlanSlotRequest, db: Session = Depends(get_db)) -> PlanSlotSchema:
    """Create the slot for (week, day) or replace it. Saving resets completed."""
    validate_session_workouts(db, request.workout_id, request.warmup_id, request.cooldown_id)

    monday = week_start(request.week_start_date)
    slot = db.execute(
        select(WeeklyPlanSlot).where(
            WeeklyPlanSlot.week_start_date == monday,
            WeeklyPlanSlot.day_of_week == request.day_of_week,
        )
    ).scalar_one_or_none()
    if slot is None:
        slot = WeeklyPlanSlot(week_start_date=monday, day_of_week=request.day_of_week)
        db.add(slot)

    slot.workout_id = request.workout_id
    slot.warmup_id = request.warmup_id or None
    slot.cooldown_id = request.cooldown_id or None
    slot.completed = False
    db.commit()
    db.refresh(slot)
    logger.info(f"[PLANNER] {monday.isoformat()} {slot.day_of_week}: {slot.workout_id}")
    return _to_schemas(db, [slot])[0]


@router.patch("/{slot_id}", response_model=PlanSlotSchema)
def update_plan_slot(slot_id: int, request: PlanSlotUpdateRequest, db: Session = Depends(get_db)) -> PlanSlotSchema:
    slot = _get_slot_or_404(db, slot_id)
    if request.completed is not None:
        slot.completed = request.completed
        db.commit()
        db.refresh(slot)
    return _to_schemas(db, [slot])[0]


@router.delete("/current", response_model=ClearWeekResponse)
def clear_current_week(today: date = Depends(get_today), db: Session = Depends(get_db)) -> ClearWeekResponse:
    monday = week_start(today)
    result = db.execute(delete(WeeklyPlanSlot).where(WeeklyPlanSlot.week_start_date == monday))
    db.commit()
    logger.info(f"[PLANNER] Cleared week {monday.isoformat()} ({result.rowcount} slots)")
    return ClearWeekResponse(
        message=f"Current week ({monday.isoformat()}) cleared successfully",
        deleted=result.rowcount,
    )


@router.delete("/{slot_id}", response_model=MessageResponse)
def delete_plan_slot(slot_id: int, db: Session = Depends(get_db)) -> MessageResponse:
    slot = _get_slot_or_404(db, slot_id)
    db.delete(slot)
    db.commit()
    return MessageResponse(message="Plan item deleted")
