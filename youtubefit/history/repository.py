from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from youtubefit.db.models import WorkoutHistory


@dataclass(frozen=True)
class HistoryStats:
    """Lifetime completion stats for one workout."""

    count: int = 0
    first_date: date | None = None
    last_date: date | None = None


class WorkoutHistoryStore:
    """Read access to the append-only workout_history table."""

    def __init__(self, session: Session):
        self.session = session

    def count_and_last_date(self, workout_id: str) -> HistoryStats:
        stmt = select(
            func.count(WorkoutHistory.id),
            func.min(WorkoutHistory.date),
            func.max(WorkoutHistory.date),
        ).where(WorkoutHistory.workout_id == workout_id)
        count, first_date, last_date = self.session.execute(stmt).one()
        return HistoryStats(count=count or 0, first_date=first_date, last_date=last_date)

    def has_entry_since(self, workout_id: str, cutoff: date) -> bool:
        """True when the workout was completed on or after cutoff."""
        stmt = (
            select(WorkoutHistory.id)
            .where(WorkoutHistory.workout_id == workout_id)
            .where(WorkoutHistory.date >= cutoff)
            .limit(1)
        )
        return self.session.execute(stmt).first() is not None
