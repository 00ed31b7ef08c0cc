from __future__ import annotations

import datetime as dt

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

CATEGORIES = ("workout", "warmup", "cooldown", "yoga")
INTENSITIES = ("low", "medium", "high")
EQUIPMENT = ("none", "bands", "dumbbells", "other")
LINK_STATUSES = ("ok", "suspected", "dead", "private")
PLAN_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")

FULL_BODY = "Full Body"
DEFAULT_REPEAT_COOLDOWN_DAYS = 5
MAX_REPEAT_COOLDOWN_DAYS = 3650

# SQLite INTEGER is a signed 64-bit value
SQL_INT_MIN = -(2**63)
SQL_INT_MAX = 2**63 - 1


def _in_check(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join(f"'{value}'" for value in values)
    return f"{column} IN ({quoted})"


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""


class Workout(Base):
    """Catalog entry for a single video workout.

    Workouts are created by CSV import or manual entry and edited by admin
    PATCH requests. They are never hard-deleted: history, planner, favorites
    and watch-later rows reference workout_id.

    - workout_id: Stable primary key (e.g. "YF-FM04")
    - yt_id: Source video id, unique across the catalog
    - category: workout | warmup | cooldown | yoga
    - primary_target / target_tag1 / target_tag2: muscle-group tags
    - vetted / do_not_recommend / link_status: hard recommendation filters
    - rating: Optional 1-4 personal rating
    - repeat_cooldown_days: Minimum day gap before the workout is recommended again
    """

    __tablename__ = "workouts"

    workout_id: Mapped[str] = mapped_column(String, primary_key=True)
    yt_id: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    channel_name: Mapped[str] = mapped_column(String, nullable=False, default="Unknown")
    channel_code: Mapped[str | None] = mapped_column(String, nullable=True)
    video_url: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False, index=True)
    primary_target: Mapped[str] = mapped_column(String, nullable=False, default=FULL_BODY)
    target_tag1: Mapped[str | None] = mapped_column(String, nullable=True)
    target_tag2: Mapped[str | None] = mapped_column(String, nullable=True)
    intensity: Mapped[str] = mapped_column(String, nullable=False)
    duration_min: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    equipment: Mapped[str] = mapped_column(String, nullable=False, default="none")
    vetted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    do_not_recommend: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    repeat_cooldown_days: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_REPEAT_COOLDOWN_DAYS)
    link_status: Mapped[str] = mapped_column(String, nullable=False, default="ok")
    last_checked: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint(_in_check("category", CATEGORIES), name="ck_workouts_category"),
        CheckConstraint(_in_check("intensity", INTENSITIES), name="ck_workouts_intensity"),
        CheckConstraint(_in_check("equipment", EQUIPMENT), name="ck_workouts_equipment"),
        CheckConstraint(_in_check("link_status", LINK_STATUSES), name="ck_workouts_link_status"),
        CheckConstraint("rating IS NULL OR rating BETWEEN 1 AND 4", name="ck_workouts_rating"),
        Index("idx_workouts_recommendable", "category", "vetted", "do_not_recommend", "link_status"),
    )

    def __repr__(self) -> str:
        return f"<Workout {self.workout_id} {self.category} {self.title!r}>"


class WorkoutHistory(Base):
    """Append-only log of completed sessions.

    Only notes may be edited. Rows are removed only by explicit user action.
    """

    __tablename__ = "workout_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    workout_id: Mapped[str] = mapped_column(String, ForeignKey("workouts.workout_id"), nullable=False, index=True)
    warmup_id: Mapped[str | None] = mapped_column(String, ForeignKey("workouts.workout_id"), nullable=True)
    cooldown_id: Mapped[str | None] = mapped_column(String, ForeignKey("workouts.workout_id"), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("idx_history_workout_date", "workout_id", "date"),
    )


class WeeklyPlanSlot(Base):
    """One planned weekday (Monday-Friday) of a week.

    Unique per (week_start_date, day_of_week); saving a slot replaces the
    existing one. A missing slot is a rest day.
    """

    __tablename__ = "weekly_planner"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    week_start_date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    day_of_week: Mapped[str] = mapped_column(String, nullable=False)
    workout_id: Mapped[str] = mapped_column(String, ForeignKey("workouts.workout_id"), nullable=False)
    warmup_id: Mapped[str | None] = mapped_column(String, ForeignKey("workouts.workout_id"), nullable=True)
    cooldown_id: Mapped[str | None] = mapped_column(String, ForeignKey("workouts.workout_id"), nullable=True)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("week_start_date", "day_of_week", name="uq_weekly_planner_week_day"),
        CheckConstraint(_in_check("day_of_week", PLAN_DAYS), name="ck_weekly_planner_day"),
    )


class Favorite(Base):
    """Workout marked as favorite."""

    __tablename__ = "favorites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    workout_id: Mapped[str] = mapped_column(String, ForeignKey("workouts.workout_id"), nullable=False, unique=True)
    added_date: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)


class WatchLater(Base):
    """Workout saved to watch later."""

    __tablename__ = "watch_later"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    workout_id: Mapped[str] = mapped_column(String, ForeignKey("workouts.workout_id"), nullable=False, unique=True)
    added_date: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)


class Playlist(Base):
    """Named weekly plan. Its workouts are the planner slots of week_start_date."""

    __tablename__ = "playlists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    week_start_date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    created_date: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    __table_args__ = (
        UniqueConstraint("name", "week_start_date", name="uq_playlists_name_week"),
    )
