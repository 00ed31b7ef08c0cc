"""Catalog access.

WorkoutCatalog is the only place that builds SELECT statements over the
workouts table. Callers describe what they want with a CatalogQuery; ordering
of query_workouts() results is by title and callers re-sort as needed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from loguru import logger
from sqlalchemy import ColumnElement, Select, and_, func, or_, select
from sqlalchemy.orm import Session

from youtubefit.catalog.yoga import yoga_keyword_clause
from youtubefit.config.settings import settings
from youtubefit.db.models import FULL_BODY, Workout

COMPANION_POOL_SIZE = 5


@dataclass(frozen=True)
class CatalogQuery:
    """Catalog filter. Empty / None fields are not applied.

    yoga=True matches yoga content and ignores category.
    target matches the primary target or either secondary tag.
    special_tag matches either secondary tag.
    recommendable_only applies vetted, not do_not_recommend and link_status=ok.
    """

    category: str | None = None
    yoga: bool = False
    target: str | None = None
    special_tag: str | None = None
    channels: tuple[str, ...] = ()
    channel_name: str | None = None
    intensity: str | None = None
    equipment: str | None = None
    min_duration: int | None = None
    max_duration: int | None = None
    vetted: bool | None = None
    do_not_recommend: bool | None = None
    link_status: str | None = None
    recommendable_only: bool = False


def recommendable_clause() -> ColumnElement[bool]:
    """Hard filters every recommended workout or companion must pass."""
    return and_(
        Workout.vetted.is_(True),
        Workout.do_not_recommend.is_(False),
        Workout.link_status == "ok",
    )


def yoga_clause() -> ColumnElement[bool]:
    if settings.yoga_keyword_fallback:
        return or_(Workout.category == "yoga", yoga_keyword_clause())
    return Workout.category == "yoga"


def _apply_query(stmt: Select, query: CatalogQuery) -> Select:
    if query.recommendable_only:
        stmt = stmt.where(recommendable_clause())

    if query.yoga:
        stmt = stmt.where(yoga_clause())
    elif query.category:
        stmt = stmt.where(Workout.category == query.category)

    if query.target:
        stmt = stmt.where(
            or_(
                Workout.primary_target == query.target,
                Workout.target_tag1 == query.target,
                Workout.target_tag2 == query.target,
            )
        )
    if query.special_tag:
        stmt = stmt.where(or_(Workout.target_tag1 == query.special_tag, Workout.target_tag2 == query.special_tag))
    if query.channels:
        stmt = stmt.where(Workout.channel_name.in_(query.channels))
    if query.channel_name:
        stmt = stmt.where(Workout.channel_name == query.channel_name)
    if query.intensity:
        stmt = stmt.where(Workout.intensity == query.intensity)
    if query.equipment:
        stmt = stmt.where(Workout.equipment == query.equipment)
    if query.min_duration is not None:
        stmt = stmt.where(Workout.duration_min >= query.min_duration)
    if query.max_duration is not None:
        stmt = stmt.where(Workout.duration_min <= query.max_duration)
    if query.vetted is not None:
        stmt = stmt.where(Workout.vetted.is_(query.vetted))
    if query.do_not_recommend is not None:
        stmt = stmt.where(Workout.do_not_recommend.is_(query.do_not_recommend))
    if query.link_status:
        stmt = stmt.where(Workout.link_status == query.link_status)
    return stmt


class WorkoutCatalog:
    """Read access to the workouts table."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, workout_id: str) -> Workout | None:
        return self.session.get(Workout, workout_id)

    def get_many(self, workout_ids: Iterable[str | None]) -> dict[str, Workout]:
        """Workouts keyed by id. None and unknown ids are ignored."""
        ids = {workout_id for workout_id in workout_ids if workout_id}
        if not ids:
            return {}
        stmt = select(Workout).where(Workout.workout_id.in_(ids))
        return {w.workout_id: w for w in self.session.execute(stmt).scalars().all()}

    def get_by_yt_id(self, yt_id: str) -> Workout | None:
        return self.session.execute(select(Workout).where(Workout.yt_id == yt_id)).scalar_one_or_none()

    def exists(self, workout_id: str, category: str | None = None) -> bool:
        stmt = select(Workout.workout_id).where(Workout.workout_id == workout_id)
        if category:
            stmt = stmt.where(Workout.category == category)
        return self.session.execute(stmt).first() is not None

    def query_workouts(self, query: CatalogQuery) -> list[Workout]:
        stmt = _apply_query(select(Workout), query).order_by(Workout.title)
        workouts = list(self.session.execute(stmt).scalars().all())
        logger.debug(f"Catalog query returned {len(workouts)} workouts: {query}")
        return workouts

    def companion_candidates(self, category: str, primary_target: str, limit: int = COMPANION_POOL_SIZE) -> list[Workout]:
        """Shortest recommendable warmups or cooldowns for a target.

        Matches the given primary target or Full Body, ordered by duration.
        """
        stmt = (
            select(Workout)
            .where(Workout.category == category)
            .where(recommendable_clause())
            .where(or_(Workout.primary_target == primary_target, Workout.primary_target == FULL_BODY))
            .order_by(Workout.duration_min.asc(), Workout.workout_id.asc())
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars().all())

    def channel_counts(self) -> list[tuple[str, int]]:
        """Total workout count per channel, ignoring every filter."""
        stmt = (
            select(Workout.channel_name, func.count(Workout.workout_id))
            .group_by(Workout.channel_name)
            .order_by(Workout.channel_name.asc())
        )
        return [(name, count) for name, count in self.session.execute(stmt).all()]
