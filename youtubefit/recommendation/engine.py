"""Today's workout recommendation.

Stages:
    idle -> filtering -> cooldown_checking -> scoring -> selecting
         -> companion_lookup -> done
    or   -> no_candidates (NoCandidatesError) when nothing survives cooldown.

There are no retries; callers may re-invoke with relaxed filters. Storage
failures abort the request with CollaboratorUnavailableError and no partial
result.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import date
from typing import Protocol

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from youtubefit.catalog.repository import CatalogQuery, WorkoutCatalog
from youtubefit.db.models import Workout
from youtubefit.history.repository import HistoryStats, WorkoutHistoryStore
from youtubefit.recommendation.companions import select_companions
from youtubefit.recommendation.cooldown import exclude_cooling_down
from youtubefit.recommendation.errors import CollaboratorUnavailableError, NoCandidatesError
from youtubefit.recommendation.filters import build_candidate_query
from youtubefit.recommendation.scoring import score_workout
from youtubefit.recommendation.selection import pool_size, select_weighted
from youtubefit.recommendation.types import (
    Companions,
    Recommendation,
    RecommendationFilters,
    RecommendationStage,
    ScoredWorkout,
)


class Catalog(Protocol):
    def query_workouts(self, query: CatalogQuery) -> list[Workout]: ...

    def companion_candidates(self, category: str, primary_target: str, limit: int = ...) -> list[Workout]: ...


class History(Protocol):
    def count_and_last_date(self, workout_id: str) -> HistoryStats: ...

    def has_entry_since(self, workout_id: str, cutoff: date) -> bool: ...


@contextmanager
def _collaborator(name: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"{name} store failed during recommendation: {e}")
        raise CollaboratorUnavailableError(name, e) from e


def _enter(stage: RecommendationStage) -> None:
    logger.debug(f"[RECOMMEND] stage={stage.value}")


class RecommendationEngine:
    """Scores eligible workouts and draws one at random, weighted by score.

    Args:
        catalog: Workout catalog collaborator
        history: Workout history collaborator
        rng: Random source; pass a seeded random.Random for reproducible picks
        clock: Returns "today" for cooldown windows
    """

    def __init__(
        self,
        catalog: Catalog,
        history: History,
        rng: random.Random | None = None,
        clock: Callable[[], date] = date.today,
    ):
        self.catalog = catalog
        self.history = history
        self.rng = rng or random.Random()
        self.clock = clock

    @classmethod
    def from_session(
        cls,
        session: Session,
        rng: random.Random | None = None,
        clock: Callable[[], date] = date.today,
    ) -> RecommendationEngine:
        return cls(WorkoutCatalog(session), WorkoutHistoryStore(session), rng=rng, clock=clock)

    def eligible_candidates(self, filters: RecommendationFilters) -> list[Workout]:
        """Workouts passing the hard/optional filters and outside their cooldown."""
        _enter(RecommendationStage.FILTERING)
        with _collaborator("catalog"):
            candidates = self.catalog.query_workouts(build_candidate_query(filters))

        _enter(RecommendationStage.COOLDOWN_CHECKING)
        today = self.clock()
        with _collaborator("history"):
            eligible = exclude_cooling_down(candidates, self.history, today)
        logger.debug(f"[RECOMMEND] {len(candidates)} candidates, {len(eligible)} outside cooldown (today={today})")
        return eligible

    def score_candidates(self, candidates: list[Workout], target: str | None) -> list[ScoredWorkout]:
        _enter(RecommendationStage.SCORING)
        scored: list[ScoredWorkout] = []
        with _collaborator("history"):
            for workout in candidates:
                stats = self.history.count_and_last_date(workout.workout_id)
                scored.append(ScoredWorkout(workout=workout, score=score_workout(workout, stats.count, target), stats=stats))
        return scored

    def companions_for(self, workout: Workout, yoga_mode: bool = False) -> Companions:
        _enter(RecommendationStage.COMPANION_LOOKUP)
        with _collaborator("catalog"):
            return select_companions(workout, self.catalog, self.rng, yoga_mode=yoga_mode)

    def recommend(self, filters: RecommendationFilters) -> Recommendation:
        """Recommend today's workout.

        Raises:
            NoCandidatesError: Nothing matches the filters outside cooldown
            CollaboratorUnavailableError: Catalog or history read failed
        """
        _enter(RecommendationStage.IDLE)
        eligible = self.eligible_candidates(filters)
        scored = self.score_candidates(eligible, filters.target)

        _enter(RecommendationStage.SELECTING)
        selected = select_weighted(scored, self.rng)
        if selected is None:
            _enter(RecommendationStage.NO_CANDIDATES)
            logger.info(f"[RECOMMEND] No eligible workout (yoga={filters.yoga})")
            raise NoCandidatesError(yoga=filters.yoga)

        companions = self.companions_for(selected.workout, yoga_mode=filters.yoga)

        _enter(RecommendationStage.DONE)
        logger.info(
            f"[RECOMMEND] Selected {selected.workout.workout_id} score={selected.score} "
            f"from {len(scored)} candidates (pool={pool_size(len(scored))})"
        )
        return Recommendation(
            selected=selected,
            warmup=companions.warmup,
            cooldown=companions.cooldown,
            candidate_count=len(scored),
            pool_size=pool_size(len(scored)),
        )
