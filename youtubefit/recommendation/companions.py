from __future__ import annotations

import random
from typing import Protocol

from loguru import logger

from youtubefit.catalog.repository import COMPANION_POOL_SIZE
from youtubefit.catalog.yoga import is_yoga_workout
from youtubefit.db.models import Workout
from youtubefit.recommendation.types import Companions


class CompanionCatalog(Protocol):
    def companion_candidates(self, category: str, primary_target: str, limit: int = COMPANION_POOL_SIZE) -> list[Workout]: ...


def pick_companion(catalog: CompanionCatalog, category: str, primary_target: str, rng: random.Random) -> Workout | None:
    """Uniform pick among the shortest matching warmups or cooldowns."""
    candidates = catalog.companion_candidates(category, primary_target, COMPANION_POOL_SIZE)
    if not candidates:
        logger.debug(f"No {category} found for target={primary_target}")
        return None
    return rng.choice(candidates)


def select_companions(workout: Workout, catalog: CompanionCatalog, rng: random.Random, yoga_mode: bool = False) -> Companions:
    """Warmup and cooldown for a main workout. Yoga sessions get neither."""
    if yoga_mode or is_yoga_workout(workout):
        logger.debug(f"Skipping companions for yoga workout {workout.workout_id}")
        return Companions()
    return Companions(
        warmup=pick_companion(catalog, "warmup", workout.primary_target, rng),
        cooldown=pick_companion(catalog, "cooldown", workout.primary_target, rng),
    )
