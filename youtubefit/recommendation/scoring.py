"""Recommendation scoring.

score = 100 - 10 * completions + target bonus + rating bonus

The completion penalty has no floor; heavily repeated workouts end up with
negative scores and near-minimum selection weight.
"""

from __future__ import annotations

from youtubefit.db.models import Workout

BASE_SCORE = 100
COMPLETION_PENALTY = 10
PRIMARY_TARGET_BONUS = 15
SECONDARY_TARGET_BONUS = 5
RATING_MULTIPLIER = 2


def target_bonus(workout: Workout, target: str | None) -> int:
    if not target:
        return 0
    if workout.primary_target == target:
        return PRIMARY_TARGET_BONUS
    if target in (workout.target_tag1, workout.target_tag2):
        return SECONDARY_TARGET_BONUS
    return 0


def rating_bonus(workout: Workout) -> int:
    return workout.rating * RATING_MULTIPLIER if workout.rating else 0


def score_workout(workout: Workout, completion_count: int, target: str | None = None) -> int:
    return BASE_SCORE - COMPLETION_PENALTY * completion_count + target_bonus(workout, target) + rating_bonus(workout)
