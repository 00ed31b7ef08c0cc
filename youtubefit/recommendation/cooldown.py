from __future__ import annotations

from datetime import date, timedelta
from typing import Protocol

from youtubefit.db.models import Workout


class CooldownHistory(Protocol):
    def has_entry_since(self, workout_id: str, cutoff: date) -> bool: ...


def cooldown_cutoff(today: date, repeat_cooldown_days: int) -> date | None:
    """First date inside the cooldown window, or None when there is no cooldown."""
    if repeat_cooldown_days <= 0:
        return None
    if repeat_cooldown_days >= (today - date.min).days:
        return date.min
    return today - timedelta(days=repeat_cooldown_days)


def is_within_cooldown(workout: Workout, history: CooldownHistory, today: date) -> bool:
    """True when the workout was completed on or after today - repeat_cooldown_days."""
    cutoff = cooldown_cutoff(today, workout.repeat_cooldown_days or 0)
    if cutoff is None:
        return False
    return history.has_entry_since(workout.workout_id, cutoff)


def exclude_cooling_down(workouts: list[Workout], history: CooldownHistory, today: date) -> list[Workout]:
    return [workout for workout in workouts if not is_within_cooldown(workout, history, today)]
