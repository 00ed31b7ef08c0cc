from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from youtubefit.db.models import Workout
from youtubefit.history.repository import HistoryStats


class RecommendationStage(str, Enum):
    IDLE = "idle"
    FILTERING = "filtering"
    COOLDOWN_CHECKING = "cooldown_checking"
    SCORING = "scoring"
    SELECTING = "selecting"
    COMPANION_LOOKUP = "companion_lookup"
    DONE = "done"
    NO_CANDIDATES = "no_candidates"


@dataclass(frozen=True)
class RecommendationFilters:
    """Sanitized recommendation request. None / empty means "not applied"."""

    target: str | None = None
    duration_min: int | None = None
    duration_max: int | None = None
    intensity: str | None = None
    equipment: str | None = None
    yoga: bool = False
    special_tag: str | None = None
    channels: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoredWorkout:
    workout: Workout
    score: int
    stats: HistoryStats = field(default_factory=HistoryStats)


@dataclass(frozen=True)
class Companions:
    warmup: Workout | None = None
    cooldown: Workout | None = None


@dataclass(frozen=True)
class Recommendation:
    """Selected main workout plus its optional warmup and cooldown."""

    selected: ScoredWorkout
    warmup: Workout | None = None
    cooldown: Workout | None = None
    candidate_count: int = 0
    pool_size: int = 0

    @property
    def workout(self) -> Workout:
        return self.selected.workout
