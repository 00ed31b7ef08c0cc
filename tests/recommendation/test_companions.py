"""Tests for warmup / cooldown companion selection."""

import random

from youtubefit.db.models import Workout
from youtubefit.recommendation.companions import select_companions


class FakeCatalog:
    def __init__(self, warmups=None, cooldowns=None):
        self.by_category = {"warmup": warmups or [], "cooldown": cooldowns or []}
        self.requests = []

    def companion_candidates(self, category, primary_target, limit=5):
        self.requests.append((category, primary_target, limit))
        return self.by_category[category][:limit]


def _workout(workout_id, category="workout", title="Leg Day", channel="Test Channel", target="Legs") -> Workout:
    return Workout(workout_id=workout_id, category=category, title=title, channel_name=channel, primary_target=target)


def test_companions_use_workout_primary_target():
    catalog = FakeCatalog(warmups=[_workout("W1", "warmup")], cooldowns=[_workout("C1", "cooldown")])
    companions = select_companions(_workout("M1"), catalog, random.Random(3))
    assert companions.warmup.workout_id == "W1"
    assert companions.cooldown.workout_id == "C1"
    assert catalog.requests == [("warmup", "Legs", 5), ("cooldown", "Legs", 5)]


def test_missing_companions_are_none():
    companions = select_companions(_workout("M1"), FakeCatalog(), random.Random(3))
    assert companions.warmup is None
    assert companions.cooldown is None


def test_yoga_mode_skips_lookup():
    catalog = FakeCatalog(warmups=[_workout("W1", "warmup")], cooldowns=[_workout("C1", "cooldown")])
    companions = select_companions(_workout("M1"), catalog, random.Random(3), yoga_mode=True)
    assert companions.warmup is None and companions.cooldown is None
    assert catalog.requests == []


def test_yoga_workout_gets_no_companions_outside_yoga_mode():
    catalog = FakeCatalog(warmups=[_workout("W1", "warmup")], cooldowns=[_workout("C1", "cooldown")])
    assert select_companions(_workout("Y1", category="yoga"), catalog, random.Random(3)).warmup is None
    keyword_match = _workout("Y2", title="Morning Yoga Flow")
    assert select_companions(keyword_match, catalog, random.Random(3)).cooldown is None
    assert catalog.requests == []


def test_pick_is_uniform_over_returned_pool():
    warmups = [_workout(f"W{i}", "warmup") for i in range(5)]
    catalog = FakeCatalog(warmups=warmups, cooldowns=[_workout("C1", "cooldown")])
    rng = random.Random(11)
    picked = {select_companions(_workout("M1"), catalog, rng).warmup.workout_id for _ in range(200)}
    assert picked == {f"W{i}" for i in range(5)}
