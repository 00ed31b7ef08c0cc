"""Tests for recommendation scoring."""

import pytest

from youtubefit.db.models import Workout
from youtubefit.recommendation.scoring import (
    BASE_SCORE,
    PRIMARY_TARGET_BONUS,
    SECONDARY_TARGET_BONUS,
    score_workout,
    target_bonus,
)


def _workout(**kwargs) -> Workout:
    values = {"primary_target": "Legs", "target_tag1": "Glutes", "target_tag2": None, "rating": None}
    values.update(kwargs)
    return Workout(**values)


def test_base_score_for_unrated_never_done_workout():
    assert score_workout(_workout(), completion_count=0) == BASE_SCORE


def test_primary_target_bonus():
    assert target_bonus(_workout(), "Legs") == PRIMARY_TARGET_BONUS


def test_secondary_target_bonus():
    assert target_bonus(_workout(), "Glutes") == SECONDARY_TARGET_BONUS
    assert target_bonus(_workout(target_tag1=None, target_tag2="Glutes"), "Glutes") == SECONDARY_TARGET_BONUS


def test_no_target_bonus_without_match_or_target():
    assert target_bonus(_workout(), "Arms") == 0
    assert target_bonus(_workout(), None) == 0


def test_full_formula():
    workout = _workout(rating=4)
    # 100 - 10*2 + 15 + 4*2
    assert score_workout(workout, completion_count=2, target="Legs") == 103


def test_penalty_has_no_floor():
    assert score_workout(_workout(), completion_count=25) == -150


@pytest.mark.parametrize("count", [0, 1, 5, 12])
def test_more_completions_never_increase_score(count):
    workout = _workout(rating=3)
    assert score_workout(workout, count + 1, "Legs") <= score_workout(workout, count, "Legs")


def test_higher_rating_never_decreases_score():
    scores = [score_workout(_workout(rating=rating), completion_count=3) for rating in (None, 1, 2, 3, 4)]
    assert scores == sorted(scores)
