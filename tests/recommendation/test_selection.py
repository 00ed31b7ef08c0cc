"""Tests for pool construction and weighted random selection."""

import random
from collections import Counter
from dataclasses import dataclass

import pytest

from youtubefit.recommendation.selection import (
    WEIGHT_FLOOR,
    build_pool,
    pool_size,
    select_weighted,
    selection_weights,
)


@dataclass(frozen=True)
class Item:
    name: str
    score: int


class TestPoolSize:
    def test_forty_candidates_give_pool_of_thirty(self):
        assert pool_size(40) == 30

    def test_small_sets_use_every_candidate(self):
        assert pool_size(1) == 1
        assert pool_size(12) == 12
        assert pool_size(30) == 30

    def test_large_sets_use_top_half(self):
        assert pool_size(100) == 50
        assert pool_size(61) == 30

    def test_empty(self):
        assert pool_size(0) == 0


def test_build_pool_keeps_highest_scores():
    items = [Item(f"w{i}", score) for i, score in enumerate(range(40))]
    pool = build_pool(items)
    assert len(pool) == 30
    assert min(item.score for item in pool) == 10
    assert pool[0].score == 39


def test_weights_normalize_to_floor_and_top():
    weights = selection_weights([Item("low", 50), Item("high", 100)])
    assert weights[0] == pytest.approx(WEIGHT_FLOOR)
    assert weights[1] == pytest.approx(1 + WEIGHT_FLOOR)


def test_equal_scores_get_equal_weights():
    weights = selection_weights([Item("a", 70), Item("b", 70), Item("c", 70)])
    assert weights == [pytest.approx(WEIGHT_FLOOR)] * 3


def test_empty_input_selects_nothing():
    assert select_weighted([], random.Random(1)) is None


def test_single_candidate_always_selected():
    only = Item("only", -40)
    for seed in range(25):
        assert select_weighted([only], random.Random(seed)) is only


def test_same_seed_same_choice():
    items = [Item(f"w{i}", 100 - 3 * i) for i in range(20)]
    first = [select_weighted(items, random.Random(seed)).name for seed in range(10)]
    second = [select_weighted(items, random.Random(seed)).name for seed in range(10)]
    assert first == second


def test_selection_never_leaves_the_pool():
    items = [Item(f"w{i}", i) for i in range(40)]
    pool_names = {item.name for item in build_pool(items)}
    rng = random.Random(7)
    for _ in range(500):
        assert select_weighted(items, rng).name in pool_names


def test_higher_scores_are_picked_more_often():
    items = [Item("top", 100), Item("middle", 75), Item("bottom", 50)]
    rng = random.Random(2024)
    counts = Counter(select_weighted(items, rng).name for _ in range(4000))
    assert counts["top"] > counts["middle"] > counts["bottom"] > 0


def test_random_at_upper_bound_falls_back_to_last_pool_member():
    class AlmostOne(random.Random):
        def random(self):
            return 1.0

    items = [Item("a", 10), Item("b", 5)]
    assert select_weighted(items, AlmostOne()).name == "b"
