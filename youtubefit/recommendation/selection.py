"""Weighted random selection over scored candidates.

The pool is the top max(30, 50%) candidates by score. Within the pool each
candidate's weight is normalized_score ** 1.5 + 0.1, so higher scores are
strongly favored while every pooled candidate keeps a non-zero chance.

Everything here is a pure function of its inputs; randomness comes from the
random.Random passed in.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

MIN_POOL_SIZE = 30
POOL_FRACTION = 0.5
WEIGHT_EXPONENT = 1.5
WEIGHT_FLOOR = 0.1


class Scored(Protocol):
    @property
    def score(self) -> float: ...


T = TypeVar("T", bound=Scored)


def pool_size(candidate_count: int) -> int:
    """Number of top candidates eligible for the draw."""
    return min(candidate_count, max(MIN_POOL_SIZE, int(candidate_count * POOL_FRACTION)))


def build_pool(scored: Sequence[T]) -> list[T]:
    ranked = sorted(scored, key=lambda item: item.score, reverse=True)
    return ranked[: pool_size(len(ranked))]


def selection_weights(pool: Sequence[Scored]) -> list[float]:
    if not pool:
        return []
    max_score = max(item.score for item in pool)
    min_score = min(item.score for item in pool)
    score_range = max(max_score - min_score, 1)
    return [((item.score - min_score) / score_range) ** WEIGHT_EXPONENT + WEIGHT_FLOOR for item in pool]


def select_weighted(scored: Sequence[T], rng: random.Random) -> T | None:
    """Pick one candidate, or None when there are no candidates."""
    pool = build_pool(scored)
    if not pool:
        return None

    weights = selection_weights(pool)
    remaining = rng.random() * sum(weights)
    for item, weight in zip(pool, weights):
        remaining -= weight
        if remaining <= 0:
            return item
    # Float rounding can leave a tiny positive remainder
    return pool[-1]
