"""Candidate filter.

Caller-supplied filters are sanitized permissively: blank values and
unparseable numbers are treated as absent rather than rejected. Enum-like
values (intensity, equipment) are lower-cased and passed through, so an
unknown value matches nothing and surfaces as "no candidates".
"""

from __future__ import annotations

import re

from youtubefit.catalog.repository import CatalogQuery
from youtubefit.db.models import SQL_INT_MAX, SQL_INT_MIN
from youtubefit.recommendation.types import RecommendationFilters

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
SQL_INT_DIGITS = len(str(SQL_INT_MAX))
_TRUE_VALUES = {"true", "1"}


def parse_int(value: str | int | None) -> int | None:
    """Parse the leading integer of value.

    Returns None when there is none or when it does not fit a SQL integer.
    """
    if value is None:
        return None
    if isinstance(value, int):
        parsed = value
    else:
        match = _LEADING_INT.match(value)
        if not match or len(match.group(1).lstrip("+-")) > SQL_INT_DIGITS:
            return None
        parsed = int(match.group(1))
    return parsed if SQL_INT_MIN <= parsed <= SQL_INT_MAX else None


def parse_bool(value: str | bool | None) -> bool:
    if isinstance(value, bool):
        return value
    return (value or "").strip().lower() in _TRUE_VALUES


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _clean_enum(value: str | None) -> str | None:
    value = _clean(value)
    return value.lower() if value else None


def parse_channels(value: str | list[str] | None) -> tuple[str, ...]:
    """Split a comma-separated channel list, dropping blanks."""
    if not value:
        return ()
    parts = value.split(",") if isinstance(value, str) else value
    return tuple(part.strip() for part in parts if part and part.strip())


def sanitize_filters(
    target: str | None = None,
    duration_min: str | int | None = None,
    duration_max: str | int | None = None,
    intensity: str | None = None,
    equipment: str | None = None,
    yoga: str | bool | None = None,
    special_tag: str | None = None,
    channels: str | list[str] | None = None,
) -> RecommendationFilters:
    return RecommendationFilters(
        target=_clean(target),
        duration_min=parse_int(duration_min),
        duration_max=parse_int(duration_max),
        intensity=_clean_enum(intensity),
        equipment=_clean_enum(equipment),
        yoga=parse_bool(yoga),
        special_tag=_clean(special_tag),
        channels=parse_channels(channels),
    )


def build_candidate_query(filters: RecommendationFilters) -> CatalogQuery:
    """Translate recommendation filters into a catalog query.

    Hard filters are always on. Yoga mode matches yoga content and skips the
    target, special tag, channel, intensity and equipment filters; duration
    bounds apply in both modes.
    """
    if filters.yoga:
        return CatalogQuery(
            yoga=True,
            min_duration=filters.duration_min,
            max_duration=filters.duration_max,
            recommendable_only=True,
        )
    return CatalogQuery(
        category="workout",
        target=filters.target,
        special_tag=filters.special_tag,
        channels=filters.channels,
        intensity=filters.intensity,
        equipment=filters.equipment,
        min_duration=filters.duration_min,
        max_duration=filters.duration_max,
        recommendable_only=True,
    )
