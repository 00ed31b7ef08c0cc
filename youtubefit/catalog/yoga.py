"""Yoga classification.

category = "yoga" is the canonical marker for yoga content. The keyword
heuristic below (title or channel mentioning yoga, or a known yoga
instructor's channel) is applied when workouts enter the catalog and once at
startup to reclassify older rows.
"""

from __future__ import annotations

from loguru import logger
from sqlalchemy import ColumnElement, String, func, or_, update
from sqlalchemy.orm import Session

from youtubefit.config.settings import settings
from youtubefit.db.models import Workout

YOGA_KEYWORD = "yoga"


def looks_like_yoga(title: str | None, channel_name: str | None, aliases: list[str] | None = None) -> bool:
    """Return True when the title or channel suggests yoga content."""
    aliases = settings.yoga_aliases if aliases is None else aliases
    title_lower = (title or "").lower()
    channel_lower = (channel_name or "").lower()
    if YOGA_KEYWORD in title_lower or YOGA_KEYWORD in channel_lower:
        return True
    return any(alias in channel_lower for alias in aliases)


def is_yoga_workout(workout: Workout) -> bool:
    if workout.category == "yoga":
        return True
    if not settings.yoga_keyword_fallback:
        return False
    return looks_like_yoga(workout.title, workout.channel_name)


def classify_category(category: str, title: str | None, channel_name: str | None) -> str:
    """Promote a plain "workout" to "yoga" when the keyword heuristic matches.

    Warmups and cooldowns keep their category.
    """
    if category == "workout" and looks_like_yoga(title, channel_name):
        return "yoga"
    return category


def yoga_keyword_clause(aliases: list[str] | None = None) -> ColumnElement[bool]:
    """SQL expression equivalent to looks_like_yoga()."""
    aliases = settings.yoga_aliases if aliases is None else aliases
    title = func.lower(Workout.title, type_=String)
    channel = func.lower(Workout.channel_name, type_=String)
    clauses = [title.contains(YOGA_KEYWORD), channel.contains(YOGA_KEYWORD)]
    clauses.extend(channel.contains(alias) for alias in aliases)
    return or_(*clauses)


def reclassify_yoga_workouts(session: Session) -> int:
    """Rewrite keyword-matching "workout" rows to category "yoga".

    Returns:
        Number of rows updated
    """
    result = session.execute(
        update(Workout)
        .where(Workout.category == "workout")
        .where(yoga_keyword_clause())
        .values(category="yoga")
        .execution_options(synchronize_session=False)
    )
    updated = result.rowcount or 0
    if updated:
        logger.info(f"Reclassified {updated} workouts as yoga")
    else:
        logger.debug("No workouts needed yoga reclassification")
    return updated
