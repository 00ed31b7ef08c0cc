"""Value normalization for catalog and history ingestion."""

from __future__ import annotations

import re
from datetime import date, datetime

from youtubefit.db.models import DEFAULT_REPEAT_COOLDOWN_DAYS, MAX_REPEAT_COOLDOWN_DAYS, SQL_INT_MAX, SQL_INT_MIN

YT_ID_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([a-zA-Z0-9_-]{11})"),
    re.compile(r"^([a-zA-Z0-9_-]{11})$"),
)
CHANNEL_CODE_PATTERN = re.compile(r"^YF-([A-Z]+)")
CHANNEL_HANDLE_PATTERN = re.compile(r"@([^/]+)")
SHORT_DATE_PATTERN = re.compile(r"(\d+)/(\d+)/(\d+)")
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

UNKNOWN_CHANNEL_CODE = "UNK"


def video_url_for(yt_id: str) -> str:
    return f"https://www.youtube.com/watch?v={yt_id}"


def extract_yt_id(url: str | None) -> str | None:
    """Extract the 11-character video id from a watch/short/embed URL or a bare id."""
    if not url:
        return None
    for pattern in YT_ID_PATTERNS:
        match = pattern.search(url.strip())
        if match:
            return match.group(1)
    return None


def extract_channel_code(workout_id: str | None) -> str | None:
    """Channel code from a workout id prefix (YF-FM04 -> FM)."""
    if not workout_id:
        return None
    match = CHANNEL_CODE_PATTERN.match(workout_id)
    return match.group(1) if match else None


def channel_code_from_url(channel_url: str | None) -> str:
    """First two letters of a channel URL handle (.../@FitnessMarshall -> FI)."""
    match = CHANNEL_HANDLE_PATTERN.search(channel_url or "")
    if not match:
        return UNKNOWN_CHANNEL_CODE
    letters = re.sub(r"[^A-Z]", "", match.group(1).upper())[:2]
    return letters or UNKNOWN_CHANNEL_CODE


def normalize_category(value: str | None) -> str:
    lower = (value or "").strip().lower()
    if lower in ("yoga", "warmup", "cooldown"):
        return lower
    return "workout"


def normalize_intensity(value: str | None) -> str:
    lower = (value or "").strip().lower()
    return lower or "medium"


def normalize_equipment(value: str | None) -> str:
    lower = (value or "").strip().lower()
    if not lower or lower == "mat":
        return "none"
    if lower in ("none", "bands", "dumbbells"):
        return lower
    return "other"


def normalize_flag(value: str | None) -> bool:
    """Y/N column to bool."""
    return (value or "").strip().upper() == "Y"


def normalize_link_status(value: str | None) -> str:
    lower = (value or "").strip().lower()
    return lower or "ok"


def parse_rating(value: str | None) -> int | None:
    """Rating in 1..4, else None."""
    try:
        rating = int((value or "").strip())
    except ValueError:
        return None
    return rating if 1 <= rating <= 4 else None


def parse_positive_int(value: str | None, default: int) -> int:
    try:
        parsed = int((value or "").strip())
    except ValueError:
        return default
    if not SQL_INT_MIN <= parsed <= SQL_INT_MAX:
        return default
    return parsed or default


def parse_duration(value: str | None) -> int:
    return parse_positive_int(value, 0)


def parse_cooldown_days(value: str | None) -> int:
    return min(parse_positive_int(value, DEFAULT_REPEAT_COOLDOWN_DAYS), MAX_REPEAT_COOLDOWN_DAYS)


def parse_date(value: str | None) -> date | None:
    """Parse ISO (YYYY-MM-DD) or US short (MM/DD/YY, MM/DD/YYYY) dates."""
    text = (value or "").strip()
    if not text:
        return None
    if ISO_DATE_PATTERN.match(text):
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None
    match = SHORT_DATE_PATTERN.search(text)
    if not match:
        return None
    month, day, year = match.groups()
    full_year = f"20{year}" if len(year) == 2 else year
    try:
        return datetime(int(full_year), int(month), int(day)).date()
    except ValueError:
        return None
