"""CSV import of the workout catalog and workout history.

Rows are committed one at a time, so a bad row is recorded in
ImportResult.errors and skipped without aborting the rest of the file.
"""

from __future__ import annotations

import csv
import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from youtubefit.catalog.repository import WorkoutCatalog
from youtubefit.catalog.yoga import classify_category
from youtubefit.db.models import FULL_BODY, Workout, WorkoutHistory
from youtubefit.ingestion.normalize import (
    UNKNOWN_CHANNEL_CODE,
    channel_code_from_url,
    extract_channel_code,
    extract_yt_id,
    normalize_category,
    normalize_equipment,
    normalize_flag,
    normalize_intensity,
    normalize_link_status,
    parse_cooldown_days,
    parse_date,
    parse_duration,
    parse_rating,
    video_url_for,
)


@dataclass
class ImportResult:
    imported: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)

    def skip(self, error: str | None = None) -> None:
        self.skipped += 1
        if error:
            self.errors.append(error)


def read_csv_rows(path: str | Path) -> list[dict[str, str]]:
    """Read a CSV file with a header row, trimming every value and dropping blank lines."""
    with Path(path).open(encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        rows = []
        for raw in reader:
            row = {(key or "").strip(): (value or "").strip() for key, value in raw.items() if key is not None}
            if any(row.values()):
                rows.append(row)
    logger.debug(f"Read {len(rows)} rows from {path}")
    return rows


def _row_repr(row: dict[str, str]) -> str:
    return json.dumps(row, ensure_ascii=False)


def generate_workout_id(session: Session, channel_code: str | None) -> str:
    """Next free id for a channel: YF-<code><NN>, NN two digits."""
    code = channel_code or UNKNOWN_CHANNEL_CODE
    prefix = f"YF-{code}"
    last_id = session.execute(
        select(Workout.workout_id)
        .where(Workout.workout_id.like(f"{prefix}%"))
        .order_by(Workout.workout_id.desc())
        .limit(1)
    ).scalar_one_or_none()
    if last_id:
        digits = len(last_id) - len(last_id.rstrip("0123456789"))
        if digits:
            return f"{prefix}{int(last_id[-digits:]) + 1:02d}"
    return f"{prefix}01"


def _resolve_workout_id(session: Session, catalog: WorkoutCatalog, row: dict[str, str]) -> str:
    workout_id = row.get("Workout_ID", "")
    if not workout_id:
        return generate_workout_id(session, channel_code_from_url(row.get("Channel_URL")))
    if catalog.exists(workout_id):
        # Same id already used by a different video
        return generate_workout_id(session, extract_channel_code(workout_id))
    return workout_id


def _build_workout(workout_id: str, yt_id: str, row: dict[str, str]) -> Workout:
    title = row.get("Workout_Title") or row.get("YT_Title") or "Untitled"
    channel_name = row.get("Uploader_Name") or "Unknown"
    return Workout(
        workout_id=workout_id,
        yt_id=yt_id,
        title=title,
        channel_name=channel_name,
        channel_code=extract_channel_code(workout_id),
        video_url=row.get("Video_URL") or video_url_for(yt_id),
        category=classify_category(normalize_category(row.get("Type")), title, channel_name),
        primary_target=row.get("Primary_Target") or FULL_BODY,
        target_tag1=row.get("Target_Tag1") or None,
        target_tag2=row.get("Target_Tag2") or None,
        intensity=normalize_intensity(row.get("Intensity")),
        duration_min=parse_duration(row.get("Duration_Min")),
        equipment=normalize_equipment(row.get("Equipment")),
        vetted=normalize_flag(row.get("Vetted")),
        do_not_recommend=normalize_flag(row.get("Do_Not_Recommend")),
        rating=parse_rating(row.get("Rating")),
        repeat_cooldown_days=parse_cooldown_days(row.get("Repeat_Cooldown_Days")),
        link_status=normalize_link_status(row.get("Link_Status")),
        last_checked=parse_date(row.get("Last_Checked")),
    )


def import_workout_rows(session: Session, rows: Iterable[dict[str, str]]) -> ImportResult:
    """Insert catalog rows. Rows whose video is already in the catalog are skipped silently."""
    catalog = WorkoutCatalog(session)
    result = ImportResult()

    for row in rows:
        yt_id = row.get("YT_ID") or extract_yt_id(row.get("Video_URL"))
        if not yt_id:
            result.skip(f"Row missing YT_ID: {_row_repr(row)}")
            continue
        if catalog.get_by_yt_id(yt_id) is not None:
            result.skip()
            continue

        try:
            workout_id = _resolve_workout_id(session, catalog, row)
            session.add(_build_workout(workout_id, yt_id, row))
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning(f"Failed to import workout row: {e}")
            result.skip(f"Error importing row: {e} - {_row_repr(row)}")
            continue
        result.imported += 1

    logger.info(f"Workout import: imported={result.imported} skipped={result.skipped} errors={len(result.errors)}")
    return result


def import_history_rows(session: Session, rows: Iterable[dict[str, str]]) -> ImportResult:
    """Append history rows. Every referenced workout must already exist."""
    catalog = WorkoutCatalog(session)
    result = ImportResult()

    for row in rows:
        workout_id = row.get("Workout_ID", "")
        if not row.get("Date") or not workout_id:
            result.skip(f"Row missing required fields: {_row_repr(row)}")
            continue

        entry_date = parse_date(row["Date"])
        if entry_date is None:
            result.skip(f"Invalid date format: {row['Date']}")
            continue

        if not catalog.exists(workout_id):
            result.skip(f"Workout not found: {workout_id}")
            continue
        warmup_id = row.get("Warmup_ID") or None
        if warmup_id and not catalog.exists(warmup_id):
            result.skip(f"Warmup not found: {warmup_id}")
            continue
        cooldown_id = row.get("Cooldown_ID") or None
        if cooldown_id and not catalog.exists(cooldown_id):
            result.skip(f"Cooldown not found: {cooldown_id}")
            continue

        try:
            session.add(
                WorkoutHistory(
                    date=entry_date,
                    workout_id=workout_id,
                    warmup_id=warmup_id,
                    cooldown_id=cooldown_id,
                )
            )
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning(f"Failed to import history row: {e}")
            result.skip(f"Error importing history row: {e} - {_row_repr(row)}")
            continue
        result.imported += 1

    logger.info(f"History import: imported={result.imported} skipped={result.skipped} errors={len(result.errors)}")
    return result


def import_workouts_from_csv(session: Session, path: str | Path) -> ImportResult:
    logger.info(f"Importing workouts from {path}")
    return import_workout_rows(session, read_csv_rows(path))


def import_history_from_csv(session: Session, path: str | Path) -> ImportResult:
    logger.info(f"Importing history from {path}")
    return import_history_rows(session, read_csv_rows(path))
