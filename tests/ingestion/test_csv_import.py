"""Tests for workout and history CSV import."""

import csv
from datetime import date
from pathlib import Path

import pytest
from sqlalchemy import select

from youtubefit.db.models import Workout, WorkoutHistory
from youtubefit.ingestion.csv_import import (
    generate_workout_id,
    import_history_from_csv,
    import_workout_rows,
    import_workouts_from_csv,
    read_csv_rows,
)

WORKOUT_COLUMNS = [
    "Workout_ID",
    "YT_ID",
    "Video_URL",
    "Workout_Title",
    "YT_Title",
    "Uploader_Name",
    "Channel_URL",
    "Type",
    "Primary_Target",
    "Target_Tag1",
    "Target_Tag2",
    "Intensity",
    "Duration_Min",
    "Equipment",
    "Vetted",
    "Do_Not_Recommend",
    "Rating",
    "Repeat_Cooldown_Days",
    "Link_Status",
    "Last_Checked",
]


def _write_csv(path: Path, columns: list[str], rows: list[dict[str, str]]) -> Path:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns)
        writer.writeheader()
        for row in rows:
            writer.writerow({column: row.get(column, "") for column in columns})
    return path


def _row(**overrides) -> dict[str, str]:
    row = {
        "Workout_ID": "YF-FM01",
        "YT_ID": "abcdefghijk",
        "Workout_Title": "Dance Cardio",
        "Uploader_Name": "Fitness Marshall",
        "Type": "Workout",
        "Primary_Target": "Cardio",
        "Intensity": "High",
        "Duration_Min": "20",
        "Equipment": "Mat",
        "Vetted": "Y",
        "Do_Not_Recommend": "N",
        "Rating": "4",
        "Repeat_Cooldown_Days": "",
        "Link_Status": "",
        "Last_Checked": "03/05/25",
    }
    row.update(overrides)
    return row


class TestWorkoutImport:
    def test_imports_and_normalizes_row(self, db_session, tmp_path):
        path = _write_csv(tmp_path / "workouts.csv", WORKOUT_COLUMNS, [_row()])

        result = import_workouts_from_csv(db_session, path)

        assert (result.imported, result.skipped, result.errors) == (1, 0, [])
        workout = db_session.get(Workout, "YF-FM01")
        assert workout.category == "workout"
        assert workout.channel_code == "FM"
        assert workout.video_url == "https://www.youtube.com/watch?v=abcdefghijk"
        assert workout.intensity == "high"
        assert workout.equipment == "none"
        assert workout.vetted is True
        assert workout.do_not_recommend is False
        assert workout.rating == 4
        assert workout.repeat_cooldown_days == 5
        assert workout.link_status == "ok"
        assert workout.last_checked == date(2025, 3, 5)

    def test_yt_id_from_video_url_and_yoga_classification(self, db_session):
        rows = [_row(YT_ID="", Video_URL="https://youtu.be/yogaVideo01", Workout_Title="Yoga for Hips")]

        result = import_workout_rows(db_session, rows)

        assert result.imported == 1
        workout = db_session.execute(select(Workout).where(Workout.yt_id == "yogaVideo01")).scalar_one()
        assert workout.category == "yoga"

    def test_row_without_video_id_is_an_error(self, db_session):
        result = import_workout_rows(db_session, [_row(YT_ID="", Video_URL="")])
        assert result.imported == 0
        assert result.skipped == 1
        assert result.errors[0].startswith("Row missing YT_ID")

    def test_duplicate_video_is_skipped_silently(self, db_session):
        result = import_workout_rows(db_session, [_row(), _row(Workout_ID="YF-FM02")])
        assert (result.imported, result.skipped, result.errors) == (1, 1, [])

    def test_missing_workout_id_is_generated_from_channel_url(self, db_session):
        rows = [
            _row(Workout_ID="", YT_ID="aaaaaaaaaaa", Channel_URL="https://www.youtube.com/@FitnessMarshall"),
            _row(Workout_ID="", YT_ID="bbbbbbbbbbb", Channel_URL="https://www.youtube.com/@FitnessMarshall"),
            _row(Workout_ID="", YT_ID="ccccccccccc", Channel_URL=""),
        ]

        result = import_workout_rows(db_session, rows)

        assert result.imported == 3
        ids = set(db_session.execute(select(Workout.workout_id)).scalars())
        assert ids == {"YF-FI01", "YF-FI02", "YF-UNK01"}

    def test_reused_workout_id_is_regenerated(self, db_session):
        rows = [_row(Workout_ID="YF-FM09"), _row(Workout_ID="YF-FM09", YT_ID="zzzzzzzzzzz")]

        result = import_workout_rows(db_session, rows)

        assert result.imported == 2
        assert db_session.get(Workout, "YF-FM10").yt_id == "zzzzzzzzzzz"

    def test_bad_row_does_not_abort_import(self, db_session):
        rows = [_row(Intensity="moderate"), _row(Workout_ID="YF-FM02", YT_ID="second00001")]

        result = import_workout_rows(db_session, rows)

        assert result.imported == 1
        assert result.skipped == 1
        assert result.errors[0].startswith("Error importing row")
        assert db_session.get(Workout, "YF-FM02") is not None


def test_generate_workout_id(db_session, make_workout):
    assert generate_workout_id(db_session, "QQ") == "YF-QQ01"
    make_workout(workout_id="YF-QQ07")
    assert generate_workout_id(db_session, "QQ") == "YF-QQ08"
    assert generate_workout_id(db_session, None) == "YF-UNK01"


def test_read_csv_rows_trims_and_skips_blank_lines(tmp_path):
    path = tmp_path / "rows.csv"
    path.write_text("Date,Workout_ID\n 2025-01-02 , YF-A01 \n,\n", encoding="utf-8")
    assert read_csv_rows(path) == [{"Date": "2025-01-02", "Workout_ID": "YF-A01"}]


class TestHistoryImport:
    @pytest.fixture
    def catalog(self, make_workout):
        make_workout(workout_id="YF-M01")
        make_workout(workout_id="YF-W01", category="warmup")
        make_workout(workout_id="YF-C01", category="cooldown")

    def test_imports_valid_rows_and_reports_bad_ones(self, db_session, catalog, tmp_path):
        columns = ["Date", "Workout_ID", "Warmup_ID", "Cooldown_ID"]
        rows = [
            {"Date": "2025-01-06", "Workout_ID": "YF-M01", "Warmup_ID": "YF-W01", "Cooldown_ID": "YF-C01"},
            {"Date": "01/08/25", "Workout_ID": "YF-M01"},
            {"Date": "someday", "Workout_ID": "YF-M01"},
            {"Date": "2025-01-09", "Workout_ID": "YF-NOPE"},
            {"Date": "2025-01-10", "Workout_ID": "YF-M01", "Warmup_ID": "YF-NOPE"},
            {"Date": "", "Workout_ID": "YF-M01"},
        ]
        path = _write_csv(tmp_path / "history.csv", columns, rows)

        result = import_history_from_csv(db_session, path)

        assert result.imported == 2
        assert result.skipped == 4
        assert result.errors == [
            "Invalid date format: someday",
            "Workout not found: YF-NOPE",
            "Warmup not found: YF-NOPE",
            'Row missing required fields: {"Date": "", "Workout_ID": "YF-M01", "Warmup_ID": "", "Cooldown_ID": ""}',
        ]
        dates = sorted(db_session.execute(select(WorkoutHistory.date)).scalars())
        assert dates == [date(2025, 1, 6), date(2025, 1, 8)]
