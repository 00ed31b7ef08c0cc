"""Tests for ingestion value normalization."""

from datetime import date

import pytest

from youtubefit.ingestion.normalize import (
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
)


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=30s", "dQw4w9WgXcQ"),
        ("https://youtu.be/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/embed/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://example.com/video", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_yt_id(url, expected):
    assert extract_yt_id(url) == expected


def test_channel_codes():
    assert extract_channel_code("YF-FM04") == "FM"
    assert extract_channel_code("custom-id") is None
    assert channel_code_from_url("https://www.youtube.com/@FitnessMarshall") == "FI"
    assert channel_code_from_url("https://www.youtube.com/@caroline.girvan/videos") == "CA"
    assert channel_code_from_url("https://www.youtube.com/channel/UC123") == "UNK"
    assert channel_code_from_url(None) == "UNK"


def test_normalize_enums():
    assert normalize_category("Warmup") == "warmup"
    assert normalize_category("strength") == "workout"
    assert normalize_category(None) == "workout"
    assert normalize_intensity("HIGH") == "high"
    assert normalize_intensity("") == "medium"
    assert normalize_equipment("Mat") == "none"
    assert normalize_equipment("") == "none"
    assert normalize_equipment("Dumbbells") == "dumbbells"
    assert normalize_equipment("kettlebell") == "other"
    assert normalize_link_status("") == "ok"
    assert normalize_link_status("Dead") == "dead"


def test_normalize_flag():
    assert normalize_flag("Y") is True
    assert normalize_flag(" y ") is True
    assert normalize_flag("N") is False
    assert normalize_flag("yes") is False
    assert normalize_flag(None) is False


def test_numbers():
    assert parse_rating("3") == 3
    assert parse_rating("5") is None
    assert parse_rating("0") is None
    assert parse_rating("great") is None
    assert parse_duration("25") == 25
    assert parse_duration("") == 0
    assert parse_cooldown_days("") == 5
    assert parse_cooldown_days("0") == 5
    assert parse_cooldown_days("14") == 14
    assert parse_cooldown_days("800000") == 3650
    assert parse_duration("99999999999999999999") == 0


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2025-03-05", date(2025, 3, 5)),
        ("03/05/25", date(2025, 3, 5)),
        ("3/5/2025", date(2025, 3, 5)),
        ("13/45/25", None),
        ("2025-02-30", None),
        ("yesterday", None),
        ("", None),
    ],
)
def test_parse_date(raw, expected):
    assert parse_date(raw) == expected
