"""Tests for source id extraction and file naming."""

from datetime import UTC, datetime

import pytest

from tubeaudio.conversion.naming import (
    build_file_stem,
    extract_source_id,
    sanitize_title,
    timestamp_millis,
)

MOMENT = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/watch?feature=share&v=abc123", "abc123"),
        ("https://youtu.be/abc123?t=42", "abc123"),
        ("https://www.youtube.com/shorts/Xy_-1", "Xy_-1"),
        ("https://vimeo.com/12345", None),
        ("not a url", None),
    ],
)
def test_extract_source_id(url, expected):
    assert extract_source_id(url) == expected


def test_timestamp_millis():
    assert timestamp_millis(MOMENT) == 1714564800000


class TestSanitizeTitle:
    def test_strips_punctuation(self):
        assert sanitize_title("AC/DC: Back in Black!") == "ACDC Back in Black"

    def test_keeps_hyphens_and_unicode_letters(self):
        assert sanitize_title("Café - Déjà vu") == "Café - Déjà vu"

    def test_truncates(self):
        assert sanitize_title("a" * 80) == "a" * 50
        assert sanitize_title("abcdef", max_length=3) == "abc"


class TestBuildFileStem:
    def test_joins_parts(self):
        stem = build_file_stem("Hello, World", "abc", MOMENT)

        assert stem == "Hello World_abc_1714564800000"

    def test_drops_empty_title(self):
        assert build_file_stem("!!!", "abc", MOMENT) == "abc_1714564800000"

    def test_never_contains_path_separators(self):
        stem = build_file_stem("../../etc/passwd", "x/y", MOMENT)

        assert "/" not in stem
        assert ".." not in stem
        assert stem == "etcpasswd_xy_1714564800000"

    def test_different_moments_differ(self):
        later = datetime(2024, 5, 1, 12, 0, 1, tzinfo=UTC)

        assert build_file_stem("Song", "abc", MOMENT) != build_file_stem("Song", "abc", later)
