"""
Unit tests for the chapter text codec and timestamp helpers.
"""
import json

import pytest

from models.transcript_models import Chapter, Segment
from services.processing import chapter_codec
from services.processing.utils import format_timestamp, segments_to_flat_text


class TestFormatTimestamp:

    @pytest.mark.parametrize("seconds,expected", [
        (0, "00:00"),
        (59.999, "00:59"),
        (3599, "59:59"),
        (3600, "01:00:00"),
        (3661, "01:01:01"),
        (36000, "10:00:00"),
        (360000, "100:00:00"),
    ])
    def test_format(self, seconds, expected):
        assert format_timestamp(seconds) == expected

    def test_negative_clamps_to_zero(self):
        assert format_timestamp(-5) == "00:00"

    def test_non_finite_clamps_to_zero(self):
        assert format_timestamp(float("nan")) == "00:00"
        assert format_timestamp(float("inf")) == "00:00"


class TestToText:

    def test_empty(self):
        assert chapter_codec.to_text([]) == ""

    def test_single_chapter(self):
        assert chapter_codec.to_text([Chapter(start="01:02", title="Intro")]) == "01:02 Intro"

    def test_accepts_mappings(self):
        chapters = [{"start": "00:00", "title": "Start"}, {"start": "05:10", "title": "Middle part"}]

        assert chapter_codec.to_text(chapters) == "00:00 Start\n05:10 Middle part"

    def test_empty_start_renders_title_only(self):
        assert chapter_codec.to_text([Chapter(start="", title=" Outro ")]) == "Outro"

    def test_missing_or_null_fields(self):
        assert chapter_codec.to_text([{"title": "No start"}, {"start": "00:10", "title": None}]) == (
            "No start\n00:10"
        )


class TestFromText:

    def test_blank_line_skipped_and_no_space_line(self):
        assert chapter_codec.from_text("01:02 Intro\n\nOutro") == [
            Chapter(start="01:02", title="Intro"),
            Chapter(start="", title="Outro"),
        ]

    def test_title_falls_back_to_start(self):
        assert chapter_codec.from_text("00:00 ") == [Chapter(start="00:00", title="00:00")]

    def test_trailing_whitespace_after_start(self):
        assert chapter_codec.from_text("  05:00 \t") == [Chapter(start="05:00", title="05:00")]

    def test_crlf_line_endings(self):
        assert chapter_codec.from_text("00:00 A\r\n01:00 B\r\n") == [
            Chapter(start="00:00", title="A"),
            Chapter(start="01:00", title="B"),
        ]

    def test_splits_on_first_space_only(self):
        assert chapter_codec.from_text("  12:34   Deep   dive  ") == [
            Chapter(start="12:34", title="Deep   dive"),
        ]

    def test_first_token_need_not_be_a_timestamp(self):
        assert chapter_codec.from_text("Chapter one") == [Chapter(start="Chapter", title="one")]

    def test_empty_and_none(self):
        assert chapter_codec.from_text("") == []
        assert chapter_codec.from_text(None) == []
        assert chapter_codec.from_text("\n \n\t\n") == []


class TestRoundTrip:

    @pytest.mark.parametrize("chapters", [
        [],
        [Chapter(start="00:00", title="Intro")],
        [
            Chapter(start="00:00", title="Welcome and overview"),
            Chapter(start="04:31", title="Setting up: the basics"),
            Chapter(start="1:02:03", title="Q&A"),
        ],
    ])
    def test_text_round_trip(self, chapters):
        assert chapter_codec.from_text(chapter_codec.to_text(chapters)) == chapters

    def test_start_with_space_is_lossy(self):
        chapters = [Chapter(start="00 01", title="Intro")]

        assert chapter_codec.from_text(chapter_codec.to_text(chapters)) == [
            Chapter(start="00", title="01 Intro"),
        ]


class TestFromJson:

    def test_filters_incomplete_items(self):
        raw = json.dumps([
            {"start": "00:00", "title": "Keep"},
            {"start": "", "title": "No start"},
            {"start": "01:00", "title": "  "},
            {"title": "Missing start"},
            "not an object",
        ])

        assert chapter_codec.from_json(raw) == [Chapter(start="00:00", title="Keep")]

    @pytest.mark.parametrize("value", ["", "{bad", '{"start": "00:00"}', None, 5])
    def test_non_array_is_empty(self, value):
        assert chapter_codec.from_json(value) == []

    def test_to_json(self):
        encoded = chapter_codec.to_json([Chapter(start="00:00", title="A"), {"start": "01:00", "title": "B"}])

        assert json.loads(encoded) == [{"start": "00:00", "title": "A"}, {"start": "01:00", "title": "B"}]


class TestFlatText:

    def test_segments_to_flat_text(self):
        segments = [
            Segment(start_sec=0.0, start="00:00", text="hello"),
            Segment(start_sec=3725.9, start="01:02:05", text="later"),
        ]

        assert segments_to_flat_text(segments) == "[00:00] hello\n[01:02:05] later\n"

    def test_mapping_segments_with_string_start(self):
        segments = [{"startSec": "65", "text": "a"}, {"startSec": "oops", "text": "b"}]

        assert segments_to_flat_text(segments) == "[01:05] a\n[00:00] b\n"
