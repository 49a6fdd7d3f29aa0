"""
Unit tests for transcript payload normalization.
"""
import json

import pytest

from models.transcript_models import Segment
from services.processing.segment_normalizer import (
    SegmentNormalizer,
    choose_track,
    extract_generic_entries,
    extract_track_entries,
    normalize,
)


def track(language, *texts):
    return {
        "language": language,
        "transcript": [{"start": str(i * 5), "text": t} for i, t in enumerate(texts)],
    }


class TestTrackSelection:
    """Test language track preference."""

    def test_english_track_wins_regardless_of_position(self):
        """English is picked even when listed after other tracks."""
        payload = [{"tracks": [
            track("German", "hallo"),
            track("French", "bonjour"),
            track("English (auto-generated)", "hello"),
        ]}]

        segments = normalize(payload)

        assert [s.text for s in segments] == ["hello"]

    def test_language_match_is_case_insensitive(self):
        payload = [{"tracks": [track("Spanish", "hola"), track("ENGLISH", "hi")]}]

        assert normalize(payload)[0].text == "hi"

    def test_first_track_with_entries_when_no_english(self):
        """Without an English track the first non-empty track is used."""
        payload = [{"tracks": [
            {"language": "German", "transcript": []},
            track("French", "bonjour"),
            track("Italian", "ciao"),
        ]}]

        assert [s.text for s in normalize(payload)] == ["bonjour"]

    def test_empty_english_track_is_skipped(self):
        tracks = [{"language": "English", "transcript": []}, track("Dutch", "hoi")]

        assert choose_track(tracks)["language"] == "Dutch"

    def test_no_track_has_entries(self):
        assert choose_track([{"language": "English"}, {"transcript": []}]) is None

    def test_blank_chosen_track_falls_through_to_transcript(self):
        """A chosen track with only blank text yields nothing, so later strategies run."""
        payload = [{
            "tracks": [{"language": "English", "transcript": [{"text": "  "}]}],
            "transcript": [{"start": "1", "text": "fallback"}],
        }]

        segments = SegmentNormalizer().extract(payload)

        assert segments.strategy == "transcript"
        assert segments.segments[0].text == "fallback"


class TestStrategyOrder:
    """Test the fixed priority of payload shapes."""

    def test_list_transcript(self):
        payload = [{"transcript": [{"start": "2.0", "text": "a"}]}]

        result = SegmentNormalizer().extract(payload)

        assert result.strategy == "transcript"
        assert result.segments == [Segment(start_sec=2.0, start="00:02", text="a")]

    def test_list_segments(self):
        payload = [{"segments": [{"start": 61, "text": "b"}]}]

        result = SegmentNormalizer().extract(payload)

        assert result.strategy == "segments"
        assert result.segments[0].start == "01:01"

    def test_object_transcript_before_segments(self):
        payload = {
            "transcript": [{"start": "1", "text": "from transcript"}],
            "segments": [{"start": 2, "text": "from segments"}],
        }

        assert normalize(payload)[0].text == "from transcript"

    def test_object_segments(self):
        payload = {"segments": [{"start": 3, "text": "seg"}]}

        assert SegmentNormalizer().extract(payload).strategy == "object.segments"

    def test_object_data_transcript(self):
        payload = {"data": {"transcript": [{"offset": 4000, "text": "nested"}]}}

        result = SegmentNormalizer().extract(payload)

        assert result.strategy == "object.data.transcript"
        assert result.segments[0].start_sec == 4.0

    def test_unrecognized_shape_is_empty(self):
        result = SegmentNormalizer().extract({"items": [{"text": "x"}]})

        assert result.segments == []
        assert result.strategy is None
        assert result.found is False

    def test_empty_list_payload(self):
        assert normalize([]) == []

    def test_accepts_raw_json_text(self):
        raw = json.dumps([{"transcript": [{"start": "12.5", "text": "hello"}]}])

        assert normalize(raw) == [Segment(start_sec=12.5, start="00:12", text="hello")]

    def test_accepts_bytes(self):
        raw = json.dumps({"transcript": [{"start": "1", "text": "hi"}]}).encode("utf-8")

        assert normalize(raw)[0].text == "hi"


class TestEntryExtraction:
    """Test per-entry text and start time rules."""

    def test_blank_text_dropped(self):
        assert extract_track_entries([{"text": "  \n "}]) == []
        assert normalize({"transcript": [{"text": "  \n "}]}) == []

    def test_missing_text_dropped(self):
        assert extract_track_entries([{"start": "1"}]) == []

    def test_newlines_become_spaces(self):
        segments = extract_track_entries([{"start": "0", "text": " line one\nline two "}])

        assert segments[0].text == "line one line two"

    def test_start_parsed_from_string(self):
        segment = extract_track_entries([{"start": "12.5", "text": "hello"}])[0]

        assert segment.start_sec == 12.5
        assert segment.start == "00:12"

    def test_offset_in_milliseconds(self):
        segment = extract_track_entries([{"offset": 90000, "text": "x"}])[0]

        assert segment.start_sec == 90.0
        assert segment.start == "01:30"

    def test_unparseable_start_does_not_fall_through_to_offset(self):
        """A bad start is zero even when an offset is present."""
        segment = extract_track_entries([{"start": "abc", "offset": 5000, "text": "x"}])[0]

        assert segment.start_sec == 0.0
        assert segment.start == "00:00"

    def test_generic_unparseable_start_does_not_fall_through(self):
        segment = extract_generic_entries([{"start": {"s": 1}, "offset": 5000, "text": "x"}])[0]

        assert segment.start_sec == 0.0

    def test_generic_numeric_string_start(self):
        segment = extract_generic_entries([{"start": "7.25", "text": "x"}])[0]

        assert segment.start_sec == 7.25

    def test_no_start_or_offset(self):
        assert extract_generic_entries([{"text": "x"}])[0].start_sec == 0.0

    def test_non_object_entries_skipped(self):
        segments = extract_track_entries(["text", 5, None, {"start": "1", "text": "ok"}])

        assert [s.text for s in segments] == ["ok"]

    def test_order_preserved(self):
        entries = [{"start": "30", "text": "late"}, {"start": "10", "text": "early"}]

        assert [s.text for s in extract_track_entries(entries)] == ["late", "early"]

    def test_negative_offset_clamped_to_zero(self):
        segment = normalize({"transcript": [{"offset": -5000, "text": "x"}]})[0]

        assert segment.start_sec == 0.0
        assert segment.start == "00:00"

    def test_negative_start_clamped_in_both_extractors(self):
        assert extract_track_entries([{"start": "-3.5", "text": "x"}])[0].start_sec == 0.0
        assert extract_generic_entries([{"start": -2, "text": "x"}])[0].start_sec == 0.0

    def test_oversized_offset_only_zeroes_that_entry(self):
        payload = (
            '{"transcript": [{"start": "1", "text": "good"}, '
            '{"offset": 1' + "0" * 400 + ', "text": "big"}]}'
        )

        segments = normalize(payload)

        assert [s.text for s in segments] == ["good", "big"]
        assert segments[0].start_sec == 1.0
        assert segments[1].start_sec == 0.0

    @pytest.mark.parametrize("start", ["1_000", "0x10", "\u0661\u0662", "1e", "Infinity", "NaN"])
    def test_non_decimal_start_strings_are_zero(self, start):
        segment = extract_track_entries([{"start": start, "text": "x"}])[0]

        assert segment.start_sec == 0.0

    def test_decimal_start_forms(self):
        starts = [" 4 ", "+4", "4.", ".5", "1e2", "2.5E-1"]

        secs = [extract_track_entries([{"start": s, "text": "x"}])[0].start_sec for s in starts]

        assert secs == [4.0, 4.0, 4.0, 0.5, 100.0, 0.25]


class TestErrorPolicy:
    """Malformed payloads degrade to an empty result."""

    @pytest.mark.parametrize("payload", [
        "{not json",
        "",
        "null",
        "42",
        b"\xff\xfe",
        None,
    ])
    def test_malformed_payload_is_empty(self, payload):
        assert normalize(payload) == []

    def test_wrong_typed_fields_are_empty(self):
        payload = [{"tracks": "english", "transcript": {"text": "x"}, "segments": 3}]

        assert normalize(payload) == []

    def test_segment_serialization_keys(self):
        segment = normalize({"transcript": [{"start": "3700", "text": "hour"}]})[0]

        assert segment.to_dict() == {"startSec": 3700.0, "start": "01:01:40", "text": "hour"}
