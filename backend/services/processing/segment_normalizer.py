"""
Normalize transcript-provider JSON into an ordered list of segments.

Providers return several shapes: a list of videos carrying language `tracks`,
a list or object with a flat `transcript` or `segments` array, or an object
wrapping the transcript under `data`. Each shape is handled by one strategy;
strategies run in a fixed order and the first non-empty result wins.
"""
import json
import logging
from typing import Any, Callable, List, Optional, Tuple, Union

from models.transcript_models import NormalizedTranscript, Segment
from services.processing.utils import as_number, as_text, format_timestamp, parse_decimal

logger = logging.getLogger(__name__)

Payload = Union[str, bytes, list, dict, None]
Strategy = Callable[[Any], Optional[List[Segment]]]


def _entry_text(entry: dict) -> str:
    return as_text(entry.get("text")).replace("\n", " ").strip()


def _offset_seconds(entry: dict) -> float:
    if "offset" in entry:
        return as_number(entry["offset"]) / 1000.0
    return 0.0


def _segment(start_sec: float, text: str) -> Segment:
    if start_sec < 0:
        start_sec = 0.0
    return Segment(start_sec=start_sec, start=format_timestamp(start_sec), text=text)


def extract_track_entries(entries: Any) -> List[Segment]:
    """Track-style extractor: `start` is parsed from its string form."""
    if not isinstance(entries, list):
        return []

    segments = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        text = _entry_text(entry)
        if not text:
            continue

        if "start" in entry:
            # An unparseable start is 0.0; it never falls through to offset
            start_sec = parse_decimal(entry["start"]) or 0.0
        else:
            start_sec = _offset_seconds(entry)

        segments.append(_segment(start_sec, text))
    return segments


def extract_generic_entries(entries: Any) -> List[Segment]:
    """Generic extractor: `start` is read directly as a number."""
    if not isinstance(entries, list):
        return []

    segments = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        text = _entry_text(entry)
        if not text:
            continue

        if "start" in entry:
            start_sec = as_number(entry["start"])
        else:
            start_sec = _offset_seconds(entry)

        segments.append(_segment(start_sec, text))
    return segments


def _has_entries(track: Any) -> bool:
    if not isinstance(track, dict):
        return False
    transcript = track.get("transcript")
    return isinstance(transcript, list) and len(transcript) > 0


def choose_track(tracks: List[Any]) -> Optional[dict]:
    """Pick an English track with entries, else the first track with entries."""
    for track in tracks:
        if not _has_entries(track):
            continue
        if "english" in as_text(track.get("language")).lower():
            return track
    for track in tracks:
        if _has_entries(track):
            return track
    return None


def _first_item(payload: Any) -> Optional[dict]:
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        return payload[0]
    return None


def from_tracks(payload: Any) -> Optional[List[Segment]]:
    first = _first_item(payload)
    if first is None or not isinstance(first.get("tracks"), list):
        return None
    track = choose_track(first["tracks"])
    if track is None:
        return None
    return extract_track_entries(track.get("transcript"))


def from_first_transcript(payload: Any) -> Optional[List[Segment]]:
    first = _first_item(payload)
    if first is None or "transcript" not in first:
        return None
    return extract_track_entries(first["transcript"])


def from_first_segments(payload: Any) -> Optional[List[Segment]]:
    first = _first_item(payload)
    if first is None or "segments" not in first:
        return None
    return extract_generic_entries(first["segments"])


def from_object_transcript(payload: Any) -> Optional[List[Segment]]:
    if not isinstance(payload, dict) or "transcript" not in payload:
        return None
    return extract_track_entries(payload["transcript"])


def from_object_segments(payload: Any) -> Optional[List[Segment]]:
    if not isinstance(payload, dict) or "segments" not in payload:
        return None
    return extract_generic_entries(payload["segments"])


def from_object_data_transcript(payload: Any) -> Optional[List[Segment]]:
    if not isinstance(payload, dict):
        return None
    data = payload.get("data")
    if not isinstance(data, dict) or "transcript" not in data:
        return None
    return extract_track_entries(data["transcript"])


STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("tracks", from_tracks),
    ("transcript", from_first_transcript),
    ("segments", from_first_segments),
    ("object.transcript", from_object_transcript),
    ("object.segments", from_object_segments),
    ("object.data.transcript", from_object_data_transcript),
)


class SegmentNormalizer:
    """Turns provider payloads into canonical segments. Stateless."""

    def __init__(self, strategies: Tuple[Tuple[str, Strategy], ...] = STRATEGIES):
        self.strategies = strategies

    def extract(self, payload: Payload) -> NormalizedTranscript:
        """
        Run the strategy chain over a payload.

        Args:
            payload: Raw JSON text or an already-parsed JSON tree

        Returns:
            NormalizedTranscript; empty when no transcript is available or the
            payload could not be read.
        """
        try:
            tree = self._parse(payload)
            for name, strategy in self.strategies:
                segments = strategy(tree)
                if segments:
                    logger.debug(f"Transcript normalized via '{name}' ({len(segments)} segments)")
                    return NormalizedTranscript(segments=segments, strategy=name)
        except Exception as e:
            logger.warning(f"Could not normalize transcript payload: {e}")
            return NormalizedTranscript()

        logger.info("No transcript found in provider payload")
        return NormalizedTranscript()

    def normalize(self, payload: Payload) -> List[Segment]:
        """Return the normalized segments, or an empty list."""
        return self.extract(payload).segments

    @staticmethod
    def _parse(payload: Payload) -> Any:
        if isinstance(payload, (bytes, bytearray)):
            payload = payload.decode("utf-8")
        if isinstance(payload, str):
            return json.loads(payload)
        return payload


# Global normalizer instance
segment_normalizer = SegmentNormalizer()


def normalize(payload: Payload) -> List[Segment]:
    """Normalize a provider payload with the default strategy chain."""
    return segment_normalizer.normalize(payload)
