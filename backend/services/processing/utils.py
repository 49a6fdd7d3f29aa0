"""
Shared utilities for transcript processing.
"""
import json
import math
import re
from typing import Any, Iterable, Mapping, Optional, Union

from models.transcript_models import Segment


def format_timestamp(seconds: float) -> str:
    """
    Convert seconds to MM:SS, or HH:MM:SS from one hour on.

    Fractional seconds are floored. Negative and non-finite values are clamped
    to zero.
    """
    if seconds is None or not math.isfinite(seconds) or seconds < 0:
        seconds = 0.0
    total = int(math.floor(seconds))
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?[fFdD]?", re.ASCII)


def parse_decimal(value: Any) -> Optional[float]:
    """
    Parse a value's string form as a finite decimal, or return None.

    Only plain decimal and exponent notation is accepted, so Python-only
    spellings such as "1_000" are rejected.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        text = str(value).strip()
    except ValueError:
        return None
    if not _DECIMAL.fullmatch(text):
        return None
    number = float(text.rstrip("fFdD"))
    return number if math.isfinite(number) else None


def as_number(value: Any) -> float:
    """Read a JSON value as a number; numeric strings count, anything else is 0.0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
        return number if math.isfinite(number) else 0.0
    if isinstance(value, str):
        return parse_decimal(value) or 0.0
    return 0.0


def as_text(value: Any) -> str:
    """Read a JSON scalar as text. Null and containers read as empty."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return json.dumps(value)
    return ""


SegmentLike = Union[Segment, Mapping[str, Any]]


def segments_to_flat_text(segments: Iterable[SegmentLike]) -> str:
    """Turn segments into "[mm:ss] text" lines, the model's input format."""
    lines = []
    for seg in segments:
        if isinstance(seg, Segment):
            sec, text = seg.start_sec, seg.text
        else:
            sec = as_number(seg.get("startSec"))
            text = as_text(seg.get("text"))
        lines.append(f"[{format_timestamp(sec)}] {text}\n")
    return "".join(lines)
