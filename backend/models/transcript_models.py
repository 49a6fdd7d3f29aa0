"""
Data models for transcript segments and chapters.
"""
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


@dataclass(frozen=True)
class Segment:
    """One transcript utterance with its start time."""
    start_sec: float
    start: str  # formatted timestamp, MM:SS or HH:MM:SS
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"startSec": self.start_sec, "start": self.start, "text": self.text}


@dataclass(frozen=True)
class Chapter:
    """A named timestamp marker. `start` may be empty for free-text lines."""
    start: str
    title: str

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start, "title": self.title}


@dataclass
class NormalizedTranscript:
    """Result of normalizing a provider payload.

    `strategy` names the extraction strategy that produced the segments, or is
    None when nothing usable was found (including unparseable payloads).
    """
    segments: List[Segment] = field(default_factory=list)
    strategy: Optional[str] = None

    @property
    def found(self) -> bool:
        return bool(self.segments)
