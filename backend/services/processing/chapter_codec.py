"""
Conversion between chapter objects and the flat "MM:SS Title" text block.

The text form is what users see and edit. Parsing splits each line on its
first space, so a start value that itself contains a space does not survive a
round trip.
"""
import json
import logging
import re
from typing import Any, Iterable, List, Mapping, Union

from models.transcript_models import Chapter
from services.processing.utils import as_text

logger = logging.getLogger(__name__)

ChapterLike = Union[Chapter, Mapping[str, Any]]

_LINE_BREAK = re.compile(r"\r?\n")


def _fields(chapter: ChapterLike):
    if isinstance(chapter, Chapter):
        return chapter.start, chapter.title
    return as_text(chapter.get("start")), as_text(chapter.get("title"))


def to_text(chapters: Iterable[ChapterLike]) -> str:
    """Render chapters as one "<start> <title>" line each."""
    lines = []
    for chapter in chapters or []:
        start, title = _fields(chapter)
        lines.append(f"{start} {title}".strip())
    return "\n".join(lines)


def from_text(text: str) -> List[Chapter]:
    """
    Parse a flat text block back into chapters.

    Blank lines are skipped. A line without a space becomes a title with an
    empty start; a line whose title is empty after the split ("00:00 ")
    reuses the start as its title.
    """
    chapters = []
    for line in _LINE_BREAK.split(text or ""):
        # Only leading whitespace goes before the split, so a trailing space
        # still marks an empty title
        line = line.lstrip()
        if not line.strip():
            continue

        space = line.find(" ")
        if space <= 0:
            chapters.append(Chapter(start="", title=line.strip()))
            continue

        start = line[:space].strip()
        title = line[space + 1:].strip()
        chapters.append(Chapter(start=start, title=title or start))
    return chapters


def from_json(value: Any) -> List[Chapter]:
    """
    Read a JSON chapter array (text or parsed) into chapters.

    Items without a non-blank start and title are dropped. Anything that is
    not an array gives an empty list.
    """
    if isinstance(value, (str, bytes)):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except ValueError as e:
            logger.warning(f"Could not parse chapters JSON: {e}")
            return []

    if not isinstance(value, list):
        return []

    chapters = []
    for item in value:
        if not isinstance(item, Mapping):
            continue
        start, title = _fields(item)
        if start.strip() and title.strip():
            chapters.append(Chapter(start=start, title=title))
    return chapters


def to_json(chapters: Iterable[ChapterLike]) -> str:
    """Serialize chapters as a JSON array of {start, title} objects."""
    return json.dumps([dict(zip(("start", "title"), _fields(c))) for c in chapters])
