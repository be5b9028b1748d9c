"""Segmentation of a question's discussion into speaker turns.

The paragraphs following a question heading are joined with
:data:`~kamerwatch.parsing.text.PARAGRAPH_MARKER`. A new turn starts at a
paragraph that opens with a ``HH.MM`` timestamp and a speaker label ending in a
colon, or wherever the chair takes the floor ("De voorzitter:", "Le
président:").
"""
from __future__ import annotations

from typing import Iterator, List, Optional, Tuple
import logging
import re

from ..core.types import DiscussionTurn
from .patterns import TITLE_PREFIX
from .text import PARAGRAPH_MARKER

LOGGER = logging.getLogger(__name__)

CHAIR_SPEAKER = "Voorzitter"
UNKNOWN_SPEAKER = "Onbekend"

BOILERPLATE_PHRASES: Tuple[str, ...] = (
    "Het incident is gesloten.",
    "L'incident est clos.",
    "L’incident est clos.",
)

_TURN_BOUNDARY = re.compile(
    rf"(?:^|{PARAGRAPH_MARKER})\s*(?P<time>\d{{2}}\.\d{{2}})\s+"
    rf"(?P<speaker>(?:(?!{PARAGRAPH_MARKER})[^:\n])+?)\s*:"
    r"|(?P<chair>(?:Le\s+président|De\s+voorzitter))\s*:"
)
_SPEAKER_NAME = re.compile(r"^[^(,:\n\r]+")
_CHAIR_LABELS = ("de voorzitter", "le président", "voorzitter", "président")
_BLANK_LINES = re.compile(r"\s*\n\s*")


def speaker_name(label: str) -> str:
    """Resolve a speaker label such as ``"Minister Jan Jambon (N-VA)"``."""

    stripped = TITLE_PREFIX.sub("", label.strip())
    match = _SPEAKER_NAME.match(stripped)
    if match is None or not match.group(0).strip():
        return UNKNOWN_SPEAKER
    name = match.group(0).strip()
    if name.lower() in _CHAIR_LABELS:
        return CHAIR_SPEAKER
    return name


def clean_segment(segment: str) -> str:
    """Drop boilerplate, turn paragraph markers into line breaks."""

    for phrase in BOILERPLATE_PHRASES:
        segment = segment.replace(phrase, "")
    segment = segment.replace(PARAGRAPH_MARKER, "\n")
    return _BLANK_LINES.sub("\n", segment).strip()


def iter_turns(text: str) -> Iterator[DiscussionTurn]:
    """Lazily yield the turns of ``text`` in order."""

    speaker: Optional[str] = None
    last_end = 0
    for match in _TURN_BOUNDARY.finditer(text):
        if speaker is None:
            if text[last_end:match.start()].strip():
                LOGGER.debug("Ignoring discussion text before the first speaker")
        else:
            segment = clean_segment(text[last_end:match.start()])
            if segment:
                yield DiscussionTurn(speaker=speaker, text=segment)
        speaker = CHAIR_SPEAKER if match.group("chair") else speaker_name(match.group("speaker"))
        last_end = match.end()
    if speaker is not None:
        segment = clean_segment(text[last_end:])
        if segment:
            yield DiscussionTurn(speaker=speaker, text=segment)


def segment_discussion(text: str) -> List[DiscussionTurn]:
    """Split a discussion into speaker turns, dropping empty and boilerplate-only ones."""

    if not text:
        return []
    return list(iter_turns(text))


__all__ = [
    "BOILERPLATE_PHRASES",
    "CHAIR_SPEAKER",
    "UNKNOWN_SPEAKER",
    "clean_segment",
    "iter_turns",
    "segment_discussion",
    "speaker_name",
]
