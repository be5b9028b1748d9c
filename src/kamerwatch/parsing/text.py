"""Text normalisation helpers shared by the extraction steps."""
from __future__ import annotations

from typing import Iterable, List
import re

from bs4 import Tag

PARAGRAPH_MARKER = "NEWPARAGRAPH"

_SOFT_HYPHEN = "\u00ad"
_NON_BREAKING_SPACE = "\u00a0"
_HORIZONTAL_SPACE = re.compile(r"[ \t\r\f\v]+")
_WHITESPACE = re.compile(r"\s+")


def clean_text(raw: str) -> str:
    """Flatten line breaks, drop soft hyphens and collapse spacing."""

    cleaned = (
        raw.replace("\n", " ")
        .replace(_SOFT_HYPHEN, "")
        .replace(_NON_BREAKING_SPACE, " ")
    )
    return _HORIZONTAL_SPACE.sub(" ", cleaned).strip()


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text.replace(_NON_BREAKING_SPACE, " ")).strip()


def node_text(node: Tag) -> str:
    """Text of ``node`` with its text fragments joined by single spaces."""

    return clean_text(" ".join(node.stripped_strings))


def convert_name(name: str) -> str:
    """Reorder a roster entry ``"Last First"`` into ``"First Last"``.

    Only the final token is treated as the first name, so compound family
    names (``"Van der Straeten Tinne"``) stay intact.
    """

    parts = name.split()
    if not parts:
        return ""
    if len(parts) == 1:
        return name.strip()
    return f"{parts[-1]} {' '.join(parts[:-1])}"


def split_names(raw: str) -> List[str]:
    """Split a comma separated roster into reordered names."""

    names = (convert_name(part.strip()) for part in raw.split(","))
    return [name for name in names if name]


def unique(values: Iterable[str]) -> List[str]:
    result: List[str] = []
    for value in values:
        if value not in result:
            result.append(value)
    return result


__all__ = [
    "PARAGRAPH_MARKER",
    "clean_text",
    "convert_name",
    "node_text",
    "normalize_whitespace",
    "split_names",
    "unique",
]
