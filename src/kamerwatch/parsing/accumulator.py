"""Buffering of multi-part bilingual item headings into logical items.

An item in the report (a question, a proposition, a vote title) is announced
by one or more ``h2`` headings. Grouped items start with a grouping heading and
continue with one heading per sub-item, each prefixed with a dash. Every
heading holds spans tagged with a ``lang`` attribute, but that attribute is
applied inconsistently, so the text is checked against indicator words of the
other language before it is filed.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Pattern, Tuple
import logging
import re

from bs4 import Tag

from .text import PARAGRAPH_MARKER, node_text

LOGGER = logging.getLogger(__name__)

_DUTCH_LANG_VALUES = ("NL", "NL-BE")
_FRENCH_LANG_VALUES = ("FR", "FR-BE")
CONTINUATION_PREFIX = "-"


class Language(str, Enum):
    NL = "nl"
    FR = "fr"

    @property
    def other(self) -> "Language":
        return Language.FR if self is Language.NL else Language.NL


class HeadingRole(str, Enum):
    GROUP_START = "group_start"
    CONTINUATION = "continuation"
    OTHER = "other"
    EMPTY = "empty"


@dataclass(frozen=True, slots=True)
class GroupingRules:
    """Keyword tables for one entity kind."""

    french_indicators: Tuple[str, ...]
    dutch_indicators: Tuple[str, ...]
    start_patterns: Tuple[Pattern[str], ...]

    def indicators_for(self, language: Language) -> Tuple[str, ...]:
        return self.dutch_indicators if language is Language.NL else self.french_indicators

    def looks_like(self, text: str, language: Language) -> bool:
        lowered = text.lower()
        return any(word in lowered for word in self.indicators_for(language))

    def starts_group(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self.start_patterns)


QUESTION_GROUPING = GroupingRules(
    french_indicators=("questions jointes", "question de"),
    dutch_indicators=("samengevoegde vragen", "toegevoegde vragen", "vraag van"),
    start_patterns=(
        re.compile(r"^Samengevoegde"),
        re.compile(r"toegevoegde vragen"),
        re.compile(r"jointes"),
        re.compile(r"^Vraag van"),
        re.compile(r"^Question de"),
    ),
)

# Every heading that is not a dash-prefixed sub-item announces a new
# proposition or vote title.
PROPOSITION_GROUPING = GroupingRules(
    french_indicators=("à", "membre"),
    dutch_indicators=("oproep",),
    start_patterns=(re.compile(r"^[^-\s]"),),
)

VOTE_GROUPING = GroupingRules(
    french_indicators=(),
    dutch_indicators=(),
    start_patterns=(re.compile(r"^[^-\s]"),),
)


@dataclass(frozen=True, slots=True)
class HeadingText:
    """Language-resolved text of one item heading."""

    nl: Optional[str] = None
    fr: Optional[str] = None

    def get(self, language: Language) -> Optional[str]:
        return self.nl if language is Language.NL else self.fr

    def texts(self) -> List[str]:
        return [text for text in (self.nl, self.fr) if text]

    @property
    def empty(self) -> bool:
        return not self.texts()


@dataclass(frozen=True, slots=True)
class ItemText:
    """A completed item: the accumulated text per language and its discussion."""

    nl: str = ""
    fr: str = ""
    discussion: str = ""

    def get(self, language: Language) -> str:
        return self.nl if language is Language.NL else self.fr

    def lines(self, language: Language) -> List[str]:
        return [line for line in self.get(language).split("\n") if line.strip()]


def _last_span_text(node: Tag, lang_values: Tuple[str, ...]) -> Optional[str]:
    spans = [span for span in node.find_all("span") if str(span.get("lang", "")).upper() in lang_values]
    if not spans:
        return None
    text = node_text(spans[-1])
    return text or None


def resolve_languages(nl_claimed: Optional[str], fr_claimed: Optional[str], rules: GroupingRules) -> HeadingText:
    """File the texts of the NL and FR tagged spans under their real language.

    A text holding indicator words of the other language moves to that
    language, unless the slot is already taken by a correctly tagged text, in
    which case the tag is trusted.
    """

    candidates = []
    for claimed, text in ((Language.NL, nl_claimed), (Language.FR, fr_claimed)):
        if text:
            candidates.append((rules.looks_like(text, claimed.other), claimed, text))
    slots: dict[Language, str] = {}
    for misclassified, claimed, text in sorted(candidates, key=lambda item: item[0]):
        language = claimed.other if misclassified else claimed
        if language in slots:
            language = claimed
        if misclassified and language is not claimed:
            LOGGER.debug("Heading text tagged %s filed as %s: %r", claimed.value, language.value, text)
        slots.setdefault(language, text)
    return HeadingText(nl=slots.get(Language.NL), fr=slots.get(Language.FR))


def read_heading(node: Tag, rules: GroupingRules) -> HeadingText:
    return resolve_languages(
        _last_span_text(node, _DUTCH_LANG_VALUES),
        _last_span_text(node, _FRENCH_LANG_VALUES),
        rules,
    )


def classify_heading(heading: HeadingText, rules: GroupingRules) -> HeadingRole:
    texts = heading.texts()
    if not texts:
        return HeadingRole.EMPTY
    if any(rules.starts_group(text) for text in texts):
        return HeadingRole.GROUP_START
    if any(text.startswith(CONTINUATION_PREFIX) for text in texts):
        return HeadingRole.CONTINUATION
    return HeadingRole.OTHER


class GroupAccumulator:
    """Finite-state buffer turning a heading stream into completed items.

    A group start flushes the buffered item once it holds both languages, or
    when the new heading brings a language that is already buffered (the
    report moved on to the next item). Continuations append a line, other
    headings discard the buffer.
    """

    def __init__(self, rules: GroupingRules, *, collect_paragraphs: bool = False) -> None:
        self._rules = rules
        self._collect_paragraphs = collect_paragraphs
        self._nl = ""
        self._fr = ""
        self._discussion: List[str] = []
        self._last_heading = HeadingText()

    @property
    def has_content(self) -> bool:
        return bool(self._nl or self._fr)

    @property
    def current(self) -> ItemText:
        """Snapshot of the buffered item (empty strings when nothing is buffered)."""

        return ItemText(nl=self._nl, fr=self._fr, discussion="".join(self._discussion))

    @property
    def last_heading(self) -> HeadingText:
        return self._last_heading

    def feed_heading(self, node: Tag) -> List[ItemText]:
        return self.feed(read_heading(node, self._rules))

    def feed(self, heading: HeadingText) -> List[ItemText]:
        role = classify_heading(heading, self._rules)
        if role is HeadingRole.EMPTY:
            return []
        self._last_heading = heading
        flushed: List[ItemText] = []
        if role is HeadingRole.GROUP_START:
            complete = bool(self._nl and self._fr)
            collides = bool((heading.nl and self._nl) or (heading.fr and self._fr))
            if self.has_content and (complete or collides):
                flushed.append(self._flush())
            if heading.nl:
                self._nl = heading.nl
            if heading.fr:
                self._fr = heading.fr
        elif role is HeadingRole.CONTINUATION:
            self._nl = self._append_line(self._nl, heading.nl)
            self._fr = self._append_line(self._fr, heading.fr)
        else:
            if self.has_content:
                LOGGER.debug("Discarding buffered item after unexpected heading %r", heading.texts())
            self._reset()
        return flushed

    def feed_paragraph(self, text: str) -> None:
        if self._collect_paragraphs and text and self.has_content:
            self._discussion.append(text)
            self._discussion.append(PARAGRAPH_MARKER)

    def finish(self) -> List[ItemText]:
        """Flush whatever is still buffered; calling it again yields nothing."""

        if not self.has_content:
            return []
        return [self._flush()]

    @staticmethod
    def _append_line(buffer: str, text: Optional[str]) -> str:
        if not text:
            return buffer
        return f"{buffer}\n{text}" if buffer else text

    def _flush(self) -> ItemText:
        item = self.current
        self._reset()
        return item

    def _reset(self) -> None:
        self._nl = ""
        self._fr = ""
        self._discussion = []


__all__ = [
    "CONTINUATION_PREFIX",
    "GroupAccumulator",
    "GroupingRules",
    "HeadingRole",
    "HeadingText",
    "ItemText",
    "Language",
    "PROPOSITION_GROUPING",
    "QUESTION_GROUPING",
    "VOTE_GROUPING",
    "classify_heading",
    "read_heading",
    "resolve_languages",
]
