"""Classification of transcript nodes into topical sections.

The chamber reports announce each part of the sitting with a top level
heading (``h1``). Headings come in both languages, and some reports repeat the
heading in the other language right after the first one, so the scanner has to
tell a translation duplicate apart from the start of the next section.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Tuple
import logging

from bs4 import Tag

from .text import node_text

LOGGER = logging.getLogger(__name__)

SECTION_HEADING_TAG = "h1"
ITEM_HEADING_TAG = "h2"
BLOCK_TAGS = ("h1", "h2", "p", "table")


class Section(str, Enum):
    NONE = "none"
    QUESTIONS = "questions"
    PROPOSITIONS = "propositions"
    VOTES = "votes"


class ScanState(str, Enum):
    WAITING = "waiting"
    ACTIVE = "active"
    CLOSED = "closed"


@dataclass(frozen=True, slots=True)
class SectionRule:
    """Keyword table deciding where a section begins and ends.

    ``start_keywords`` open the section. ``duplicate_keywords`` mark headings
    that merely translate the opening heading; they keep the section open. Any
    other top level heading closes the section unless ``runs_to_end`` is set.
    """

    section: Section
    start_keywords: Tuple[str, ...] = ()
    duplicate_keywords: Tuple[str, ...] = ()
    case_sensitive: bool = True
    runs_to_end: bool = False
    active_from_start: bool = False

    def _contains(self, text: str, keywords: Tuple[str, ...]) -> bool:
        haystack = text if self.case_sensitive else text.lower()
        for keyword in keywords:
            needle = keyword if self.case_sensitive else keyword.lower()
            if needle in haystack:
                return True
        return False

    def opens(self, text: str) -> bool:
        return self._contains(text, self.start_keywords)

    def continues(self, text: str) -> bool:
        return self.opens(text) or self._contains(text, self.duplicate_keywords)


QUESTIONS_RULE = SectionRule(
    section=Section.QUESTIONS,
    start_keywords=("Mondelinge vragen", "Vragen", "Questions orales", "Questions"),
)

PROPOSITIONS_RULE = SectionRule(
    section=Section.PROPOSITIONS,
    start_keywords=("voorstel", "wetsvoorstel"),
    duplicate_keywords=("proposition",),
    case_sensitive=False,
)

# Roll-call results are listed until the end of the report.
VOTES_RULE = SectionRule(
    section=Section.VOTES,
    start_keywords=("Naamstemmingen", "Naamstemming"),
    duplicate_keywords=("Votes nominatifs", "Vote nominatif"),
    runs_to_end=True,
)

# Committee reports consist of questions only and carry no section heading.
COMMISSION_QUESTIONS_RULE = SectionRule(section=Section.QUESTIONS, active_from_start=True, runs_to_end=True)

SECTION_RULES = {
    Section.QUESTIONS: QUESTIONS_RULE,
    Section.PROPOSITIONS: PROPOSITIONS_RULE,
    Section.VOTES: VOTES_RULE,
}


class SectionScanner:
    """Stateful classifier walking the block nodes of one document."""

    def __init__(self, rule: SectionRule) -> None:
        self._rule = rule
        self._state = ScanState.ACTIVE if rule.active_from_start else ScanState.WAITING

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._state is ScanState.CLOSED

    def classify(self, node: Tag) -> Section:
        """Return the section ``node`` belongs to and advance the scan state."""

        if self._state is ScanState.CLOSED:
            return Section.NONE
        if node.name == SECTION_HEADING_TAG:
            self._on_heading(node_text(node))
        if self._state is ScanState.ACTIVE:
            return self._rule.section
        return Section.NONE

    def _on_heading(self, text: str) -> None:
        if self._state is ScanState.WAITING:
            if self._rule.opens(text):
                LOGGER.debug("Section %s opened by heading %r", self._rule.section.value, text)
                self._state = ScanState.ACTIVE
            return
        if self._rule.runs_to_end or self._rule.continues(text):
            return
        LOGGER.debug("Section %s closed by heading %r", self._rule.section.value, text)
        self._state = ScanState.CLOSED


def block_nodes(document: Tag) -> list[Tag]:
    """Heading, paragraph and table nodes of ``document`` in document order."""

    return document.find_all(BLOCK_TAGS)


def scan_sections(nodes: Iterable[Tag], rule: SectionRule) -> Iterator[Tuple[Tag, Section]]:
    """Pair every node with its section until the section closes."""

    scanner = SectionScanner(rule)
    for node in nodes:
        section = scanner.classify(node)
        if scanner.closed:
            return
        yield node, section


__all__ = [
    "BLOCK_TAGS",
    "COMMISSION_QUESTIONS_RULE",
    "ITEM_HEADING_TAG",
    "PROPOSITIONS_RULE",
    "QUESTIONS_RULE",
    "SECTION_RULES",
    "ScanState",
    "Section",
    "SectionRule",
    "SectionScanner",
    "VOTES_RULE",
    "block_nodes",
    "scan_sections",
]
