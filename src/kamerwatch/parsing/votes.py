"""Roll-call result tables and the voter rosters printed after them.

A roll-call vote appears twice in a plenary report. Inside the votes section a
result table carries the tallies and a caption like ``(Stemming/vote 3)``.
Further down, in the annex, the caption ``Vote nominatif - Naamstemming: 3``
precedes three small tables (yes, no, abstain), each followed by a paragraph
listing the members who voted that way. The annex layout varies in nesting
depth, so the rosters are located through the caption text rather than
through the DOM structure.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import logging
import re

from bs4 import BeautifulSoup, Tag

from .text import node_text, split_names
from .traversal import walk_forward, walk_forward_from_ancestors

LOGGER = logging.getLogger(__name__)

TALLY_MARKER = "Stemming/vote"
ROSTER_CAPTIONS = (
    "Vote nominatif - Naamstemming: {index}",
    "Naamstemming - Vote nominatif: {index}",
)

_INDEX = re.compile(r"Stemming/vote\s*(?P<index>\d+)")
_COUNT = re.compile(r"^\s*(\d+)\s*$")

# Row labels of a result table, mapped to the tally they fill.
TALLY_LABELS: Dict[str, str] = {
    "ja": "yes",
    "oui": "yes",
    "nee": "no",
    "non": "no",
    "onthoudingen": "abstain",
    "abstentions": "abstain",
}


@dataclass(frozen=True, slots=True)
class VoteTally:
    """Counts read from one result table."""

    index: str
    yes: int = 0
    no: int = 0
    abstain: int = 0

    @property
    def has_votes(self) -> bool:
        return self.yes > 0 or self.no > 0 or self.abstain > 0


@dataclass(frozen=True, slots=True)
class VoterRosters:
    """Raw comma separated name lists of one vote."""

    yes: str = ""
    no: str = ""
    abstain: str = ""

    def names(self) -> Tuple[List[str], List[str], List[str]]:
        return split_names(self.yes), split_names(self.no), split_names(self.abstain)


def parse_count(text: str) -> int:
    """Parse a tally cell; anything that is not a plain number counts as 0."""

    match = _COUNT.match(text)
    return int(match.group(1)) if match else 0


def _rows(table: Tag) -> List[Tag]:
    return table.find_all("tr")


def _label_of(cell: Tag) -> str:
    return node_text(cell).strip().lower()


def parse_vote_table(table: Tag) -> Optional[VoteTally]:
    """Read the tallies of a result table.

    Returns ``None`` when the first row does not identify the table as a roll
    call result, which is how the unrelated tables of a report are skipped.
    """

    # Layout tables wrapping a result table are skipped; the inner table is
    # visited on its own.
    if table.find("table") is not None:
        return None
    rows = _rows(table)
    if not rows:
        return None
    caption = node_text(rows[0])
    if TALLY_MARKER not in caption:
        return None
    match = _INDEX.search(caption)
    index = match.group("index") if match else ""
    counts = {"yes": 0, "no": 0, "abstain": 0}
    for row in rows[1:]:
        cells = row.find_all("td")
        if len(cells) < 2:
            continue
        target = TALLY_LABELS.get(_label_of(cells[0]))
        if target is None:
            continue
        counts[target] = parse_count(node_text(cells[1]))
    tally = VoteTally(index=index, **counts)
    LOGGER.debug("Vote table %s: %s/%s/%s", tally.index, tally.yes, tally.no, tally.abstain)
    return tally


def _caption_matches(text: str, index: str) -> bool:
    for template in ROSTER_CAPTIONS:
        needle = template.format(index=index)
        position = text.find(needle)
        while position != -1:
            after = position + len(needle)
            # "Naamstemming: 1" must not match the caption of vote 12.
            if after >= len(text) or not text[after].isdigit():
                return True
            position = text.find(needle, position + 1)
    return False


def find_roster_anchor(document: BeautifulSoup, index: str) -> Optional[Tag]:
    """The span holding the annex caption of vote ``index``."""

    if not index:
        return None
    for span in document.find_all("span"):
        if _caption_matches(node_text(span), index):
            return span
    return None


def _is_table(tag: Tag) -> bool:
    return tag.name == "table"


def _table_count(table: Tag) -> int:
    cells = table.find_all("td")
    if len(cells) < 2:
        return 0
    return parse_count(node_text(cells[1]))


def looks_like_names(text: str) -> bool:
    """A paragraph holds a roster when it starts with a letter and is no caption."""

    return bool(text) and text[0].isalpha() and "Vote nominatif" not in text and any(ch.isalpha() for ch in text)


def _roster_paragraph_text(paragraph: Tag) -> Optional[str]:
    first = next((child for child in paragraph.children if not (isinstance(child, str) and not child.strip())), None)
    if not isinstance(first, Tag) or first.name != "span":
        return None
    return " ".join(first.stripped_strings).strip()


def normalize_roster(raw: str) -> str:
    return raw.replace(", ", ",").replace(",\n", ",").replace("\n", " ")


def read_roster(table: Tag) -> str:
    """The name list following a roster table (empty when its count is 0)."""

    if _table_count(table) == 0:
        return ""
    for paragraph in walk_forward(table, lambda tag: tag.name == "p", stop=_is_table):
        raw = _roster_paragraph_text(paragraph)
        if raw and looks_like_names(raw):
            return normalize_roster(raw)
    return ""


def resolve_voter_rosters(document: BeautifulSoup, index: str) -> VoterRosters:
    """Locate the yes/no/abstain rosters of vote ``index``."""

    anchor = find_roster_anchor(document, index)
    if anchor is None:
        LOGGER.debug("No roster caption found for vote %r", index)
        return VoterRosters()
    tables = walk_forward_from_ancestors(anchor, _is_table, limit=3)
    rosters = [read_roster(table) for table in tables]
    rosters += [""] * (3 - len(rosters))
    return VoterRosters(yes=rosters[0], no=rosters[1], abstain=rosters[2])


__all__ = [
    "ROSTER_CAPTIONS",
    "TALLY_LABELS",
    "TALLY_MARKER",
    "VoteTally",
    "VoterRosters",
    "find_roster_anchor",
    "looks_like_names",
    "normalize_roster",
    "parse_count",
    "parse_vote_table",
    "read_roster",
    "resolve_voter_rosters",
]
