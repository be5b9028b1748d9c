"""Meeting level metadata: date, part of day, opening and closing time.

Committee reports additionally name the committee in their title block and the
members chairing the sitting ("voorgezeten door ...").
"""
from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, Optional, Sequence, Tuple
import logging
import re

from bs4 import BeautifulSoup, Tag

from ..core.types import Commission, Meeting, MeetingKind, TimeOfDay
from .text import normalize_whitespace

LOGGER = logging.getLogger(__name__)


class MeetingMetadataError(ValueError):
    """Raised when a report lacks the metadata needed to describe its meeting."""


DUTCH_MONTHS: Dict[str, int] = {
    "januari": 1,
    "februari": 2,
    "maart": 3,
    "april": 4,
    "mei": 5,
    "juni": 6,
    "juli": 7,
    "augustus": 8,
    "september": 9,
    "oktober": 10,
    "november": 11,
    "december": 12,
}

TIME_OF_DAY_LABELS: Dict[str, TimeOfDay] = {
    "voormiddag": TimeOfDay.MORNING,
    "namiddag": TimeOfDay.AFTERNOON,
    "avond": TimeOfDay.EVENING,
}

PLENARY_START_PHRASES: Tuple[str, ...] = (
    "De vergadering wordt geopend",
    "De vergadering wordt hervat",
)
PLENARY_END_PHRASES: Tuple[str, ...] = (
    "De vergadering wordt gesloten",
    "De vergadering wordt geschorst",
)
COMMISSION_START_PHRASES: Tuple[str, ...] = (
    "De behandeling van de",
    "De behandeling van de vragen en de interpellatie vangt aan om",
    "De behandeling van de vragen en interpellaties vangt aan",
    "De behandeling van de vragen en van de interpellatie vangt aan om",
    "De openbare commissievergadering wordt geopend",
    "De vergadering wordt geopend",
    "De behandeling van de vragen vangt aan",
    "De gedachtewisseling vangt aan",
    "De behandeling van de interpellatie vangt",
)
COMMISSION_END_PHRASES: Tuple[str, ...] = (
    "De openbare commissievergadering wordt gesloten",
    "De gedachtewisseling met de ministers eindigt",
    "De behandeling van de vragen eindigt",
    "De gedachtewisseling eindigt",
    "De vergadering wordt gesloten",
    "De behandeling van de interpellatie eindigt",
    "De behandeling van de interpellaties eindigt",
)

COMMISSION_KEYWORDS: Tuple[Tuple[str, Commission], ...] = (
    ("binnenlandse", Commission.INTERIOR),
    ("justitie", Commission.JUSTICE),
    ("gezondheid", Commission.HEALTH),
    ("economie", Commission.ECONOMY),
    ("buitenlandse", Commission.FOREIGN_AFFAIRS),
    ("mobiliteit", Commission.MOBILITY),
    ("landsverdediging", Commission.DEFENCE),
    ("energie", Commission.ENERGY),
    ("sociale", Commission.SOCIAL_AFFAIRS),
    ("begroting", Commission.FINANCE),
    ("klimaatdialoog", Commission.CLIMATE_DIALOGUE),
)

_DATE = re.compile(r"(\d{1,2})\s+([a-zA-Z]+)\s+(\d{4})")
_TIME = re.compile(r"(\d{1,2})\.(\d{2})\s*0?uur")
_CHAIR_BLOCK = re.compile(r"voorgezeten\s+door\s+([^\.]+?)\s*(?:\.|$)", re.IGNORECASE)
_CHAIR_TITLES = re.compile(r"\b(?:de\s+)?(?:mevrouw|heer|mevrouwen|heren)\b", re.IGNORECASE)


def _text(node: Tag) -> str:
    return " ".join(node.strings).replace("\n", " ")


def _first_table(document: BeautifulSoup) -> Tag:
    table = document.find("table")
    if table is None:
        raise MeetingMetadataError("Report has no title table")
    return table


def extract_date(document: BeautifulSoup) -> date:
    """Sitting date from the spans of the report's first table."""

    table = _first_table(document)
    text = " ".join(_text(span) for span in table.find_all("span"))
    match = _DATE.search(text)
    if match is None:
        raise MeetingMetadataError("Could not find the meeting date")
    day, month_name, year = match.groups()
    month = DUTCH_MONTHS.get(month_name.lower())
    if month is None:
        raise MeetingMetadataError(f"Unknown month name {month_name!r}")
    try:
        return date(int(year), month, int(day))
    except ValueError as exc:
        raise MeetingMetadataError(f"Invalid meeting date {match.group(0)!r}") from exc


def extract_time_of_day(document: BeautifulSoup) -> TimeOfDay:
    for span in document.find_all("span"):
        label = TIME_OF_DAY_LABELS.get(" ".join(span.stripped_strings).strip().lower())
        if label is not None:
            return label
    raise MeetingMetadataError("Could not find the part of day of the meeting")


def find_time(
    nodes: Iterable[Tag],
    phrases: Sequence[str],
    *,
    case_sensitive: bool = True,
) -> Optional[str]:
    """Last ``H.MM uur`` time inside a node mentioning one of ``phrases``."""

    needles = phrases if case_sensitive else [phrase.lower() for phrase in phrases]
    found: Optional[str] = None
    for node in nodes:
        text = _text(node)
        haystack = text if case_sensitive else text.lower()
        if not any(needle in haystack for needle in needles):
            continue
        match = _TIME.search(text)
        if match:
            found = f"{match.group(1)}h{match.group(2)}"
    return found


def _plenary_time(document: BeautifulSoup, phrases: Sequence[str], what: str) -> str:
    spans = document.find_all("span")
    # Each phrase is tried on its own, in order of preference.
    for phrase in phrases:
        found = find_time(spans, (phrase,), case_sensitive=False)
        if found:
            return found
    raise MeetingMetadataError(f"Could not find the {what} time of the meeting")


def _commission_time(document: BeautifulSoup, phrases: Sequence[str], what: str) -> str:
    found = find_time(document.find_all(("span", "p")), phrases)
    if found is None:
        raise MeetingMetadataError(f"Could not find the {what} time of the meeting")
    return found


def extract_chair(document: BeautifulSoup) -> str:
    """Names of the members chairing a committee sitting, joined by ``", "``."""

    for node in document.find_all(("span", "p")):
        match = _CHAIR_BLOCK.search(_text(node))
        if match is None:
            continue
        chunk = normalize_whitespace(match.group(1))
        names = [_CHAIR_TITLES.sub("", part).strip() for part in chunk.split(" en ")]
        names = [normalize_whitespace(name) for name in names if name.strip()]
        if names:
            return ", ".join(names)
    raise MeetingMetadataError("Could not find the chair of the meeting")


def classify_commission(raw: str) -> Commission:
    text = raw.strip().lower()
    for keyword, commission in COMMISSION_KEYWORDS:
        if keyword in text:
            return commission
    return Commission.UNKNOWN


def extract_commission(document: BeautifulSoup) -> Commission:
    span = _first_table(document).find("span")
    if span is None:
        raise MeetingMetadataError("Report title table has no committee name")
    return classify_commission(normalize_whitespace(_text(span)))


def parse_meeting_metadata(
    document: BeautifulSoup,
    session_id: int,
    meeting_id: int,
    kind: MeetingKind = MeetingKind.PLENARY,
) -> Meeting:
    """Build the :class:`Meeting` record of a report.

    Raises :class:`MeetingMetadataError` when a required field is missing.
    """

    meeting_date = extract_date(document)
    time_of_day = extract_time_of_day(document)
    if kind is MeetingKind.PLENARY:
        start_time = _plenary_time(document, PLENARY_START_PHRASES, "start")
        end_time = _plenary_time(document, PLENARY_END_PHRASES, "end")
        return Meeting(
            session_id=session_id,
            meeting_id=meeting_id,
            kind=kind,
            date=meeting_date,
            time_of_day=time_of_day,
            start_time=start_time,
            end_time=end_time,
        )
    return Meeting(
        session_id=session_id,
        meeting_id=meeting_id,
        kind=kind,
        date=meeting_date,
        time_of_day=time_of_day,
        start_time=_commission_time(document, COMMISSION_START_PHRASES, "start"),
        end_time=_commission_time(document, COMMISSION_END_PHRASES, "end"),
        commission=extract_commission(document),
        chair=extract_chair(document),
    )


__all__ = [
    "COMMISSION_END_PHRASES",
    "COMMISSION_KEYWORDS",
    "COMMISSION_START_PHRASES",
    "DUTCH_MONTHS",
    "MeetingMetadataError",
    "PLENARY_END_PHRASES",
    "PLENARY_START_PHRASES",
    "TIME_OF_DAY_LABELS",
    "classify_commission",
    "extract_chair",
    "extract_commission",
    "extract_date",
    "extract_time_of_day",
    "find_time",
    "parse_meeting_metadata",
]
