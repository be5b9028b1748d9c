from __future__ import annotations

from datetime import date

import pytest
from bs4 import BeautifulSoup

from kamerwatch.core.types import Commission, MeetingKind, TimeOfDay
from kamerwatch.parsing.meeting import (
    MeetingMetadataError,
    classify_commission,
    extract_chair,
    extract_date,
    extract_time_of_day,
    find_time,
    parse_meeting_metadata,
)


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_extract_date_uses_dutch_month_names():
    document = _soup("<table><tr><td><span>Woensdag 8 november 2023</span></td></tr></table>")

    assert extract_date(document) == date(2023, 11, 8)


def test_extract_date_rejects_unknown_month():
    document = _soup("<table><tr><td><span>Mercredi 8 novembre 2023</span></td></tr></table>")

    with pytest.raises(MeetingMetadataError):
        extract_date(document)


def test_extract_date_requires_title_table():
    with pytest.raises(MeetingMetadataError):
        extract_date(_soup("<p>Geen tabel</p>"))


def test_extract_time_of_day():
    assert extract_time_of_day(_soup("<span> Avond </span>")) is TimeOfDay.EVENING
    with pytest.raises(MeetingMetadataError):
        extract_time_of_day(_soup("<span>middag</span>"))


def test_find_time_returns_last_match():
    nodes = _soup(
        "<span>De vergadering wordt geopend om 10.05 uur.</span>"
        "<span>Iets anders om 11.00 uur.</span>"
        "<span>De vergadering wordt geopend om 14.30 uur.</span>"
    ).find_all("span")

    assert find_time(nodes, ("De vergadering wordt geopend",)) == "14h30"
    assert find_time(nodes, ("de vergadering wordt geopend",)) is None
    assert find_time(nodes, ("de vergadering wordt geopend",), case_sensitive=False) == "14h30"


def test_extract_chair_strips_titles():
    document = _soup(
        "<p>De vergadering wordt geopend om 14.21 uur en voorgezeten door de heer Ortwin Depoortere "
        "en mevrouw Kathleen Verhelst.</p>"
    )

    assert extract_chair(document) == "Ortwin Depoortere, Kathleen Verhelst"


def test_classify_commission():
    assert classify_commission("Commissie voor Justitie") is Commission.JUSTICE
    assert classify_commission("Commissie voor Energie, Leefmilieu en Klimaat") is Commission.ENERGY
    assert classify_commission("Bijzondere commissie") is Commission.UNKNOWN


def test_plenary_metadata_requires_times():
    document = _soup(
        "<table><tr><td><span>Donderdag 12 oktober 2023</span></td></tr>"
        "<tr><td><span>namiddag</span></td></tr></table>"
        "<p><span>De vergadering wordt geopend om 14.15 uur.</span></p>"
    )

    with pytest.raises(MeetingMetadataError, match="end time"):
        parse_meeting_metadata(document, 55, 3, MeetingKind.PLENARY)


def test_plenary_start_prefers_opening_over_resumption():
    document = _soup(
        "<table><tr><td><span>Donderdag 12 oktober 2023</span></td></tr>"
        "<tr><td><span>voormiddag</span></td></tr></table>"
        "<p><span>De vergadering wordt geopend om 10.00 uur.</span></p>"
        "<p><span>De vergadering wordt hervat om 12.30 uur.</span></p>"
        "<p><span>De vergadering wordt gesloten om 13.10 uur.</span></p>"
    )

    meeting = parse_meeting_metadata(document, 55, 3)

    assert meeting.start_time == "10h00"
    assert meeting.end_time == "13h10"
    assert meeting.time_of_day is TimeOfDay.MORNING
