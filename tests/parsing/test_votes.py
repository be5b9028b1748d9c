from __future__ import annotations

from bs4 import BeautifulSoup

from kamerwatch.parsing.votes import (
    find_roster_anchor,
    parse_count,
    parse_vote_table,
    read_roster,
    resolve_voter_rosters,
)


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_parse_vote_table_reads_tallies():
    table = _soup(
        "<table>"
        "<tr><td>(Stemming/vote 3)</td></tr>"
        "<tr><td>Oui</td><td>80</td></tr>"
        "<tr><td>Non</td><td>40</td></tr>"
        "<tr><td>Abstentions</td><td>5</td></tr>"
        "<tr><td>Totaal</td><td>125</td></tr>"
        "</table>"
    ).table

    tally = parse_vote_table(table)

    assert tally is not None
    assert (tally.index, tally.yes, tally.no, tally.abstain) == ("3", 80, 40, 5)
    assert tally.has_votes


def test_parse_vote_table_ignores_other_tables():
    assert parse_vote_table(_soup("<table><tr><td>Agenda</td></tr></table>").table) is None
    assert parse_vote_table(_soup("<table></table>").table) is None


def test_layout_table_around_result_table_is_skipped():
    outer = _soup(
        "<table><tr><td>"
        "<table><tr><td>(Stemming/vote 1)</td></tr><tr><td>Ja</td><td>3</td></tr></table>"
        "</td></tr></table>"
    ).table

    assert parse_vote_table(outer) is None
    assert parse_vote_table(outer.find("table")).yes == 3


def test_parse_count_treats_garbage_as_zero():
    assert parse_count(" 12 ") == 12
    assert parse_count("") == 0
    assert parse_count("12a") == 0


def test_roster_anchor_does_not_match_longer_index():
    document = _soup(
        "<p><span>Vote nominatif - Naamstemming: 12</span></p>"
        "<p><span>Naamstemming - Vote nominatif: 1</span></p>"
    )

    anchor = find_roster_anchor(document, "1")

    assert anchor is not None
    assert anchor.get_text() == "Naamstemming - Vote nominatif: 1"
    assert find_roster_anchor(document, "2") is None


def test_zero_count_skips_roster_scan():
    document = _soup(
        "<div><table><tr><td>Abstentions</td><td>0</td></tr></table>"
        "<p><span>Peeters Jan</span></p></div>"
    )

    assert read_roster(document.table) == ""


def test_resolve_rosters_climbs_to_the_caption_container():
    document = _soup(
        "<div><p><span><b>Vote nominatif - Naamstemming: 4</b></span></p>"
        "<table><tr><td>Oui</td><td>2</td><td>Ja</td></tr></table>"
        "<p><span>Peeters Jan, Van der Straeten Tinne</span></p>"
        "<table><tr><td>Non</td><td>1</td><td>Nee</td></tr></table>"
        "<p><span>Vote nominatif</span></p>"
        "<p><span>Dupont Marie</span></p>"
        "<table><tr><td>Abstentions</td><td>0</td><td>Onthoudingen</td></tr></table>"
        "</div>"
    )

    rosters = resolve_voter_rosters(document, "4")

    yes, no, abstain = rosters.names()
    assert yes == ["Jan Peeters", "Tinne Van der Straeten"]
    assert no == ["Marie Dupont"]
    assert abstain == []


def test_resolve_rosters_without_caption():
    rosters = resolve_voter_rosters(_soup("<p>Geen bijlage</p>"), "9")

    assert rosters.names() == ([], [], [])
