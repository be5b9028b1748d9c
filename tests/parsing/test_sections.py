from __future__ import annotations

from bs4 import BeautifulSoup

from kamerwatch.parsing.sections import (
    COMMISSION_QUESTIONS_RULE,
    PROPOSITIONS_RULE,
    QUESTIONS_RULE,
    VOTES_RULE,
    ScanState,
    Section,
    SectionScanner,
    block_nodes,
    scan_sections,
)


def _nodes(html: str):
    return block_nodes(BeautifulSoup(html, "html.parser"))


def _sections(html: str, rule):
    return [(node.name, section) for node, section in scan_sections(_nodes(html), rule)]


def test_section_without_heading_yields_nothing():
    html = "<h2>Iets</h2><p>Tekst</p><table><tr><td>x</td></tr></table>"

    sections = _sections(html, QUESTIONS_RULE)

    assert all(section is Section.NONE for _, section in sections)


def test_translation_heading_keeps_section_open():
    html = (
        "<h1>Wetsvoorstellen</h1>"
        "<h1>Propositions de loi</h1>"
        "<h2>Wetsvoorstel over X (1/1)</h2>"
        "<h1>Naamstemmingen</h1>"
        "<h2>Na het einde</h2>"
    )

    sections = _sections(html, PROPOSITIONS_RULE)

    assert sections == [
        ("h1", Section.PROPOSITIONS),
        ("h1", Section.PROPOSITIONS),
        ("h2", Section.PROPOSITIONS),
    ]


def test_votes_section_runs_to_the_end():
    html = (
        "<h1>Naamstemmingen</h1>"
        "<h1>Votes nominatifs</h1>"
        "<table><tr><td>(Stemming/vote 1)</td></tr></table>"
        "<h1>Bijlage</h1>"
        "<p>Vote nominatif - Naamstemming: 1</p>"
    )

    sections = [section for _, section in _sections(html, VOTES_RULE)]

    assert sections == [Section.VOTES] * 5


def test_unrelated_heading_closes_questions():
    scanner = SectionScanner(QUESTIONS_RULE)
    nodes = _nodes("<h1>Mondelinge vragen</h1><p>a</p><h1>Wetsontwerpen</h1><p>b</p>")

    results = [scanner.classify(node) for node in nodes]

    assert results == [Section.QUESTIONS, Section.QUESTIONS, Section.NONE, Section.NONE]
    assert scanner.state is ScanState.CLOSED


def test_committee_reports_are_active_from_the_start():
    sections = [section for _, section in _sections("<p>a</p><h1>Anything</h1><h2>b</h2>", COMMISSION_QUESTIONS_RULE)]

    assert sections == [Section.QUESTIONS] * 3
