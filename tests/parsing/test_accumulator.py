from __future__ import annotations

from kamerwatch.parsing.accumulator import (
    QUESTION_GROUPING,
    VOTE_GROUPING,
    GroupAccumulator,
    HeadingRole,
    HeadingText,
    classify_heading,
    resolve_languages,
)


def test_group_start_flushes_previous_group():
    accumulator = GroupAccumulator(QUESTION_GROUPING)
    flushed = []

    flushed += accumulator.feed(HeadingText(nl="Samengevoegde vragen van", fr="Questions jointes de"))
    flushed += accumulator.feed(HeadingText(nl="- A aan B over 'X'", fr="- A à B sur 'X'"))
    flushed += accumulator.feed(HeadingText(nl="- C aan D over 'Y'", fr="- C à D sur 'Y'"))
    flushed += accumulator.feed(HeadingText(nl="Vraag van E aan F over 'Z'", fr="Question de E à F sur 'Z'"))
    flushed += accumulator.finish()

    assert len(flushed) == 2
    assert flushed[0].nl.split("\n") == [
        "Samengevoegde vragen van",
        "- A aan B over 'X'",
        "- C aan D over 'Y'",
    ]
    assert flushed[1].fr == "Question de E à F sur 'Z'"
    assert accumulator.finish() == []


def test_single_language_group_start_waits_for_translation():
    accumulator = GroupAccumulator(QUESTION_GROUPING)

    assert accumulator.feed(HeadingText(nl="Vraag van A aan B over 'X'")) == []
    assert accumulator.feed(HeadingText(fr="Question de A à B sur 'X'")) == []

    flushed = accumulator.feed(HeadingText(nl="Vraag van C aan D over 'Y'"))

    assert len(flushed) == 1
    assert flushed[0].nl == "Vraag van A aan B over 'X'"
    assert flushed[0].fr == "Question de A à B sur 'X'"


def test_repeated_language_flushes_incomplete_item():
    accumulator = GroupAccumulator(QUESTION_GROUPING)

    accumulator.feed(HeadingText(nl="Vraag van A aan B over 'X'"))
    flushed = accumulator.feed(HeadingText(nl="Vraag van C aan D over 'Y'"))

    assert [item.nl for item in flushed] == ["Vraag van A aan B over 'X'"]
    assert accumulator.current.nl == "Vraag van C aan D over 'Y'"


def test_unrelated_heading_discards_buffer():
    accumulator = GroupAccumulator(QUESTION_GROUPING)

    accumulator.feed(HeadingText(nl="Vraag van A aan B over 'X'", fr="Question de A à B sur 'X'"))
    assert accumulator.feed(HeadingText(nl="Regeling van de werkzaamheden")) == []

    assert not accumulator.has_content
    assert accumulator.finish() == []


def test_empty_heading_is_ignored():
    accumulator = GroupAccumulator(QUESTION_GROUPING)
    accumulator.feed(HeadingText(nl="Vraag van A aan B over 'X'"))

    assert accumulator.feed(HeadingText()) == []
    assert accumulator.current.nl == "Vraag van A aan B over 'X'"


def test_paragraphs_are_collected_while_an_item_is_buffered():
    accumulator = GroupAccumulator(QUESTION_GROUPING, collect_paragraphs=True)

    accumulator.feed_paragraph("voor de vraag")
    accumulator.feed(HeadingText(nl="Vraag van A aan B over 'X'", fr="Question de A à B sur 'X'"))
    accumulator.feed_paragraph("01.01 A: Tekst")
    accumulator.feed_paragraph("")

    assert accumulator.current.discussion == "01.01 A: TekstNEWPARAGRAPH"


def test_misclassified_language_is_moved():
    heading = resolve_languages("Question de A à B sur 'X'", None, QUESTION_GROUPING)

    assert heading.nl is None
    assert heading.fr == "Question de A à B sur 'X'"


def test_correct_tag_wins_when_both_slots_are_claimed():
    heading = resolve_languages("Question de A à B sur 'X'", "Question de C à D sur 'Y'", QUESTION_GROUPING)

    assert heading.fr == "Question de C à D sur 'Y'"
    assert heading.nl == "Question de A à B sur 'X'"


def test_heading_roles():
    assert classify_heading(HeadingText(), VOTE_GROUPING) is HeadingRole.EMPTY
    assert classify_heading(HeadingText(nl="Wetsontwerp (1/2)"), VOTE_GROUPING) is HeadingRole.GROUP_START
    assert classify_heading(HeadingText(nl="- Amendement"), VOTE_GROUPING) is HeadingRole.CONTINUATION
    assert classify_heading(HeadingText(nl="Regeling"), QUESTION_GROUPING) is HeadingRole.OTHER
