from __future__ import annotations

from kamerwatch.core.types import DiscussionTurn
from kamerwatch.parsing.discussion import clean_segment, segment_discussion, speaker_name


def test_segment_discussion_splits_on_speakers():
    turns = segment_discussion("08.01 Jan Peeters: Hello.NEWPARAGRAPHDe voorzitter: Thank you.")

    assert turns == [
        DiscussionTurn(speaker="Jan Peeters", text="Hello."),
        DiscussionTurn(speaker="Voorzitter", text="Thank you."),
    ]


def test_paragraphs_of_one_turn_become_lines():
    turns = segment_discussion(
        "08.01 Jan Peeters (N-VA): Eerste alinea.NEWPARAGRAPHTweede alinea.NEWPARAGRAPH"
        "08.02 Minister Annelies Verlinden: Antwoord.NEWPARAGRAPH"
    )

    assert [turn.speaker for turn in turns] == ["Jan Peeters", "Annelies Verlinden"]
    assert turns[0].text == "Eerste alinea.\nTweede alinea."
    assert turns[1].text == "Antwoord."


def test_boilerplate_only_turns_are_dropped():
    turns = segment_discussion(
        "12.01 Eva Janssens: Vraag.NEWPARAGRAPHLe président: L'incident est clos.NEWPARAGRAPH"
    )

    assert turns == [DiscussionTurn(speaker="Eva Janssens", text="Vraag.")]


def test_text_before_first_speaker_is_ignored():
    turns = segment_discussion("Inleiding zonder spreker.NEWPARAGRAPH03.04 Tom Claes: Tekst.")

    assert turns == [DiscussionTurn(speaker="Tom Claes", text="Tekst.")]


def test_empty_discussion():
    assert segment_discussion("") == []
    assert segment_discussion("Geen enkele spreker.") == []


def test_speaker_name_normalisation():
    assert speaker_name("Minister Jan Jambon (N-VA)") == "Jan Jambon"
    assert speaker_name("Mevrouw Eva Janssens, rapporteur") == "Eva Janssens"
    assert speaker_name("De voorzitter") == "Voorzitter"
    assert speaker_name("(N-VA)") == "Onbekend"


def test_speaker_name_strips_french_abbreviated_titles():
    assert speaker_name("M. Pierre Dupont (PS)") == "Pierre Dupont"
    assert speaker_name("Mme Marie Dupont, ministre") == "Marie Dupont"
    assert speaker_name("Secrétaire d'État Eva De Bleeker") == "Eva De Bleeker"


def test_clean_segment_removes_incident_phrases():
    assert clean_segment(" Antwoord.NEWPARAGRAPHHet incident is gesloten.NEWPARAGRAPH") == "Antwoord."
