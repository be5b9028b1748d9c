"""Extraction engine for plenary session reports.

A report is scanned three times, once per section kind, so that each scan only
has to keep the state of one section. All passes are pure functions of the
parsed document.
"""
from __future__ import annotations

from itertools import zip_longest
from typing import Iterable, List, Optional, Sequence, Tuple, Union
import logging

from bs4 import BeautifulSoup, Tag

from ..core.types import MeetingKind, MeetingReport, Proposition, Question, Vote
from .accumulator import (
    PROPOSITION_GROUPING,
    QUESTION_GROUPING,
    VOTE_GROUPING,
    GroupAccumulator,
    GroupingRules,
    ItemText,
    Language,
)
from .discussion import segment_discussion
from .meeting import parse_meeting_metadata
from .patterns import ExtractionError, VoteFields, extract_proposition, extract_questions, extract_vote
from .sections import (
    ITEM_HEADING_TAG,
    PROPOSITIONS_RULE,
    QUESTIONS_RULE,
    VOTES_RULE,
    Section,
    SectionRule,
    block_nodes,
    scan_sections,
)
from .text import node_text, unique
from .votes import parse_vote_table, resolve_voter_rosters

LOGGER = logging.getLogger(__name__)

HTML_PARSER = "html.parser"


def load_document(html: Union[str, bytes]) -> BeautifulSoup:
    """Parse decoded report HTML."""

    return BeautifulSoup(html, HTML_PARSER)


def collect_items(
    nodes: Iterable[Tag],
    rule: SectionRule,
    grouping: GroupingRules,
    *,
    collect_paragraphs: bool = False,
) -> List[ItemText]:
    """Run the section scanner and the accumulator over ``nodes``."""

    accumulator = GroupAccumulator(grouping, collect_paragraphs=collect_paragraphs)
    items: List[ItemText] = []
    for node, section in scan_sections(nodes, rule):
        if section is Section.NONE:
            continue
        if node.name == ITEM_HEADING_TAG:
            items.extend(accumulator.feed_heading(node))
        elif node.name == "p":
            accumulator.feed_paragraph(node_text(node))
    items.extend(accumulator.finish())
    return items


def build_questions(item: ItemText, first_id: int) -> List[Question]:
    """One question per sub-question; they all share the item's discussion."""

    dutch = extract_questions(item.nl)
    french = extract_questions(item.fr)
    if not dutch and not french:
        LOGGER.debug("No question found in heading %r / %r", item.nl, item.fr)
        return []
    discussion = tuple(segment_discussion(item.discussion))
    questions: List[Question] = []
    for offset, (nl, fr) in enumerate(zip_longest(dutch, french)):
        primary = nl or fr
        dossier_ids = unique(fields.dossier_id for fields in (nl, fr) if fields and fields.dossier_id)
        questions.append(
            Question(
                question_id=first_id + offset,
                topic_nl=nl.topic if nl else "",
                topic_fr=fr.topic if fr else "",
                questioners=primary.questioners,
                respondents=tuple(unique(primary.respondents)),
                dossier_ids=tuple(dossier_ids[:1]),
                discussion=discussion,
            )
        )
    return questions


def extract_question_records(nodes: Sequence[Tag], rule: SectionRule = QUESTIONS_RULE) -> List[Question]:
    questions: List[Question] = []
    for item in collect_items(nodes, rule, QUESTION_GROUPING, collect_paragraphs=True):
        questions.extend(build_questions(item, len(questions)))
    return questions


def build_propositions(item: ItemText, first_id: int) -> List[Proposition]:
    """Pair the Dutch and French lines of a proposition block."""

    propositions: List[Proposition] = []
    pairs = zip_longest(item.lines(Language.NL), item.lines(Language.FR), fillvalue="")
    for nl_line, fr_line in pairs:
        try:
            nl = extract_proposition(nl_line) if nl_line else None
            fr = extract_proposition(fr_line) if fr_line else None
        except ExtractionError:
            LOGGER.warning("Skipping unparseable proposition %r / %r", nl_line, fr_line)
            continue
        primary = nl if nl and nl.dossier_id else fr if fr and fr.dossier_id else nl or fr
        if primary is None:
            continue
        propositions.append(
            Proposition(
                proposition_id=first_id + len(propositions),
                title_nl=nl.topic if nl else "",
                title_fr=fr.topic if fr else "",
                dossier_id=primary.dossier_id,
                document_id=primary.document_id,
            )
        )
    return propositions


def extract_proposition_records(nodes: Sequence[Tag]) -> List[Proposition]:
    propositions: List[Proposition] = []
    for item in collect_items(nodes, PROPOSITIONS_RULE, PROPOSITION_GROUPING):
        propositions.extend(build_propositions(item, len(propositions)))
    return propositions


def _vote_title(text: str, fallback: Optional[str]) -> Tuple[Optional[VoteFields], str]:
    fields = extract_vote(text) if text else None
    if fields is None or not fields.topic:
        return fields, fallback or ""
    return fields, fields.topic


def extract_vote_records(document: BeautifulSoup, nodes: Sequence[Tag]) -> List[Vote]:
    """Roll-call votes with their tallies and rosters.

    A result table belongs to the item heading buffered when the table is met;
    several tables can follow one heading.
    """

    accumulator = GroupAccumulator(VOTE_GROUPING)
    votes: List[Vote] = []
    for node, section in scan_sections(nodes, VOTES_RULE):
        if section is Section.NONE:
            continue
        if node.name == ITEM_HEADING_TAG:
            accumulator.feed_heading(node)
            continue
        if node.name != "table":
            continue
        tally = parse_vote_table(node)
        if tally is None or not tally.has_votes:
            continue
        title = accumulator.current
        heading = accumulator.last_heading
        nl, title_nl = _vote_title(title.nl, heading.nl)
        fr, title_fr = _vote_title(title.fr, heading.fr)
        members_yes, members_no, members_abstain = resolve_voter_rosters(document, tally.index).names()
        ids = nl if nl and (nl.dossier_id or nl.motion_id) else fr if fr and (fr.dossier_id or fr.motion_id) else nl
        votes.append(
            Vote(
                vote_id=len(votes),
                title_nl=title_nl,
                title_fr=title_fr,
                yes=tally.yes,
                no=tally.no,
                abstain=tally.abstain,
                members_yes=tuple(members_yes),
                members_no=tuple(members_no),
                members_abstain=tuple(members_abstain),
                dossier_id=ids.dossier_id if ids else None,
                document_id=ids.document_id if ids else None,
                motion_id=ids.motion_id if ids else None,
            )
        )
    return votes


def parse_plenary_document(document: BeautifulSoup, session_id: int, meeting_id: int) -> MeetingReport:
    """Extract every record of a plenary report.

    Raises :class:`~kamerwatch.parsing.meeting.MeetingMetadataError` when the
    meeting date or times cannot be read.
    """

    meeting = parse_meeting_metadata(document, session_id, meeting_id, MeetingKind.PLENARY)
    nodes = block_nodes(document)
    report = MeetingReport(
        meeting=meeting,
        questions=extract_question_records(nodes),
        propositions=extract_proposition_records(nodes),
        votes=extract_vote_records(document, nodes),
    )
    LOGGER.info(
        "Plenary %s/%s: %d question(s), %d proposition(s), %d vote(s)",
        session_id,
        meeting_id,
        len(report.questions),
        len(report.propositions),
        len(report.votes),
    )
    return report


def parse_plenary(html: Union[str, bytes], session_id: int, meeting_id: int) -> MeetingReport:
    return parse_plenary_document(load_document(html), session_id, meeting_id)


__all__ = [
    "HTML_PARSER",
    "build_propositions",
    "build_questions",
    "collect_items",
    "extract_proposition_records",
    "extract_question_records",
    "extract_vote_records",
    "load_document",
    "parse_plenary",
    "parse_plenary_document",
]
