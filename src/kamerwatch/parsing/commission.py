"""Extraction engine for committee reports (questions and interpellations only)."""
from __future__ import annotations

from typing import Union
import logging

from bs4 import BeautifulSoup

from ..core.types import MeetingKind, MeetingReport
from .meeting import parse_meeting_metadata
from .plenary import extract_question_records, load_document
from .sections import COMMISSION_QUESTIONS_RULE, block_nodes

LOGGER = logging.getLogger(__name__)


def parse_commission_document(document: BeautifulSoup, session_id: int, meeting_id: int) -> MeetingReport:
    meeting = parse_meeting_metadata(document, session_id, meeting_id, MeetingKind.COMMISSION)
    questions = extract_question_records(block_nodes(document), COMMISSION_QUESTIONS_RULE)
    LOGGER.info(
        "Committee %s/%s (%s): %d question(s)",
        session_id,
        meeting_id,
        meeting.commission.value if meeting.commission else "-",
        len(questions),
    )
    return MeetingReport(meeting=meeting, questions=questions)


def parse_commission(html: Union[str, bytes], session_id: int, meeting_id: int) -> MeetingReport:
    return parse_commission_document(load_document(html), session_id, meeting_id)


__all__ = ["parse_commission", "parse_commission_document"]
