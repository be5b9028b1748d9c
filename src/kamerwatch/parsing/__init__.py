"""Extraction engine turning chamber report HTML into typed records."""

from .commission import parse_commission, parse_commission_document
from .dossiers import parse_dossier
from .meeting import MeetingMetadataError, parse_meeting_metadata
from .patterns import ExtractionError
from .plenary import load_document, parse_plenary, parse_plenary_document

__all__ = [
    "ExtractionError",
    "MeetingMetadataError",
    "load_document",
    "parse_commission",
    "parse_commission_document",
    "parse_dossier",
    "parse_meeting_metadata",
    "parse_plenary",
    "parse_plenary_document",
]
