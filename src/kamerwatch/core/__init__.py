"""Core domain types."""
from __future__ import annotations

from .types import (
    Commission,
    DiscussionTurn,
    DocumentStatus,
    DocumentType,
    Dossier,
    Meeting,
    MeetingKind,
    MeetingReport,
    Proposition,
    Question,
    Subdocument,
    TimeOfDay,
    Vote,
)

__all__ = [
    "Commission",
    "DiscussionTurn",
    "DocumentStatus",
    "DocumentType",
    "Dossier",
    "Meeting",
    "MeetingKind",
    "MeetingReport",
    "Proposition",
    "Question",
    "Subdocument",
    "TimeOfDay",
    "Vote",
]
