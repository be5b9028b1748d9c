"""Database integration components."""
from __future__ import annotations

from .models import (
    Base,
    DossierModel,
    MeetingModel,
    PropositionModel,
    QuestionModel,
    SubdocumentModel,
    VoteModel,
)
from .storage import MeetingOverview, Storage, create_storage

__all__ = [
    "Base",
    "DossierModel",
    "MeetingModel",
    "MeetingOverview",
    "PropositionModel",
    "QuestionModel",
    "Storage",
    "SubdocumentModel",
    "VoteModel",
    "create_storage",
]
