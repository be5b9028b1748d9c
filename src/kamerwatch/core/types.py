"""Typed domain objects produced by the extraction engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple


class MeetingKind(str, Enum):
    """Kind of published transcript."""

    PLENARY = "plenary"
    COMMISSION = "commission"


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class Commission(str, Enum):
    """Standing committees of the chamber."""

    INTERIOR = "BinnenlandseZakenVeiligheidMigratieEnBestuurszaken"
    JUSTICE = "Justitie"
    HEALTH = "GezondheidEnGelijkeKansen"
    ECONOMY = "EconomieConsumentenBeschermingEnDigitalisering"
    FOREIGN_AFFAIRS = "BuitenlandseBetrekkingen"
    MOBILITY = "MobiliteitOverheidsbedrijvenEnFederaleInstellingen"
    DEFENCE = "Landsverdediging"
    ENERGY = "EnergieLeefmilieuEnKlimaat"
    SOCIAL_AFFAIRS = "SocialeZakenWerkEnPensioenen"
    FINANCE = "FinancienEnBegroting"
    CLIMATE_DIALOGUE = "InterparlementaireKlimaatdialoog"
    UNKNOWN = "Onbekend"


class DocumentType(str, Enum):
    """Closed set of dossier and subdocument types."""

    ADOPTED_TEXT = "AdoptedText"
    AMENDMENT = "Amendment"
    OPINION = "Opinion"
    COUNCIL_OF_STATE_OPINION = "CouncilOfStateOpinion"
    REPORT = "Report"
    BILL_DRAFT = "BillDraft"
    TRANSMITTED_DRAFT = "TransmittedDraft"
    LAW_PROPOSAL = "LawProposal"
    RESOLUTION_PROPOSAL = "ResolutionProposal"
    REVISION_PROPOSAL = "RevisionProposal"
    INQUIRY_COMMITTEE_PROPOSAL = "InquiryCommitteeProposal"
    RULES_PROPOSAL = "RulesProposal"
    ARTICLES_ADOPTED_FIRST_VOTE = "ArticlesAdoptedFirstVote"
    UNKNOWN = "Unknown"


class DocumentStatus(str, Enum):
    ADOPTED = "Adopted"
    REJECTED = "Rejected"
    MOOT = "Moot"
    UNKNOWN = "Unknown"


@dataclass(frozen=True, slots=True)
class Meeting:
    """Metadata of a single plenary or committee sitting."""

    session_id: int
    meeting_id: int
    kind: MeetingKind
    date: date
    time_of_day: TimeOfDay
    start_time: str
    end_time: str
    commission: Optional[Commission] = None
    chair: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DiscussionTurn:
    speaker: str
    text: str


@dataclass(frozen=True, slots=True)
class Question:
    """One oral question; grouped questions share their discussion."""

    question_id: int
    topic_nl: str
    topic_fr: str
    questioners: Tuple[str, ...] = ()
    respondents: Tuple[str, ...] = ()
    dossier_ids: Tuple[str, ...] = ()
    discussion: Tuple[DiscussionTurn, ...] = ()


@dataclass(frozen=True, slots=True)
class Proposition:
    proposition_id: int
    title_nl: str
    title_fr: str
    dossier_id: Optional[str] = None
    document_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Vote:
    """A roll-call vote with its tallies and voter rosters."""

    vote_id: int
    title_nl: str
    title_fr: str
    yes: int
    no: int
    abstain: int
    members_yes: Tuple[str, ...] = ()
    members_no: Tuple[str, ...] = ()
    members_abstain: Tuple[str, ...] = ()
    dossier_id: Optional[str] = None
    document_id: Optional[str] = None
    motion_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Subdocument:
    dossier_id: str
    id: str
    document_type: DocumentType
    date: str
    authors: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Dossier:
    """A legislative dossier and the subdocuments attached to it."""

    session_id: int
    id: str
    title: str
    authors: Tuple[str, ...] = ()
    submission_date: str = ""
    end_date: str = ""
    vote_date: str = ""
    document_type: DocumentType = DocumentType.UNKNOWN
    status: DocumentStatus = DocumentStatus.UNKNOWN
    subdocuments: Tuple[Subdocument, ...] = ()


@dataclass(slots=True)
class MeetingReport:
    """Everything extracted from one meeting transcript."""

    meeting: Meeting
    questions: List[Question] = field(default_factory=list)
    propositions: List[Proposition] = field(default_factory=list)
    votes: List[Vote] = field(default_factory=list)

    @property
    def dossier_ids(self) -> List[str]:
        """Dossier ids referenced by propositions and votes, in document order."""

        seen: List[str] = []
        for item in [*self.propositions, *self.votes]:
            if item.dossier_id and item.dossier_id not in seen:
                seen.append(item.dossier_id)
        return seen


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
