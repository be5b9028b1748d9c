"""Persistence helpers built on SQLAlchemy."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterator, List, Optional

from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ..core.types import (
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
from .models import (
    Base,
    DossierModel,
    MeetingModel,
    PropositionModel,
    QuestionModel,
    SubdocumentModel,
    VoteModel,
)


@dataclass(slots=True)
class MeetingOverview:
    """Lightweight representation of a persisted meeting."""

    session_id: int
    kind: MeetingKind
    meeting_id: int
    date: date
    commission: Optional[str]
    question_count: int
    vote_count: int
    updated_at: datetime | None


def _meeting_key(meeting: Meeting) -> tuple[int, str, int]:
    return meeting.session_id, meeting.kind.value, meeting.meeting_id


def _to_meeting(model: MeetingModel) -> Meeting:
    return Meeting(
        session_id=model.session_id,
        meeting_id=model.meeting_id,
        kind=MeetingKind(model.kind),
        date=model.date,
        time_of_day=TimeOfDay(model.time_of_day),
        start_time=model.start_time,
        end_time=model.end_time,
        commission=Commission(model.commission) if model.commission else None,
        chair=model.chair,
    )


def _to_question(model: QuestionModel) -> Question:
    return Question(
        question_id=model.question_id,
        topic_nl=model.topic_nl,
        topic_fr=model.topic_fr,
        questioners=tuple(model.questioners or ()),
        respondents=tuple(model.respondents or ()),
        dossier_ids=tuple(model.dossier_ids or ()),
        discussion=tuple(
            DiscussionTurn(speaker=turn["speaker"], text=turn["text"]) for turn in model.discussion or ()
        ),
    )


def _to_proposition(model: PropositionModel) -> Proposition:
    return Proposition(
        proposition_id=model.proposition_id,
        title_nl=model.title_nl,
        title_fr=model.title_fr,
        dossier_id=model.dossier_id,
        document_id=model.document_id,
    )


def _to_vote(model: VoteModel) -> Vote:
    return Vote(
        vote_id=model.vote_id,
        title_nl=model.title_nl,
        title_fr=model.title_fr,
        yes=model.yes,
        no=model.no,
        abstain=model.abstain,
        members_yes=tuple(model.members_yes or ()),
        members_no=tuple(model.members_no or ()),
        members_abstain=tuple(model.members_abstain or ()),
        dossier_id=model.dossier_id,
        document_id=model.document_id,
        motion_id=model.motion_id,
    )


def _to_dossier(model: DossierModel) -> Dossier:
    return Dossier(
        session_id=model.session_id,
        id=model.id,
        title=model.title,
        authors=tuple(model.authors or ()),
        submission_date=model.submission_date,
        end_date=model.end_date,
        vote_date=model.vote_date,
        document_type=DocumentType(model.document_type),
        status=DocumentStatus(model.status),
        subdocuments=tuple(
            Subdocument(
                dossier_id=sub.dossier_id,
                id=sub.document_id,
                document_type=DocumentType(sub.document_type),
                date=sub.date,
                authors=tuple(sub.authors or ()),
            )
            for sub in model.subdocuments
        ),
    )


class Storage:
    """Wrapper around SQLAlchemy to store meetings, their records and dossiers."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ensure_schema(self) -> None:
        Base.metadata.create_all(self._engine)

    def replace_meeting(self, report: MeetingReport) -> MeetingOverview:
        """Store a meeting and its records, replacing an earlier import of it."""

        meeting = report.meeting
        session_id, kind, meeting_id = _meeting_key(meeting)
        with self.session() as session:
            existing = session.get(MeetingModel, (session_id, kind, meeting_id))
            if existing is not None:
                session.delete(existing)
                session.flush()
            model = MeetingModel(
                session_id=session_id,
                kind=kind,
                meeting_id=meeting_id,
                date=meeting.date,
                time_of_day=meeting.time_of_day.value,
                start_time=meeting.start_time,
                end_time=meeting.end_time,
                commission=meeting.commission.value if meeting.commission else None,
                chair=meeting.chair,
            )
            model.questions = [
                QuestionModel(
                    session_id=session_id,
                    kind=kind,
                    meeting_id=meeting_id,
                    question_id=question.question_id,
                    topic_nl=question.topic_nl,
                    topic_fr=question.topic_fr,
                    questioners=list(question.questioners),
                    respondents=list(question.respondents),
                    dossier_ids=list(question.dossier_ids),
                    discussion=[{"speaker": turn.speaker, "text": turn.text} for turn in question.discussion],
                )
                for question in report.questions
            ]
            model.propositions = [
                PropositionModel(
                    session_id=session_id,
                    kind=kind,
                    meeting_id=meeting_id,
                    proposition_id=proposition.proposition_id,
                    title_nl=proposition.title_nl,
                    title_fr=proposition.title_fr,
                    dossier_id=proposition.dossier_id,
                    document_id=proposition.document_id,
                )
                for proposition in report.propositions
            ]
            model.votes = [
                VoteModel(
                    session_id=session_id,
                    kind=kind,
                    meeting_id=meeting_id,
                    vote_id=vote.vote_id,
                    title_nl=vote.title_nl,
                    title_fr=vote.title_fr,
                    yes=vote.yes,
                    no=vote.no,
                    abstain=vote.abstain,
                    members_yes=list(vote.members_yes),
                    members_no=list(vote.members_no),
                    members_abstain=list(vote.members_abstain),
                    dossier_id=vote.dossier_id,
                    document_id=vote.document_id,
                    motion_id=vote.motion_id,
                )
                for vote in report.votes
            ]
            session.add(model)
            session.flush()
            return MeetingOverview(
                session_id=session_id,
                kind=meeting.kind,
                meeting_id=meeting_id,
                date=meeting.date,
                commission=model.commission,
                question_count=len(report.questions),
                vote_count=len(report.votes),
                updated_at=None,
            )

    def replace_dossier(self, dossier: Dossier) -> int:
        """Store a dossier with its subdocuments; returns the subdocument count."""

        with self.session() as session:
            existing = session.get(DossierModel, (dossier.session_id, dossier.id))
            if existing is not None:
                session.delete(existing)
                session.flush()
            model = DossierModel(
                session_id=dossier.session_id,
                id=dossier.id,
                title=dossier.title,
                authors=list(dossier.authors),
                submission_date=dossier.submission_date,
                end_date=dossier.end_date,
                vote_date=dossier.vote_date,
                document_type=dossier.document_type.value,
                status=dossier.status.value,
            )
            model.subdocuments = [
                SubdocumentModel(
                    session_id=dossier.session_id,
                    dossier_id=dossier.id,
                    position=position,
                    document_id=sub.id,
                    document_type=sub.document_type.value,
                    date=sub.date,
                    authors=list(sub.authors),
                )
                for position, sub in enumerate(dossier.subdocuments)
            ]
            session.add(model)
            session.flush()
            return len(dossier.subdocuments)

    def get_meeting(self, session_id: int, kind: MeetingKind, meeting_id: int) -> Optional[Meeting]:
        with self.session() as session:
            model = session.get(MeetingModel, (session_id, kind.value, meeting_id))
            return _to_meeting(model) if model is not None else None

    def questions_for(self, session_id: int, kind: MeetingKind, meeting_id: int) -> List[Question]:
        with self.session() as session:
            stmt = (
                select(QuestionModel)
                .where(
                    QuestionModel.session_id == session_id,
                    QuestionModel.kind == kind.value,
                    QuestionModel.meeting_id == meeting_id,
                )
                .order_by(QuestionModel.question_id)
            )
            return [_to_question(model) for model in session.scalars(stmt)]

    def propositions_for(self, session_id: int, meeting_id: int) -> List[Proposition]:
        with self.session() as session:
            stmt = (
                select(PropositionModel)
                .where(
                    PropositionModel.session_id == session_id,
                    PropositionModel.kind == MeetingKind.PLENARY.value,
                    PropositionModel.meeting_id == meeting_id,
                )
                .order_by(PropositionModel.proposition_id)
            )
            return [_to_proposition(model) for model in session.scalars(stmt)]

    def votes_for(self, session_id: int, meeting_id: int) -> List[Vote]:
        with self.session() as session:
            stmt = (
                select(VoteModel)
                .where(
                    VoteModel.session_id == session_id,
                    VoteModel.kind == MeetingKind.PLENARY.value,
                    VoteModel.meeting_id == meeting_id,
                )
                .order_by(VoteModel.vote_id)
            )
            return [_to_vote(model) for model in session.scalars(stmt)]

    def get_dossier(self, session_id: int, dossier_id: str) -> Optional[Dossier]:
        with self.session() as session:
            model = session.get(DossierModel, (session_id, dossier_id))
            return _to_dossier(model) if model is not None else None

    def dispose(self) -> None:
        """Dispose the underlying SQLAlchemy engine."""

        self._engine.dispose()

    def list_meetings(
        self,
        *,
        kind: Optional[MeetingKind] = None,
        session_id: Optional[int] = None,
        limit: int = 25,
    ) -> list[MeetingOverview]:
        """Return the latest stored meetings, newest first."""

        question_count = (
            select(func.count(QuestionModel.id))
            .where(
                QuestionModel.session_id == MeetingModel.session_id,
                QuestionModel.kind == MeetingModel.kind,
                QuestionModel.meeting_id == MeetingModel.meeting_id,
            )
            .correlate(MeetingModel)
            .scalar_subquery()
        )
        vote_count = (
            select(func.count(VoteModel.id))
            .where(
                VoteModel.session_id == MeetingModel.session_id,
                VoteModel.kind == MeetingModel.kind,
                VoteModel.meeting_id == MeetingModel.meeting_id,
            )
            .correlate(MeetingModel)
            .scalar_subquery()
        )
        with self.session() as session:
            stmt = select(
                MeetingModel.session_id,
                MeetingModel.kind,
                MeetingModel.meeting_id,
                MeetingModel.date,
                MeetingModel.commission,
                MeetingModel.updated_at,
                question_count.label("question_count"),
                vote_count.label("vote_count"),
            )
            if kind is not None:
                stmt = stmt.where(MeetingModel.kind == kind.value)
            if session_id is not None:
                stmt = stmt.where(MeetingModel.session_id == session_id)
            stmt = stmt.order_by(
                MeetingModel.date.desc(),
                MeetingModel.meeting_id.desc(),
            ).limit(limit)
            rows = session.execute(stmt).all()
            return [
                MeetingOverview(
                    session_id=row.session_id,
                    kind=MeetingKind(row.kind),
                    meeting_id=row.meeting_id,
                    date=row.date,
                    commission=row.commission,
                    question_count=row.question_count or 0,
                    vote_count=row.vote_count or 0,
                    updated_at=row.updated_at,
                )
                for row in rows
            ]


def create_storage(database_url: str, *, echo: bool = False) -> Storage:
    engine = create_engine(database_url, echo=echo, future=True)
    storage = Storage(engine)
    storage.ensure_schema()
    return storage


__all__ = ["MeetingOverview", "Storage", "create_storage"]
