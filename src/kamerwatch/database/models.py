"""SQLAlchemy models for the extracted chamber records."""
from __future__ import annotations

from datetime import date as calendar_date, datetime
from typing import Any, List, Optional

from sqlalchemy import (
    JSON,
    Date,
    DateTime,
    ForeignKeyConstraint,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Declarative SQLAlchemy base class."""


_MEETING_KEY = ("session_id", "kind", "meeting_id")
_MEETING_REFERENCE = ("meetings.session_id", "meetings.kind", "meetings.meeting_id")


class MeetingModel(Base):
    """Database representation of a plenary or committee sitting."""

    __tablename__ = "meetings"

    session_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    kind: Mapped[str] = mapped_column(String(16), primary_key=True)
    meeting_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[calendar_date] = mapped_column(Date, index=True)
    time_of_day: Mapped[str] = mapped_column(String(16))
    start_time: Mapped[str] = mapped_column(String(16))
    end_time: Mapped[str] = mapped_column(String(16))
    commission: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    chair: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )

    questions: Mapped[List["QuestionModel"]] = relationship(
        back_populates="meeting", cascade="all, delete-orphan", order_by="QuestionModel.question_id"
    )
    propositions: Mapped[List["PropositionModel"]] = relationship(
        back_populates="meeting", cascade="all, delete-orphan", order_by="PropositionModel.proposition_id"
    )
    votes: Mapped[List["VoteModel"]] = relationship(
        back_populates="meeting", cascade="all, delete-orphan", order_by="VoteModel.vote_id"
    )


class QuestionModel(Base):
    __tablename__ = "questions"
    __table_args__ = (
        ForeignKeyConstraint(_MEETING_KEY, _MEETING_REFERENCE, ondelete="CASCADE"),
        UniqueConstraint(*_MEETING_KEY, "question_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[int] = mapped_column(Integer)
    kind: Mapped[str] = mapped_column(String(16))
    meeting_id: Mapped[int] = mapped_column(Integer)
    question_id: Mapped[int] = mapped_column(Integer)
    topic_nl: Mapped[str] = mapped_column(Text)
    topic_fr: Mapped[str] = mapped_column(Text)
    questioners: Mapped[List[str]] = mapped_column(JSON, default=list)
    respondents: Mapped[List[str]] = mapped_column(JSON, default=list)
    dossier_ids: Mapped[List[str]] = mapped_column(JSON, default=list)
    discussion: Mapped[List[dict[str, Any]]] = mapped_column(JSON, default=list)

    meeting: Mapped[MeetingModel] = relationship(back_populates="questions")


class PropositionModel(Base):
    __tablename__ = "propositions"
    __table_args__ = (
        ForeignKeyConstraint(_MEETING_KEY, _MEETING_REFERENCE, ondelete="CASCADE"),
        UniqueConstraint(*_MEETING_KEY, "proposition_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[int] = mapped_column(Integer)
    kind: Mapped[str] = mapped_column(String(16))
    meeting_id: Mapped[int] = mapped_column(Integer)
    proposition_id: Mapped[int] = mapped_column(Integer)
    title_nl: Mapped[str] = mapped_column(Text)
    title_fr: Mapped[str] = mapped_column(Text)
    dossier_id: Mapped[Optional[str]] = mapped_column(String(32), nullable=True, index=True)
    document_id: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    meeting: Mapped[MeetingModel] = relationship(back_populates="propositions")


class VoteModel(Base):
    __tablename__ = "votes"
    __table_args__ = (
        ForeignKeyConstraint(_MEETING_KEY, _MEETING_REFERENCE, ondelete="CASCADE"),
        UniqueConstraint(*_MEETING_KEY, "vote_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[int] = mapped_column(Integer)
    kind: Mapped[str] = mapped_column(String(16))
    meeting_id: Mapped[int] = mapped_column(Integer)
    vote_id: Mapped[int] = mapped_column(Integer)
    title_nl: Mapped[str] = mapped_column(Text)
    title_fr: Mapped[str] = mapped_column(Text)
    yes: Mapped[int] = mapped_column(Integer)
    no: Mapped[int] = mapped_column(Integer)
    abstain: Mapped[int] = mapped_column(Integer)
    members_yes: Mapped[List[str]] = mapped_column(JSON, default=list)
    members_no: Mapped[List[str]] = mapped_column(JSON, default=list)
    members_abstain: Mapped[List[str]] = mapped_column(JSON, default=list)
    dossier_id: Mapped[Optional[str]] = mapped_column(String(32), nullable=True, index=True)
    document_id: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    motion_id: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    meeting: Mapped[MeetingModel] = relationship(back_populates="votes")


class DossierModel(Base):
    """A legislative dossier as last downloaded."""

    __tablename__ = "dossiers"

    session_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    title: Mapped[str] = mapped_column(Text)
    authors: Mapped[List[str]] = mapped_column(JSON, default=list)
    submission_date: Mapped[str] = mapped_column(String(32))
    end_date: Mapped[str] = mapped_column(String(32))
    vote_date: Mapped[str] = mapped_column(String(32))
    document_type: Mapped[str] = mapped_column(String(64))
    status: Mapped[str] = mapped_column(String(32))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )

    subdocuments: Mapped[List["SubdocumentModel"]] = relationship(
        back_populates="dossier", cascade="all, delete-orphan", order_by="SubdocumentModel.position"
    )


class SubdocumentModel(Base):
    __tablename__ = "subdocuments"
    __table_args__ = (
        ForeignKeyConstraint(
            ("session_id", "dossier_id"), ("dossiers.session_id", "dossiers.id"), ondelete="CASCADE"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[int] = mapped_column(Integer)
    dossier_id: Mapped[str] = mapped_column(String(32), index=True)
    position: Mapped[int] = mapped_column(Integer)
    document_id: Mapped[str] = mapped_column(String(32))
    document_type: Mapped[str] = mapped_column(String(64))
    date: Mapped[str] = mapped_column(String(32))
    authors: Mapped[List[str]] = mapped_column(JSON, default=list)

    dossier: Mapped[DossierModel] = relationship(back_populates="subdocuments")


__all__ = [
    "Base",
    "DossierModel",
    "MeetingModel",
    "PropositionModel",
    "QuestionModel",
    "SubdocumentModel",
    "VoteModel",
]
