from __future__ import annotations

from datetime import date

from kamerwatch.core.types import (
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
from kamerwatch.database import create_storage


def _meeting(meeting_id: int, day: date, kind: MeetingKind = MeetingKind.PLENARY) -> Meeting:
    return Meeting(
        session_id=55,
        meeting_id=meeting_id,
        kind=kind,
        date=day,
        time_of_day=TimeOfDay.AFTERNOON,
        start_time="14h15",
        end_time="18h02",
        commission=Commission.JUSTICE if kind is MeetingKind.COMMISSION else None,
        chair="Kristien Van Vaerenbergh" if kind is MeetingKind.COMMISSION else None,
    )


def _report(meeting_id: int, day: date, question_count: int = 1) -> MeetingReport:
    questions = [
        Question(
            question_id=index,
            topic_nl=f"Onderwerp {index}",
            topic_fr=f"Sujet {index}",
            questioners=("Jan Peeters",),
            respondents=("de eerste minister",),
            dossier_ids=(f"Q5500000{index}C",),
            discussion=(DiscussionTurn(speaker="Jan Peeters", text="Vraag."),),
        )
        for index in range(question_count)
    ]
    return MeetingReport(
        meeting=_meeting(meeting_id, day),
        questions=questions,
        propositions=[Proposition(proposition_id=0, title_nl="Wetsvoorstel", title_fr="Proposition", dossier_id="3456", document_id="1")],
        votes=[
            Vote(
                vote_id=0,
                title_nl="Wetsontwerp XYZ",
                title_fr="Projet de loi XYZ",
                yes=80,
                no=40,
                abstain=0,
                members_yes=("Jan Peeters",),
                members_no=("Marie Dupont",),
                dossier_id="123",
                document_id="4",
            )
        ],
    )


def test_replace_meeting_round_trips_records(tmp_path):
    storage = create_storage(f"sqlite:///{(tmp_path / 'records.db').as_posix()}")
    report = _report(1, date(2023, 10, 12), question_count=2)

    overview = storage.replace_meeting(report)

    assert overview.question_count == 2
    assert overview.vote_count == 1
    assert storage.get_meeting(55, MeetingKind.PLENARY, 1) == report.meeting
    assert storage.questions_for(55, MeetingKind.PLENARY, 1) == report.questions
    assert storage.propositions_for(55, 1) == report.propositions
    assert storage.votes_for(55, 1) == report.votes


def test_replace_meeting_is_idempotent(tmp_path):
    storage = create_storage(f"sqlite:///{(tmp_path / 'replace.db').as_posix()}")

    storage.replace_meeting(_report(1, date(2023, 10, 12), question_count=3))
    storage.replace_meeting(_report(1, date(2023, 10, 12), question_count=1))

    assert len(storage.questions_for(55, MeetingKind.PLENARY, 1)) == 1
    overview = storage.list_meetings()
    assert len(overview) == 1
    assert overview[0].question_count == 1


def test_list_meetings_returns_newest_first(tmp_path):
    storage = create_storage(f"sqlite:///{(tmp_path / 'overview.db').as_posix()}")
    storage.replace_meeting(_report(1, date(2023, 10, 5), question_count=1))
    storage.replace_meeting(_report(2, date(2023, 10, 12), question_count=2))
    storage.replace_meeting(
        MeetingReport(meeting=_meeting(1088, date(2023, 10, 8), MeetingKind.COMMISSION))
    )

    overview = storage.list_meetings()
    assert [item.meeting_id for item in overview] == [2, 1088, 1]
    assert overview[0].question_count == 2
    assert overview[1].commission == Commission.JUSTICE.value
    assert overview[1].vote_count == 0

    plenary = storage.list_meetings(kind=MeetingKind.PLENARY, limit=1)
    assert [item.meeting_id for item in plenary] == [2]
    assert storage.get_meeting(55, MeetingKind.COMMISSION, 1088).chair == "Kristien Van Vaerenbergh"


def test_replace_dossier_round_trips_subdocuments(tmp_path):
    storage = create_storage(f"sqlite:///{(tmp_path / 'dossiers.db').as_posix()}")
    dossier = Dossier(
        session_id=55,
        id="3456",
        title="Wetsvoorstel over de pensioenen",
        authors=("Jan Peeters", "Eva Janssens"),
        submission_date="12/10/2023",
        document_type=DocumentType.LAW_PROPOSAL,
        status=DocumentStatus.ADOPTED,
        subdocuments=(
            Subdocument(dossier_id="3456", id="55K3456001", document_type=DocumentType.LAW_PROPOSAL, date="12/10/2023", authors=("Jan Peeters",)),
            Subdocument(dossier_id="3456", id="55K3456002", document_type=DocumentType.AMENDMENT, date="20/11/2023"),
        ),
    )

    assert storage.replace_dossier(dossier) == 2
    assert storage.replace_dossier(dossier) == 2

    assert storage.get_dossier(55, "3456") == dossier
    assert storage.get_dossier(55, "missing") is None
