"""High level orchestration of the chamber report import."""
from __future__ import annotations

from dataclasses import dataclass
from threading import Event
from typing import Callable, Literal, Optional
import logging

from ..clients import DocumentNotFoundError, SourceCache
from ..core.types import MeetingKind, MeetingReport
from ..database import Storage
from ..parsing import (
    MeetingMetadataError,
    load_document,
    parse_commission_document,
    parse_dossier,
    parse_plenary_document,
)
from .crawl import CrawlBoundary

LOGGER = logging.getLogger(__name__)

PipelineEventKind = Literal[
    "start",
    "probed",
    "fetched",
    "parsed",
    "stored",
    "skipped",
    "progress",
    "finished",
    "cancelled",
    "error",
]


@dataclass(slots=True)
class PipelineEvent:
    """Fine grained progress notification emitted by :class:`ImportPipeline`."""

    kind: PipelineEventKind
    processed: int
    meeting_kind: MeetingKind | None = None
    meeting_id: int | None = None
    message: str | None = None
    question_count: int | None = None
    vote_count: int | None = None
    boundary: int | None = None


ProgressCallback = Callable[[PipelineEvent], None]

PARSERS = {
    MeetingKind.PLENARY: parse_plenary_document,
    MeetingKind.COMMISSION: parse_commission_document,
}


class ImportPipeline:
    """Complete workflow for discovering, parsing and storing reports."""

    def __init__(
        self,
        *,
        cache: SourceCache,
        storage: Storage,
        boundary: CrawlBoundary,
        session_id: int,
        probe_limit: Optional[int] = None,
    ) -> None:
        self._cache = cache
        self._storage = storage
        self._boundary = boundary
        self._session_id = session_id
        self._probe_limit = probe_limit

    def run(
        self,
        kind: MeetingKind = MeetingKind.PLENARY,
        *,
        limit: Optional[int] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[Event] = None,
    ) -> int:
        """Discover new reports of ``kind`` and (re)import every known one."""

        processed = 0
        cancelled = False
        had_error = False
        current_id: Optional[int] = None
        self._notify(
            progress_callback,
            PipelineEvent(kind="start", processed=processed, meeting_kind=kind, message="Pipeline run started"),
        )
        try:
            last = self._boundary.advance(
                kind, lambda meeting_id: self._probe(kind, meeting_id), max_steps=self._probe_limit
            )
            self._notify(
                progress_callback,
                PipelineEvent(
                    kind="probed",
                    processed=processed,
                    meeting_kind=kind,
                    boundary=last,
                    message=f"Reports 1..{last} are available",
                ),
            )
            for meeting_id in range(1, last + 1):
                if limit is not None and processed >= limit:
                    break
                if cancel_event and cancel_event.is_set():
                    cancelled = True
                    break
                current_id = meeting_id
                report = self._import_meeting(kind, meeting_id, processed, progress_callback)
                if report is None:
                    continue
                processed += 1
                self._notify(
                    progress_callback,
                    PipelineEvent(
                        kind="progress",
                        processed=processed,
                        meeting_kind=kind,
                        meeting_id=meeting_id,
                        message=f"Completed {kind.value} report {meeting_id}",
                        question_count=len(report.questions),
                        vote_count=len(report.votes),
                    ),
                )
            if cancel_event and cancel_event.is_set():
                cancelled = True
        except Exception as exc:  # pragma: no cover - re-raised for visibility in tests
            had_error = True
            LOGGER.exception("Import pipeline failed: %s", exc)
            self._notify(
                progress_callback,
                PipelineEvent(
                    kind="error",
                    processed=processed,
                    meeting_kind=kind,
                    meeting_id=current_id,
                    message=str(exc),
                ),
            )
            raise
        finally:
            if cancelled:
                self._notify(
                    progress_callback,
                    PipelineEvent(
                        kind="cancelled",
                        processed=processed,
                        meeting_kind=kind,
                        meeting_id=current_id,
                        message="Pipeline run cancelled",
                    ),
                )
            elif not had_error:
                self._notify(
                    progress_callback,
                    PipelineEvent(
                        kind="finished",
                        processed=processed,
                        meeting_kind=kind,
                        meeting_id=current_id,
                        message="Pipeline run finished",
                    ),
                )
        LOGGER.info("Imported %d %s report(s)", processed, kind.value)
        return processed

    def import_dossiers(self, *, progress_callback: Optional[ProgressCallback] = None) -> int:
        """Parse every cached dossier page of the session into the database."""

        stored = 0
        for dossier_id, path in self._cache.iter_dossiers(self._session_id):
            dossier = parse_dossier(load_document(self._cache.read(path)), self._session_id, dossier_id)
            self._storage.replace_dossier(dossier)
            stored += 1
            self._notify(
                progress_callback,
                PipelineEvent(kind="stored", processed=stored, message=f"Stored dossier {dossier_id}"),
            )
        LOGGER.info("Imported %d dossier(s) of session %s", stored, self._session_id)
        return stored

    # --- helpers --------------------------------------------------------
    def _probe(self, kind: MeetingKind, meeting_id: int) -> bool:
        try:
            self._cache.get_report(kind, self._session_id, meeting_id)
        except DocumentNotFoundError:
            return False
        return True

    def _import_meeting(
        self,
        kind: MeetingKind,
        meeting_id: int,
        processed: int,
        progress_callback: Optional[ProgressCallback],
    ) -> Optional[MeetingReport]:
        try:
            html = self._cache.get_report(kind, self._session_id, meeting_id)
        except DocumentNotFoundError as exc:
            self._skip(kind, meeting_id, processed, str(exc), progress_callback)
            return None
        self._notify(
            progress_callback,
            PipelineEvent(
                kind="fetched",
                processed=processed,
                meeting_kind=kind,
                meeting_id=meeting_id,
                message=f"Loaded {kind.value} report {meeting_id}",
            ),
        )
        try:
            report = PARSERS[kind](load_document(html), self._session_id, meeting_id)
        except MeetingMetadataError as exc:
            self._skip(kind, meeting_id, processed, str(exc), progress_callback)
            return None
        self._notify(
            progress_callback,
            PipelineEvent(
                kind="parsed",
                processed=processed,
                meeting_kind=kind,
                meeting_id=meeting_id,
                message=f"Parsed {len(report.questions)} questions and {len(report.votes)} votes",
                question_count=len(report.questions),
                vote_count=len(report.votes),
            ),
        )
        self._storage.replace_meeting(report)
        self._notify(
            progress_callback,
            PipelineEvent(
                kind="stored",
                processed=processed,
                meeting_kind=kind,
                meeting_id=meeting_id,
                message=f"Persisted {kind.value} report {meeting_id}",
                question_count=len(report.questions),
                vote_count=len(report.votes),
            ),
        )
        self._refresh_dossiers(report)
        return report

    def _refresh_dossiers(self, report: MeetingReport) -> None:
        for dossier_id in report.dossier_ids:
            try:
                self._cache.ensure_dossier(self._session_id, dossier_id, report.meeting.date)
            except DocumentNotFoundError:
                LOGGER.warning("Dossier %s referenced by meeting %s does not exist", dossier_id, report.meeting.meeting_id)

    def _skip(
        self,
        kind: MeetingKind,
        meeting_id: int,
        processed: int,
        reason: str,
        progress_callback: Optional[ProgressCallback],
    ) -> None:
        LOGGER.warning("Skipping %s report %s: %s", kind.value, meeting_id, reason)
        self._notify(
            progress_callback,
            PipelineEvent(
                kind="skipped",
                processed=processed,
                meeting_kind=kind,
                meeting_id=meeting_id,
                message=reason,
            ),
        )

    @staticmethod
    def _notify(callback: Optional[ProgressCallback], event: PipelineEvent) -> None:
        if callback:
            callback(event)


__all__ = ["ImportPipeline", "PipelineEvent", "PipelineEventKind", "ProgressCallback"]
