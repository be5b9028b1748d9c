"""On-disk cache of downloaded reports and dossier pages.

Reports never change once published and are downloaded once. Dossier pages do
change while a bill moves through parliament, so their file name carries the
download date and a page older than the referencing meeting is fetched again.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable, Iterator, Optional, Tuple
import logging
import re

from ..core.types import MeetingKind
from .kamer import KamerClient

LOGGER = logging.getLogger(__name__)

_DOSSIER_FILE = re.compile(r"^(?P<session>\d+)_(?P<dossier>.+)_(?P<date>\d{4}-\d{2}-\d{2})\.html$")
_FILE_ENCODING = "utf-8"


class SourceCache:
    """Layout: ``sessions/{s}/meetings/{kind}/{s}-{id}.html`` and
    ``sessions/{s}/dossiers/{s}_{dossier}_{YYYY-MM-DD}.html``."""

    def __init__(
        self,
        directory: Path,
        client: KamerClient,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._directory = Path(directory)
        self._client = client
        self._today = today

    @property
    def directory(self) -> Path:
        return self._directory

    # --- reports --------------------------------------------------------
    def report_path(self, kind: MeetingKind, session_id: int, meeting_id: int) -> Path:
        return (
            self._directory
            / "sessions"
            / str(session_id)
            / "meetings"
            / kind.value
            / f"{session_id}-{meeting_id}.html"
        )

    def get_report(self, kind: MeetingKind, session_id: int, meeting_id: int) -> str:
        """Return the report HTML, downloading it on first use.

        Raises :class:`~kamerwatch.clients.kamer.DocumentNotFoundError` when
        the report has not been published.
        """

        path = self.report_path(kind, session_id, meeting_id)
        if path.exists():
            return path.read_text(encoding=_FILE_ENCODING)
        LOGGER.info("Downloading %s report %s/%s", kind.value, session_id, meeting_id)
        content = self._client.fetch_report(kind, session_id, meeting_id)
        self._write(path, content)
        return content

    # --- dossiers -------------------------------------------------------
    def dossier_directory(self, session_id: int) -> Path:
        return self._directory / "sessions" / str(session_id) / "dossiers"

    def find_dossier(self, session_id: int, dossier_id: str) -> Optional[Tuple[Path, date]]:
        """The cached page of a dossier and the date it was downloaded."""

        directory = self.dossier_directory(session_id)
        if not directory.exists():
            return None
        prefix = f"{session_id}_{dossier_id}_"
        for path in sorted(directory.glob(f"{prefix}*.html")):
            match = _DOSSIER_FILE.match(path.name)
            if match is None or match.group("dossier") != dossier_id:
                continue
            try:
                return path, date.fromisoformat(match.group("date"))
            except ValueError:
                LOGGER.warning("Ignoring cached dossier with invalid date: %s", path)
        return None

    def ensure_dossier(self, session_id: int, dossier_id: str, meeting_date: date) -> Path:
        """Make sure the cached page of ``dossier_id`` is at least as new as ``meeting_date``."""

        cached = self.find_dossier(session_id, dossier_id)
        if cached is not None:
            path, fetched_on = cached
            if fetched_on >= meeting_date:
                return path
            LOGGER.info("Dossier %s cached on %s is older than meeting of %s", dossier_id, fetched_on, meeting_date)
        content = self._client.fetch_dossier(session_id, dossier_id)
        if cached is not None:
            cached[0].unlink(missing_ok=True)
        path = self.dossier_directory(session_id) / f"{session_id}_{dossier_id}_{self._today().isoformat()}.html"
        self._write(path, content)
        return path

    def iter_dossiers(self, session_id: int) -> Iterator[Tuple[str, Path]]:
        """Yield ``(dossier_id, path)`` for every cached dossier page of a session."""

        directory = self.dossier_directory(session_id)
        if not directory.exists():
            return
        for path in sorted(directory.glob("*.html")):
            match = _DOSSIER_FILE.match(path.name)
            if match is None or match.group("session") != str(session_id):
                continue
            yield match.group("dossier"), path

    @staticmethod
    def read(path: Path) -> str:
        return path.read_text(encoding=_FILE_ENCODING)

    @staticmethod
    def _write(path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding=_FILE_ENCODING)


__all__ = ["SourceCache"]
