"""Discovery of newly published reports.

Reports are numbered sequentially per session. The highest number seen so far
is persisted per report kind; a run probes the numbers after it until the
archive answers "not found".
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional
import logging

from ..core.types import MeetingKind

LOGGER = logging.getLogger(__name__)

STATE_FILES: Dict[MeetingKind, str] = {
    MeetingKind.PLENARY: "current_plenary_id.txt",
    MeetingKind.COMMISSION: "current_commission_id.txt",
}

Probe = Callable[[int], bool]


class CrawlBoundary:
    """Last processed report number per kind, stored as plain text files."""

    def __init__(self, state_directory: Path) -> None:
        self._state_directory = Path(state_directory)

    def path(self, kind: MeetingKind) -> Path:
        return self._state_directory / STATE_FILES[kind]

    def read(self, kind: MeetingKind) -> int:
        """The persisted boundary, ``0`` when nothing was processed yet."""

        path = self.path(kind)
        if not path.exists():
            return 0
        raw = path.read_text(encoding="utf-8").strip()
        if not raw:
            return 0
        try:
            value = int(raw)
        except ValueError as exc:
            raise ValueError(f"Invalid crawl state in {path}: {raw!r}") from exc
        if value < 0:
            raise ValueError(f"Invalid crawl state in {path}: {raw!r}")
        return value

    def persist(self, kind: MeetingKind, value: int) -> None:
        path = self.path(kind)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"{value}\n", encoding="utf-8")
        LOGGER.debug("Stored crawl boundary %s for %s", value, kind.value)

    @staticmethod
    def probe(last_known: int, exists: Probe, *, max_steps: Optional[int] = None) -> int:
        """Advance from ``last_known`` while ``exists`` reports the next number.

        ``max_steps`` bounds the number of probes of a single run.
        """

        current = last_known
        steps = 0
        while max_steps is None or steps < max_steps:
            candidate = current + 1
            if not exists(candidate):
                break
            current = candidate
            steps += 1
        if current != last_known:
            LOGGER.info("Discovered reports %s..%s", last_known + 1, current)
        return current

    def advance(self, kind: MeetingKind, exists: Probe, *, max_steps: Optional[int] = None) -> int:
        """Read, probe and persist in one step; returns the new boundary."""

        boundary = self.probe(self.read(kind), exists, max_steps=max_steps)
        self.persist(kind, boundary)
        return boundary


__all__ = ["CrawlBoundary", "Probe", "STATE_FILES"]
