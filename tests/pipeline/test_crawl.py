from __future__ import annotations

import pytest

from kamerwatch.core.types import MeetingKind
from kamerwatch.pipeline import CrawlBoundary


def test_missing_state_starts_at_zero(tmp_path):
    boundary = CrawlBoundary(tmp_path / "state")

    assert boundary.read(MeetingKind.PLENARY) == 0
    assert boundary.read(MeetingKind.COMMISSION) == 0


def test_invalid_state_is_reported(tmp_path):
    boundary = CrawlBoundary(tmp_path)
    boundary.path(MeetingKind.PLENARY).write_text("abc", encoding="utf-8")

    with pytest.raises(ValueError):
        boundary.read(MeetingKind.PLENARY)

    boundary.path(MeetingKind.PLENARY).write_text("-4", encoding="utf-8")
    with pytest.raises(ValueError):
        boundary.read(MeetingKind.PLENARY)


def test_probe_stops_at_first_missing_number():
    published = {1, 2, 3, 5}
    probed = []

    def exists(meeting_id: int) -> bool:
        probed.append(meeting_id)
        return meeting_id in published

    assert CrawlBoundary.probe(0, exists) == 3
    assert probed == [1, 2, 3, 4]


def test_probe_respects_max_steps():
    assert CrawlBoundary.probe(10, lambda meeting_id: True, max_steps=5) == 15
    assert CrawlBoundary.probe(10, lambda meeting_id: False) == 10


def test_advance_persists_per_kind(tmp_path):
    boundary = CrawlBoundary(tmp_path / "state")
    boundary.persist(MeetingKind.COMMISSION, 1080)

    assert boundary.advance(MeetingKind.COMMISSION, lambda meeting_id: meeting_id <= 1082) == 1082
    assert boundary.advance(MeetingKind.PLENARY, lambda meeting_id: meeting_id <= 2) == 2

    assert boundary.read(MeetingKind.COMMISSION) == 1082
    assert (tmp_path / "state" / "current_plenary_id.txt").read_text(encoding="utf-8") == "2\n"
