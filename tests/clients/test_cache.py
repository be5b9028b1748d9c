from __future__ import annotations

from datetime import date
from typing import List

import pytest

from kamerwatch.clients import DocumentNotFoundError, SourceCache
from kamerwatch.core.types import MeetingKind


class DummyClient:
    def __init__(self):
        self.calls: List[tuple] = []

    def fetch_report(self, kind, session_id, meeting_id):
        self.calls.append(("report", kind, session_id, meeting_id))
        if meeting_id > 10:
            raise DocumentNotFoundError(f"{meeting_id} not found")
        return f"<html>{kind.value} {meeting_id}</html>"

    def fetch_dossier(self, session_id, dossier_id):
        self.calls.append(("dossier", session_id, dossier_id))
        return f"<html>dossier {dossier_id} v{len(self.calls)}</html>"


def test_reports_are_downloaded_once(tmp_path):
    client = DummyClient()
    cache = SourceCache(tmp_path, client)

    first = cache.get_report(MeetingKind.COMMISSION, 55, 3)
    second = cache.get_report(MeetingKind.COMMISSION, 55, 3)

    assert first == second == "<html>commission 3</html>"
    assert len(client.calls) == 1
    assert cache.report_path(MeetingKind.COMMISSION, 55, 3) == (
        tmp_path / "sessions" / "55" / "meetings" / "commission" / "55-3.html"
    )


def test_missing_report_is_not_cached(tmp_path):
    cache = SourceCache(tmp_path, DummyClient())

    with pytest.raises(DocumentNotFoundError):
        cache.get_report(MeetingKind.PLENARY, 55, 11)
    assert not cache.report_path(MeetingKind.PLENARY, 55, 11).exists()


def test_stale_dossier_is_refreshed(tmp_path):
    client = DummyClient()
    today = date(2024, 1, 10)
    cache = SourceCache(tmp_path, client, today=lambda: today)

    first = cache.ensure_dossier(55, "3456", date(2024, 1, 5))
    assert first.name == "55_3456_2024-01-10.html"

    # A meeting on the download day itself does not trigger a refresh.
    assert cache.ensure_dossier(55, "3456", date(2024, 1, 10)) == first
    assert len(client.calls) == 1

    today = date(2024, 2, 1)
    refreshed = cache.ensure_dossier(55, "3456", date(2024, 1, 31))

    assert refreshed.name == "55_3456_2024-02-01.html"
    assert not first.exists()
    assert SourceCache.read(refreshed) == "<html>dossier 3456 v2</html>"
    assert cache.find_dossier(55, "3456") == (refreshed, date(2024, 2, 1))


def test_iter_dossiers_lists_cached_pages(tmp_path):
    cache = SourceCache(tmp_path, DummyClient(), today=lambda: date(2024, 1, 10))
    cache.ensure_dossier(55, "3456", date(2024, 1, 1))
    cache.ensure_dossier(55, "3457", date(2024, 1, 1))
    (cache.dossier_directory(55) / "notes.txt").write_text("x", encoding="utf-8")

    assert [dossier_id for dossier_id, _ in cache.iter_dossiers(55)] == ["3456", "3457"]
    assert list(cache.iter_dossiers(54)) == []
