"""HTTP client for the report archive of the Belgian Chamber of Representatives."""

from __future__ import annotations

from typing import Dict, Optional
import logging

import httpx

from ..core.types import MeetingKind

LOGGER = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.dekamer.be"
DEFAULT_ENCODING = "windows-1252"

REPORT_PATHS: Dict[MeetingKind, str] = {
    MeetingKind.PLENARY: "/doc/PCRI/html/{session}/ip{meeting:03d}x.html",
    MeetingKind.COMMISSION: "/doc/CCRI/html/{session}/ic{meeting:03d}x.html",
}
DOSSIER_PATH = (
    "/kvvcr/showpage.cfm?section=/flwb&language=nl&cfm=/site/wwwcfm/flwb/flwbn.cfm"
    "?lang=N&legislat={session}&dossierID={dossier}"
)

# The archive rejects requests without a browser-like user agent.
BROWSER_HEADERS: Dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "nl-BE,nl;q=0.9,fr;q=0.8,en;q=0.7",
}


class KamerClientError(RuntimeError):
    """Raised when the chamber website responds with an error."""


class DocumentNotFoundError(KamerClientError):
    """Raised when a report or dossier page does not exist (HTTP 404)."""


class KamerClient:
    """Minimal client downloading reports and dossier pages."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 30.0,
        max_retries: int = 3,
        encoding: str = DEFAULT_ENCODING,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._max_retries = max(1, max_retries)
        self._encoding = encoding
        self._client = httpx.Client(timeout=timeout, headers=BROWSER_HEADERS, transport=transport)
        self.request_count = 0

    # --- public API -----------------------------------------------------
    def report_url(self, kind: MeetingKind, session_id: int, meeting_id: int) -> str:
        return self._base_url + REPORT_PATHS[kind].format(session=session_id, meeting=meeting_id)

    def dossier_url(self, session_id: int, dossier_id: str) -> str:
        return self._base_url + DOSSIER_PATH.format(session=session_id, dossier=dossier_id)

    def fetch_report(self, kind: MeetingKind, session_id: int, meeting_id: int) -> str:
        """Download the decoded HTML of a plenary or committee report."""

        return self._get(self.report_url(kind, session_id, meeting_id))

    def fetch_dossier(self, session_id: int, dossier_id: str) -> str:
        return self._get(self.dossier_url(session_id, dossier_id))

    def close(self) -> None:
        """Close the underlying HTTP client."""

        self._client.close()

    def __enter__(self) -> "KamerClient":  # pragma: no cover - trivial
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - trivial
        self.close()

    # --- helpers --------------------------------------------------------
    def _decode(self, response: httpx.Response) -> str:
        # The archive declares windows-1252 in a meta tag only, so the HTTP
        # charset cannot be relied upon.
        return response.content.decode(self._encoding, errors="replace")

    def _get(self, url: str) -> str:
        last_exc: Optional[Exception] = None
        error_message: Optional[str] = None
        for attempt in range(1, self._max_retries + 1):
            try:
                self.request_count += 1
                response = self._client.get(url)
                if response.status_code == 404:
                    raise DocumentNotFoundError(f"Document not found: {url}")
                response.raise_for_status()
                return self._decode(response)
            except httpx.HTTPStatusError as exc:
                last_exc = exc
                status = exc.response.status_code
                LOGGER.warning("Chamber website returned status %s for %s (attempt %d)", status, url, attempt)
                error_message = f"The chamber website rejected the request with status {status}."
                if 400 <= status < 500 and status != 429:
                    break
            except httpx.HTTPError as exc:
                last_exc = exc
                LOGGER.warning("HTTP error while requesting %s: %s", url, exc)
        if error_message:
            raise KamerClientError(error_message) from last_exc
        raise KamerClientError(f"Failed to request {url}") from last_exc


__all__ = [
    "BROWSER_HEADERS",
    "DEFAULT_BASE_URL",
    "DEFAULT_ENCODING",
    "DocumentNotFoundError",
    "KamerClient",
    "KamerClientError",
]
