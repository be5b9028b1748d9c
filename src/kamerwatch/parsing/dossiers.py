"""Parser for the dossier detail pages of the legislative database.

A dossier page holds a two column label/value table. The ``Subdocumenten`` row
nests another table whose rows form repeating groups, one per subdocument,
separated by rows without a second cell.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple
import logging

from bs4 import BeautifulSoup, NavigableString, Tag

from ..core.types import DocumentStatus, DocumentType, Dossier, Subdocument

LOGGER = logging.getLogger(__name__)

TITLE_SELECTOR = "#story h4 center"

# Checked in order; the first keyword found in the lowercased text wins, so
# the longer phrases come before the keywords they contain.
DOCUMENT_TYPE_KEYWORDS: Tuple[Tuple[str, DocumentType], ...] = (
    ("voorstel van resolutie", DocumentType.RESOLUTION_PROPOSAL),
    ("amendement", DocumentType.AMENDMENT),
    ("voorstel tot herziening", DocumentType.REVISION_PROPOSAL),
    ("wetsvoorstel", DocumentType.LAW_PROPOSAL),
    ("wetsontwerp", DocumentType.BILL_DRAFT),
    ("overgezonden ontwerp", DocumentType.TRANSMITTED_DRAFT),
    ("verslag", DocumentType.REPORT),
    ("advies van de raad van state", DocumentType.COUNCIL_OF_STATE_OPINION),
    ("advies", DocumentType.OPINION),
    ("voorstel onderzoekscommissie", DocumentType.INQUIRY_COMMITTEE_PROPOSAL),
    ("voorstel reglement", DocumentType.RULES_PROPOSAL),
    ("artikelen bij 1e stemming aangenomen", DocumentType.ARTICLES_ADOPTED_FIRST_VOTE),
    ("aangenomen tekst", DocumentType.ADOPTED_TEXT),
)

STATUS_KEYWORDS: Tuple[Tuple[str, DocumentStatus], ...] = (
    ("aangenomen", DocumentStatus.ADOPTED),
    ("verworpen", DocumentStatus.REJECTED),
    ("zonder voorwerp", DocumentStatus.MOOT),
)


def classify_document_type(raw: str) -> DocumentType:
    text = raw.strip().lower()
    for keyword, document_type in DOCUMENT_TYPE_KEYWORDS:
        if keyword in text:
            return document_type
    return DocumentType.UNKNOWN


def classify_status(raw: str) -> DocumentStatus:
    text = raw.strip().lower()
    for keyword, status in STATUS_KEYWORDS:
        if keyword in text:
            return status
    return DocumentStatus.UNKNOWN


def _cell_text(cell: Tag) -> str:
    return cell.get_text().strip().lower()


def _direct_rows(table: Tag) -> Iterator[Tag]:
    """Rows of ``table`` itself, with or without an explicit ``tbody``."""

    for child in table.children:
        if not isinstance(child, Tag):
            continue
        if child.name == "tr":
            yield child
        elif child.name in ("thead", "tbody", "tfoot"):
            yield from child.find_all("tr", recursive=False)


def _cells(row: Tag) -> List[Tag]:
    return row.find_all("td", recursive=False)


def _link_text(link: Tag) -> str:
    first = next((text for text in link.strings), "")
    return first.replace(",", "").strip()


def parse_authors(cell: Tag) -> List[str]:
    """Authors from the link texts of ``cell``, else from its bare text nodes."""

    authors = [name for name in (_link_text(link) for link in cell.find_all("a")) if name]
    if authors:
        return authors
    return [text.strip() for text in cell.find_all(string=True) if isinstance(text, NavigableString) and text.strip()]


@dataclass(slots=True)
class _SubdocumentBuilder:
    """Fields gathered for the subdocument group being read."""

    dossier_id: str
    id: str = ""
    document_type: DocumentType = DocumentType.UNKNOWN
    date: str = ""
    authors: List[str] = field(default_factory=list)
    in_authors: bool = False

    @property
    def complete(self) -> bool:
        return bool(self.id and self.date)

    def build(self) -> Subdocument:
        return Subdocument(
            dossier_id=self.dossier_id,
            id=self.id,
            document_type=self.document_type,
            date=self.date,
            authors=tuple(self.authors),
        )

    def feed(self, label_cell: Tag, value_cell: Tag) -> None:
        label = _cell_text(label_cell)
        links = label_cell.find_all("a")
        if links:
            text = _link_text(links[-1])
            if text:
                self.id = text
                font = value_cell.find("font")
                self.document_type = classify_document_type((font or value_cell).get_text())
        if "datum ronddeling" in label:
            self.date = _cell_text(value_cell)
        if "auteur(s)" in label:
            self.in_authors = True
        if self.in_authors:
            link = value_cell.find("a")
            if link is not None:
                name = _link_text(link)
                if name:
                    self.authors.append(name)


def parse_subdocuments(table: Tag, dossier_id: str) -> List[Subdocument]:
    """Read the repeating subdocument groups of the nested table."""

    subdocuments: List[Subdocument] = []
    builder = _SubdocumentBuilder(dossier_id=dossier_id)
    for row in table.find_all("tr"):
        cells = _cells(row)
        if len(cells) < 2 or not cells[1].get_text().strip() and not cells[1].find("a"):
            if builder.complete:
                subdocuments.append(builder.build())
                builder = _SubdocumentBuilder(dossier_id=dossier_id)
            continue
        builder.feed(cells[0], cells[1])
    if builder.complete:
        subdocuments.append(builder.build())
    return subdocuments


def _title(document: BeautifulSoup) -> str:
    node = document.select_one(TITLE_SELECTOR)
    if node is None:
        return ""
    first = next((text for text in node.strings if text.strip()), "")
    return first.strip()


def parse_dossier(document: BeautifulSoup, session_id: int, dossier_id: str) -> Dossier:
    """Parse a dossier page into a :class:`~kamerwatch.core.types.Dossier`."""

    submission_date = vote_date = end_date = ""
    authors: List[str] = []
    document_type = DocumentType.UNKNOWN
    status = DocumentStatus.UNKNOWN
    subdocuments: List[Subdocument] = []

    table: Optional[Tag] = document.find("table")
    if table is None:
        LOGGER.warning("Dossier %s of session %s has no detail table", dossier_id, session_id)
    else:
        for row in _direct_rows(table):
            cells = _cells(row)
            if len(cells) < 2:
                continue
            label_cell, value_cell = cells[0], cells[1]
            label = _cell_text(label_cell)
            value = _cell_text(value_cell)
            if "indieningsdatum" in label:
                submission_date = value
            elif "stemming kamer" in label:
                vote_date = value
            elif "einddatum" in label:
                end_date = value
            elif "auteur(s)" in label:
                authors = parse_authors(value_cell)
            elif "document type" in label:
                document_type = classify_document_type(value)
            elif "status" in label:
                status = classify_status(value)
            elif "subdocumenten" in label:
                nested = value_cell.find("table")
                if nested is not None:
                    subdocuments = parse_subdocuments(nested, dossier_id)

    LOGGER.debug("Dossier %s: %d subdocument(s)", dossier_id, len(subdocuments))
    return Dossier(
        session_id=session_id,
        id=dossier_id,
        title=_title(document),
        authors=tuple(authors),
        submission_date=submission_date,
        end_date=end_date,
        vote_date=vote_date,
        document_type=document_type,
        status=status,
        subdocuments=tuple(subdocuments),
    )


__all__ = [
    "DOCUMENT_TYPE_KEYWORDS",
    "STATUS_KEYWORDS",
    "classify_document_type",
    "classify_status",
    "parse_authors",
    "parse_dossier",
    "parse_subdocuments",
]
