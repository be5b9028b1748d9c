"""Ordered extraction rules turning item text into structured fields.

Each entity kind owns a chain of :class:`ExtractionRule` objects, most specific
first. The first rule that matches wins; the last rules of a chain are
deliberately permissive so that an item with an unexpected layout still yields
its topic instead of disappearing.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Pattern, Sequence, Tuple
import logging
import re

from .accumulator import CONTINUATION_PREFIX

LOGGER = logging.getLogger(__name__)


class ExtractionError(ValueError):
    """Raised when no rule of a chain matches an item."""


@dataclass(frozen=True, slots=True)
class ExtractionRule:
    """A pattern plus the mapping from output fields to its named groups.

    A field maps to several groups when the pattern has alternative branches
    (for instance one per quotation mark style); the first group that took
    part in the match provides the value.
    """

    name: str
    pattern: Pattern[str]
    fields: Mapping[str, Tuple[str, ...]]
    repeat: bool = False

    def _fields_of(self, match: re.Match[str]) -> Dict[str, Optional[str]]:
        values: Dict[str, Optional[str]] = {}
        for field_name, groups in self.fields.items():
            value = next((match.group(group) for group in groups if match.group(group) is not None), None)
            values[field_name] = value.strip() if value is not None else None
        return values

    def apply(self, text: str) -> List[Dict[str, Optional[str]]]:
        """Return one field mapping per match (at most one unless ``repeat``)."""

        if self.repeat:
            return [self._fields_of(match) for match in self.pattern.finditer(text)]
        match = self.pattern.search(text)
        return [self._fields_of(match)] if match else []


@dataclass(frozen=True, slots=True)
class RuleMatch:
    rule: str
    fields: Dict[str, Optional[str]] = field(default_factory=dict)

    def get(self, name: str) -> Optional[str]:
        return self.fields.get(name)


def apply_chain(rules: Sequence[ExtractionRule], text: str) -> List[RuleMatch]:
    """Apply the first matching rule of ``rules`` to ``text``."""

    for rule in rules:
        results = rule.apply(text)
        if results:
            LOGGER.debug("Rule %s matched %r", rule.name, text)
            return [RuleMatch(rule=rule.name, fields=values) for values in results]
    return []


# --- name corrections -------------------------------------------------------

# Misspellings of member names found in published reports.
NAME_CORRECTIONS: Dict[str, str] = {
    "Steven Coengrachts": "Steven Coenegrachts",
    "Ridouhane Chahid": "Ridouane Chahid",
}


def correct_name(name: str, corrections: Mapping[str, str] = NAME_CORRECTIONS) -> str:
    corrected = corrections.get(name)
    if corrected is None:
        return name
    LOGGER.debug("Corrected member name %r to %r", name, corrected)
    return corrected


TITLE_PREFIX = re.compile(
    r"^(?:Minister|De heer|de heer|Mevrouw|mevrouw|Le ministre|La ministre|Monsieur|Madame|M\.|Mme|"
    r"Eerste minister|Premier ministre|Staatssecretaris|Secrétaire d'État)\s+"
)
_NAME_SEPARATOR = re.compile(r"\s+(?:en|et)\s+")


def strip_title(name: str) -> str:
    return TITLE_PREFIX.sub("", name.strip()).strip()


def split_person_list(raw: Optional[str]) -> List[str]:
    """Split ``"A en B"`` style name lists, dropping titles and fixing typos."""

    if not raw:
        return []
    names = (strip_title(part) for part in _NAME_SEPARATOR.split(raw.strip()))
    return [correct_name(name) for name in names if name]


# --- questions --------------------------------------------------------------

_QUESTION_HEAD = r"(?:(?:Vraag van|Question de)\s+)?(?P<questioner>[^\n]+?)\s+(?:aan|à|aux|au)\s+"
_QUESTION_CODE = r"(?:\s*\(?(?:nr\.?\s*)?(?P<code>\d{6,8}[A-Za-z])\)?)?"

QUESTION_RULES: Tuple[ExtractionRule, ...] = (
    ExtractionRule(
        name="question_quoted_topic",
        pattern=re.compile(
            _QUESTION_HEAD
            + r"(?P<respondent>[^\n]+?)(?:\s*\([^\n]*?\))?\s*(?:over|sur)\s*"
            + r"(?:\"(?P<topic_dq>[^\"\n]+?)\"|“(?P<topic_cq>[^”\n]+?)”|'(?P<topic_sq>[^\n]+)'(?=\s*(?:\(|$)))"
            + _QUESTION_CODE
        ),
        fields={
            "questioner": ("questioner",),
            "respondent": ("respondent",),
            "topic": ("topic_dq", "topic_cq", "topic_sq"),
            "code": ("code",),
        },
        repeat=True,
    ),
    ExtractionRule(
        name="question_unquoted_topic",
        pattern=re.compile(
            r"^" + _QUESTION_HEAD
            + r"(?P<respondent>[^\n(]+?)\s*(?:\([^\n]*?\))?\s*(?:over|sur)\s+(?P<topic>[^\n]+?)"
            + r"(?:\s*\((?:nr\.?\s*)?(?P<code>\d{6,8}[A-Za-z])\))?\s*$"
        ),
        fields={
            "questioner": ("questioner",),
            "respondent": ("respondent",),
            "topic": ("topic",),
            "code": ("code",),
        },
    ),
    ExtractionRule(
        name="question_topic_only",
        pattern=re.compile(r"^(?P<topic>[^(\n]*[^\s(\n])"),
        fields={"topic": ("topic",)},
    ),
)

_GROUP_LABEL = re.compile(
    r"^(?:(?:samengevoegde|toegevoegde)\s+vragen(?:\s+van)?|questions\s+jointes(?:\s+de)?)\s*$",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class QuestionFields:
    """Fields of one sub-question in one language."""

    topic: str
    questioners: Tuple[str, ...] = ()
    respondents: Tuple[str, ...] = ()
    dossier_id: str = ""
    rule: str = ""


def _strip_continuation(line: str) -> str:
    line = line.strip()
    if line.startswith(CONTINUATION_PREFIX):
        line = line[len(CONTINUATION_PREFIX):]
    return line.strip()


def _respondent(raw: Optional[str]) -> Tuple[str, ...]:
    # Respondents are named by office ("de minister van Werk, Economie en
    # Landbouw"), so the text is kept whole.
    name = strip_title(raw or "")
    return (correct_name(name),) if name else ()


def extract_questions(text: str) -> List[QuestionFields]:
    """Extract every sub-question contained in an accumulated heading block."""

    questions: List[QuestionFields] = []
    for raw_line in text.split("\n"):
        line = _strip_continuation(raw_line)
        if not line or _GROUP_LABEL.match(line):
            continue
        for match in apply_chain(QUESTION_RULES, line):
            topic = match.get("topic") or ""
            if not topic:
                continue
            code = match.get("code")
            questions.append(
                QuestionFields(
                    topic=topic,
                    questioners=tuple(split_person_list(_strip_continuation(match.get("questioner") or ""))),
                    respondents=_respondent(match.get("respondent")),
                    dossier_id=f"Q{code}" if code else "",
                    rule=match.rule,
                )
            )
    return questions


# --- propositions -----------------------------------------------------------

PROPOSITION_RULES: Tuple[ExtractionRule, ...] = (
    ExtractionRule(
        name="proposition_with_document",
        pattern=re.compile(r"^(?P<topic>.*?)\s*\((?P<dossier_id>\d+)/(?P<document_id>\d+(?:-\d+)?)\)\s*$", re.DOTALL),
        fields={"topic": ("topic",), "dossier_id": ("dossier_id",), "document_id": ("document_id",)},
    ),
    ExtractionRule(
        name="proposition_whole_text",
        pattern=re.compile(r"^(?P<topic>.*)$", re.DOTALL),
        fields={"topic": ("topic",)},
    ),
)


@dataclass(frozen=True, slots=True)
class PropositionFields:
    topic: str
    dossier_id: Optional[str] = None
    document_id: Optional[str] = None
    rule: str = ""


def extract_proposition(text: str) -> PropositionFields:
    matches = apply_chain(PROPOSITION_RULES, _strip_continuation(text))
    if not matches:
        raise ExtractionError(f"No rule matched proposition text {text!r}")
    match = matches[0]
    return PropositionFields(
        topic=match.get("topic") or "",
        dossier_id=match.get("dossier_id"),
        document_id=match.get("document_id"),
        rule=match.rule,
    )


# --- votes ------------------------------------------------------------------

VOTE_RULES: Tuple[ExtractionRule, ...] = (
    ExtractionRule(
        name="vote_with_document",
        pattern=re.compile(r"^(?P<topic>.*)\((?P<dossier_id>\d+)/(?P<document_id>\d+(?:-\d+)?)\)\s*$", re.DOTALL),
        fields={"topic": ("topic",), "dossier_id": ("dossier_id",), "document_id": ("document_id",)},
    ),
    ExtractionRule(
        name="vote_with_motion",
        pattern=re.compile(r"^(?P<topic>.*)\s+\((?:nr\.|n°)\s*(?P<motion_id>\d+)\)\s*$", re.DOTALL),
        fields={"topic": ("topic",), "motion_id": ("motion_id",)},
    ),
    ExtractionRule(
        name="vote_title_only",
        pattern=re.compile(r"^(?P<topic>[^(]*)"),
        fields={"topic": ("topic",)},
    ),
)


@dataclass(frozen=True, slots=True)
class VoteFields:
    topic: str
    dossier_id: Optional[str] = None
    document_id: Optional[str] = None
    motion_id: Optional[str] = None
    rule: str = ""


def extract_vote(text: str) -> VoteFields:
    matches = apply_chain(VOTE_RULES, text.strip())
    if not matches:
        raise ExtractionError(f"No rule matched vote text {text!r}")
    match = matches[0]
    return VoteFields(
        topic=match.get("topic") or "",
        dossier_id=match.get("dossier_id"),
        document_id=match.get("document_id"),
        motion_id=match.get("motion_id"),
        rule=match.rule,
    )


__all__ = [
    "ExtractionError",
    "ExtractionRule",
    "NAME_CORRECTIONS",
    "PROPOSITION_RULES",
    "PropositionFields",
    "QUESTION_RULES",
    "QuestionFields",
    "RuleMatch",
    "TITLE_PREFIX",
    "VOTE_RULES",
    "VoteFields",
    "apply_chain",
    "correct_name",
    "extract_proposition",
    "extract_questions",
    "extract_vote",
    "split_person_list",
    "strip_title",
]
