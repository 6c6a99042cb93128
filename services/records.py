"""ProposalRecord model and normalization from decoded frontmatter."""

import re
from dataclasses import dataclass
from datetime import date, datetime

from services.schema import CURRENT, SchemaRevision

_FILENAME_NUMBER = "oep-(\\d+)"

_LEGACY_DEFAULTS = {
    "author": "Unknown",
    "status": "Draft",
    "type": "Technical",
}


@dataclass(frozen=True)
class ProposalRecord:
    identifier: str
    number: int
    title: str | None
    authorship: str | None
    status: str | None
    type: str | None
    created: date | None
    body: str
    labels: tuple[str, ...] = ()
    discussion: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.identifier,
            "oep": self.number,
            "title": self.title,
            "authors": self.authorship,
            "status": self.status,
            "type": self.type,
            "created": self.created.isoformat() if self.created else None,
            "labels": list(self.labels),
            "discussion": self.discussion,
            "body": self.body,
        }


def format_identifier(number: int) -> str:
    """oep-0007 style identifier for a numeric id."""
    return f"oep-{number:04d}"


def resolve_number(mapping: dict, filename: str, revision: SchemaRevision = CURRENT) -> int:
    """Numeric id from the `oep` field, then the filename, else 0."""
    explicit = _scalar(mapping.get("oep"))
    if explicit:
        match = re.match(r"\s*(\d+)", explicit)
        if match:
            return int(match.group(1))

    flags = re.IGNORECASE if revision.filename_ignorecase else 0
    match = re.search(_FILENAME_NUMBER, filename or "", flags)
    return int(match.group(1)) if match else 0


def parse_created(value) -> date | None:
    """Parse an ISO date (or the date part of an ISO timestamp)."""
    value = _scalar(value)
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def _scalar(value) -> str | None:
    """Collapse a decoded value to a non-empty string or None."""
    if isinstance(value, list):
        value = ", ".join(v for v in value if v)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def normalize_record(
    mapping: dict, body: str, filename: str, revision: SchemaRevision = CURRENT
) -> ProposalRecord:
    """Build a candidate record. Strict revisions leave missing fields as None."""
    number = resolve_number(mapping, filename, revision)
    title = _scalar(mapping.get("title"))
    authorship = _scalar(mapping.get("authors")) or _scalar(mapping.get("author"))
    status = _scalar(mapping.get("status"))
    kind = _scalar(mapping.get("type"))
    created = parse_created(mapping.get("created"))

    if not revision.strict:
        title = title or f"OEP-{number}"
        authorship = authorship or _LEGACY_DEFAULTS["author"]
        status = status or _LEGACY_DEFAULTS["status"]
        kind = kind or _LEGACY_DEFAULTS["type"]
        if created is None and not _scalar(mapping.get("created")):
            created = datetime.now().date()

    labels: tuple[str, ...] = ()
    if "labels" in revision.optional_keys:
        raw_labels = mapping.get("labels") or []
        if isinstance(raw_labels, str):
            raw_labels = [raw_labels]
        labels = tuple(label for label in raw_labels if label)

    discussion = None
    if "discussion" in revision.optional_keys:
        discussion = _scalar(mapping.get("discussion"))

    return ProposalRecord(
        identifier=format_identifier(number),
        number=number,
        title=title,
        authorship=authorship,
        status=status,
        type=kind,
        created=created,
        body=body.strip(),
        labels=labels,
        discussion=discussion,
    )
