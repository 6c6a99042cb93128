"""OEP record schema revisions and validation."""

import logging
from dataclasses import dataclass, field
from datetime import date

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaRevision:
    """One self-consistent OEP schema. Enum sets are never mixed across revisions."""

    name: str
    statuses: frozenset[str]
    types: frozenset[str]
    strict: bool = True
    list_keys: frozenset[str] = field(default_factory=frozenset)
    optional_keys: frozenset[str] = field(default_factory=frozenset)
    filename_ignorecase: bool = True


LEGACY = SchemaRevision(
    name="legacy",
    statuses=frozenset({"Draft", "Review", "Accepted", "Withdrawn", "Living"}),
    types=frozenset({"Meta", "Technical", "Informational"}),
    strict=False,
    filename_ignorecase=False,
)

CURRENT = SchemaRevision(
    name="current",
    statuses=frozenset({"ideation", "discussion", "accepted", "living", "abandoned"}),
    types=frozenset({"meta", "technical", "informational"}),
    strict=True,
    list_keys=frozenset({"labels"}),
    optional_keys=frozenset({"labels", "discussion"}),
)

REVISIONS = {rev.name: rev for rev in (LEGACY, CURRENT)}

RECORD_SCHEMA = {
    "title":      {"type": str,   "required": True},
    "type":       {"type": str,   "required": True},
    "status":     {"type": str,   "required": True},
    "authorship": {"type": str,   "required": True},
    "created":    {"type": date,  "required": True},
    "body":       {"type": str,   "required": False},
    "labels":     {"type": tuple, "required": False},
    "discussion": {"type": str,   "required": False},
}


def validate_record(record, revision: SchemaRevision = CURRENT) -> list[str]:
    """Return list of validation errors. Empty list means valid."""
    errors = []

    missing = [
        name
        for name, spec in RECORD_SCHEMA.items()
        if spec["required"] and getattr(record, name, None) is None
    ]
    if missing:
        errors.append(f"Missing required fields: {', '.join(missing)}")

    for name, spec in RECORD_SCHEMA.items():
        value = getattr(record, name, None)
        if value is not None and not isinstance(value, spec["type"]):
            expected = spec["type"].__name__
            got = type(value).__name__
            errors.append(f"Field {name!r} must be {expected}, got {got}")

    kind = getattr(record, "type", None)
    if isinstance(kind, str) and kind not in revision.types:
        errors.append(f"Field 'type' must be one of {sorted(revision.types)}, got {kind!r}")

    status = getattr(record, "status", None)
    if isinstance(status, str) and status not in revision.statuses:
        errors.append(
            f"Field 'status' must be one of {sorted(revision.statuses)}, got {status!r}"
        )

    return errors


def accept_record(record, revision: SchemaRevision = CURRENT, source: str = ""):
    """Return the record unchanged if valid, else log the reasons and return None."""
    errors = validate_record(record, revision)
    if errors:
        log.warning(
            "Rejected OEP %s (%s schema): %s",
            source or getattr(record, "identifier", "?"),
            revision.name,
            "; ".join(errors),
        )
        return None
    return record
