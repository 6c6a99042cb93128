"""Unit tests for record normalization and schema validation."""

import logging
from datetime import date, datetime

import pytest

from services.frontmatter import parse_frontmatter
from services.records import (
    ProposalRecord,
    format_identifier,
    normalize_record,
    parse_created,
    resolve_number,
)
from services.schema import CURRENT, LEGACY, accept_record, validate_record

VALID_FM = {
    "title": "Archive Manifest Specification",
    "authors": "Alice Chen <alice@example.org>",
    "status": "accepted",
    "type": "technical",
    "created": "2024-02-20",
}


def _record(**overrides) -> ProposalRecord:
    fields = {
        "identifier": "oep-0002",
        "number": 2,
        "title": "Archive Manifest Specification",
        "authorship": "Alice Chen <alice@example.org>",
        "status": "accepted",
        "type": "technical",
        "created": date(2024, 2, 20),
        "body": "Body.",
    }
    fields.update(overrides)
    return ProposalRecord(**fields)


# ---------------------------------------------------------------------------
# Identifier + number resolution
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("number", "expected"),
    [(0, "oep-0000"), (1, "oep-0001"), (42, "oep-0042"), (12345, "oep-12345")],
)
def test_format_identifier(number, expected):
    assert format_identifier(number) == expected


def test_resolve_number_prefers_frontmatter():
    assert resolve_number({"oep": "12"}, "oep-3.md") == 12


def test_resolve_number_from_filename():
    assert resolve_number({}, "oep-0031.md") == 31


def test_resolve_number_filename_case_current():
    assert resolve_number({}, "OEP-9.md", CURRENT) == 9


def test_resolve_number_filename_case_legacy():
    assert resolve_number({}, "OEP-9.md", LEGACY) == 0


def test_resolve_number_non_numeric_field_falls_back_to_filename():
    assert resolve_number({"oep": "abc"}, "oep-5.md") == 5


def test_resolve_number_signed_field_falls_back_to_filename():
    assert resolve_number({"oep": "-3"}, "oep-5.md") == 5
    assert resolve_number({"oep": "+3"}, "draft.md") == 0


def test_resolve_number_default_zero():
    assert resolve_number({}, "proposal.md") == 0


# ---------------------------------------------------------------------------
# parse_created
# ---------------------------------------------------------------------------


def test_parse_created_iso_date():
    assert parse_created("2024-01-15") == date(2024, 1, 15)


def test_parse_created_timestamp():
    assert parse_created("2024-01-15T10:30:00Z") == date(2024, 1, 15)


def test_parse_created_invalid():
    assert parse_created("January 15th") is None
    assert parse_created("") is None
    assert parse_created(None) is None


# ---------------------------------------------------------------------------
# normalize_record
# ---------------------------------------------------------------------------


def test_normalize_current_full():
    fm = dict(VALID_FM, labels=["manifest"], discussion="https://example.org/d/2")
    record = normalize_record(fm, "\n\n  Body text.  \n", "oep-2.md", CURRENT)
    assert record.identifier == "oep-0002"
    assert record.number == 2
    assert record.title == "Archive Manifest Specification"
    assert record.authorship == "Alice Chen <alice@example.org>"
    assert record.created == date(2024, 2, 20)
    assert record.labels == ("manifest",)
    assert record.discussion == "https://example.org/d/2"
    assert record.body == "Body text."


def test_normalize_current_leaves_missing_fields_empty():
    record = normalize_record({"oep": "4"}, "", "oep-4.md", CURRENT)
    assert record.title is None
    assert record.authorship is None
    assert record.status is None
    assert record.created is None


def test_normalize_author_fallback_key():
    fm = dict(VALID_FM)
    del fm["authors"]
    fm["author"] = "Bob Smith <bob@example.org>"
    record = normalize_record(fm, "", "oep-2.md", CURRENT)
    assert record.authorship == "Bob Smith <bob@example.org>"


def test_normalize_list_author_joined():
    fm = dict(VALID_FM, authors=["Alice <a@x.org>", "Bob <b@x.org>"])
    record = normalize_record(fm, "", "oep-2.md", CURRENT)
    assert record.authorship == "Alice <a@x.org>, Bob <b@x.org>"


def test_normalize_legacy_defaults():
    record = normalize_record({}, "Body", "oep-8.md", LEGACY)
    assert record.title == "OEP-8"
    assert record.authorship == "Unknown"
    assert record.status == "Draft"
    assert record.type == "Technical"
    assert record.created == datetime.now().date()
    assert record.labels == ()


def test_normalize_legacy_ignores_labels_and_discussion():
    fm = {"labels": ["a"], "discussion": "https://example.org"}
    record = normalize_record(fm, "", "oep-1.md", LEGACY)
    assert record.labels == ()
    assert record.discussion is None


def test_parse_then_normalize_identifier():
    text = "---\noep: 17\ntitle: T\n---\nBody\n"
    fm, body = parse_frontmatter(text)
    record = normalize_record(fm, body, "oep-17.md")
    assert record.identifier == "oep-0017"


def test_to_dict():
    data = _record(labels=("a", "b")).to_dict()
    assert data["id"] == "oep-0002"
    assert data["oep"] == 2
    assert data["created"] == "2024-02-20"
    assert data["labels"] == ["a", "b"]
    assert data["discussion"] is None


# ---------------------------------------------------------------------------
# validate_record / accept_record
# ---------------------------------------------------------------------------


def test_validate_ok():
    assert validate_record(_record(), CURRENT) == []


def test_validate_missing_fields_named():
    errors = validate_record(_record(authorship=None, created=None), CURRENT)
    assert len(errors) == 1
    assert "authorship" in errors[0]
    assert "created" in errors[0]


def test_validate_bad_status():
    errors = validate_record(_record(status="bogus"), CURRENT)
    assert any("status" in e and "'bogus'" in e for e in errors)


def test_validate_bad_type():
    errors = validate_record(_record(type="Technical"), CURRENT)
    assert any("type" in e and "'Technical'" in e for e in errors)


def test_validate_revisions_not_merged():
    assert validate_record(_record(status="Accepted", type="Technical"), LEGACY) == []
    assert validate_record(_record(status="Accepted", type="Technical"), CURRENT) != []


def test_validate_wrong_type():
    errors = validate_record(_record(created="2024-02-20"), CURRENT)
    assert any("created" in e for e in errors)


def test_accept_record_returns_record_unchanged():
    record = _record()
    assert accept_record(record, CURRENT) is record


def test_accept_record_logs_invalid_status(caplog):
    caplog.set_level(logging.WARNING, logger="services.schema")
    assert accept_record(_record(status="bogus"), CURRENT, source="oep-2.md") is None
    assert "oep-2.md" in caplog.text
    assert "bogus" in caplog.text


def test_accept_record_logs_missing_fields(caplog):
    caplog.set_level(logging.WARNING, logger="services.schema")
    assert accept_record(_record(authorship=None), CURRENT) is None
    assert "authorship" in caplog.text
