"""OEP source loader: enumerate documents from a backend and build the collection.

Backends are chosen once by the caller (see config.get_backend). Each document
goes parse → normalize → validate; per-document failures skip that document,
enumeration failures return a FallbackUsed result instead of raising.
"""

import base64
import binascii
import logging
import os
import re
from dataclasses import dataclass, field

from services.fixtures import fixture_documents
from services.frontmatter import parse_frontmatter
from services.github import RepositoryClient, RepositoryError
from services.records import ProposalRecord, normalize_record
from services.schema import CURRENT, SchemaRevision, accept_record

log = logging.getLogger(__name__)

OEP_FILENAME_PATTERN = r"^oep-\d+\.md$"


# ── Backends ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class LocalDirectory:
    path: str


@dataclass(frozen=True)
class RemoteRepository:
    owner: str
    repo: str
    token: str | None = field(default=None, repr=False)
    path: str = ""


@dataclass(frozen=True)
class Fixtures:
    """Canned documents only — offline development."""


# ── Results ──────────────────────────────────────────────────────────────────


@dataclass
class Loaded:
    records: list[ProposalRecord]
    fallback = False
    reason = None


@dataclass
class FallbackUsed:
    reason: str
    records: list[ProposalRecord] = field(default_factory=list)
    fallback = True


# ── Per-document pipeline ────────────────────────────────────────────────────


def process_document(
    text: str, filename: str, revision: SchemaRevision = CURRENT
) -> ProposalRecord | None:
    """Run one document through parse → normalize → validate. None means skipped."""
    parsed = parse_frontmatter(text, revision.list_keys)
    if parsed is None:
        log.debug("Skipping %s: no frontmatter block", filename)
        return None
    mapping, body = parsed
    record = normalize_record(mapping, body, filename, revision)
    return accept_record(record, revision, source=filename)


def is_oep_filename(name, revision: SchemaRevision = CURRENT) -> bool:
    """True for oep-<digits>.md, matched with the revision's filename case rule."""
    if not isinstance(name, str):
        return False
    flags = re.IGNORECASE if revision.filename_ignorecase else 0
    return re.match(OEP_FILENAME_PATTERN, name, flags) is not None


def _collect(documents, revision: SchemaRevision) -> list[ProposalRecord]:
    records = []
    seen: dict[str, str] = {}
    for filename, text in documents:
        record = process_document(text, filename, revision)
        if record is None:
            continue
        if record.identifier in seen:
            log.warning(
                "Skipping %s: duplicate identifier %s (already loaded from %s)",
                filename,
                record.identifier,
                seen[record.identifier],
            )
            continue
        seen[record.identifier] = filename
        records.append(record)
    return records


# ── Backends → records ───────────────────────────────────────────────────────


def load_fixtures(revision: SchemaRevision = CURRENT) -> list[ProposalRecord]:
    """Build records from the canned fixture documents."""
    return _collect(fixture_documents(revision), revision)


def _read_directory(path: str, names: list[str], revision: SchemaRevision):
    """Yield (filename, text) for each readable OEP file; unreadable files are skipped."""
    for name in names:
        fpath = os.path.join(path, name)
        if not is_oep_filename(name, revision) or not os.path.isfile(fpath):
            continue
        try:
            with open(fpath, encoding="utf-8") as f:
                yield name, f.read()
        except (OSError, UnicodeDecodeError) as e:
            log.warning("Skipping %s: %s", name, e)


def load_directory(path: str, revision: SchemaRevision = CURRENT):
    """Load every oep-<n>.md file in a local directory."""
    try:
        names = sorted(os.listdir(path))
    except OSError as e:
        log.error("Cannot list OEP directory %s: %s", path, e)
        return FallbackUsed(reason=f"Cannot list {path}: {e}")

    records = _collect(_read_directory(path, names, revision), revision)
    log.info("Loaded %d OEPs from %s", len(records), path)
    return Loaded(records)


def _decode_content(entry: dict) -> str:
    encoding = entry.get("encoding", "base64")
    if encoding != "base64":
        raise ValueError(f"Unsupported content encoding: {encoding!r}")
    return base64.b64decode(entry.get("content") or "").decode("utf-8")


def _fallback(reason: str, revision: SchemaRevision) -> FallbackUsed:
    log.error("OEP repository unavailable (%s), using fixture data", reason)
    return FallbackUsed(reason=reason, records=load_fixtures(revision))


def load_repository(
    backend: RemoteRepository,
    revision: SchemaRevision = CURRENT,
    client: RepositoryClient | None = None,
):
    """Load OEPs from a remote repository, falling back to fixtures on any failure."""
    client = client or RepositoryClient(backend.owner, backend.repo, token=backend.token)
    log.info("Fetching OEPs from %s/%s", backend.owner, backend.repo)

    try:
        contents = client.list_contents(backend.path)
        if not isinstance(contents, list):
            return _fallback("repository path is not a directory", revision)

        files = [
            entry
            for entry in contents
            if isinstance(entry, dict)
            and entry.get("type") == "file"
            and is_oep_filename(entry.get("name"), revision)
        ]
        if not files:
            return _fallback("no OEP files found", revision)

        documents = []
        for entry in files:
            data = client.get_content(entry.get("path") or entry["name"])
            documents.append((entry["name"], _decode_content(data)))
    except (RepositoryError, ValueError, binascii.Error, KeyError, AttributeError, TypeError) as e:
        return _fallback(str(e) or type(e).__name__, revision)

    records = _collect(documents, revision)
    if not records:
        return _fallback("no valid OEPs parsed", revision)

    log.info("Loaded %d OEPs from %s/%s", len(records), backend.owner, backend.repo)
    return Loaded(records)


def load_proposals(backend, revision: SchemaRevision = CURRENT, client=None):
    """Load the OEP collection from a backend. Never raises for backend failures."""
    if isinstance(backend, LocalDirectory):
        return load_directory(backend.path, revision)
    if isinstance(backend, RemoteRepository):
        return load_repository(backend, revision, client=client)
    if isinstance(backend, Fixtures):
        log.info("Using fixture OEPs")
        return Loaded(load_fixtures(revision))
    msg = f"Unknown OEP backend: {backend!r}"
    raise TypeError(msg)


def get_collection(backend=None, revision: SchemaRevision | None = None) -> list[ProposalRecord]:
    """The OEP collection for the rendering layer, resolved from config when omitted."""
    from config import get_backend, get_schema_revision

    backend = backend or get_backend()
    revision = revision or get_schema_revision()
    return load_proposals(backend, revision).records
