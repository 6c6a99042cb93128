"""Canned OEP documents for offline development and remote fallback.

Stored as frontmatter fields + body and rendered to Markdown per schema
revision, so they go through the same parse/normalize/validate path as
real files.
"""

from services.schema import CURRENT, SchemaRevision

# current-revision status → legacy-revision status
_LEGACY_STATUS = {
    "ideation": "Draft",
    "discussion": "Review",
    "accepted": "Accepted",
    "living": "Living",
    "abandoned": "Withdrawn",
}

FIXTURES = [
    {
        "oep": 1,
        "title": "OEP Purpose and Guidelines",
        "authors": "OSA Core Team <core@opensciencearchive.org>",
        "status": "living",
        "type": "meta",
        "created": "2024-01-15",
        "labels": ["process", "governance"],
        "body": """\
## Abstract

This OEP describes what an OEP is, how proposals move through review, and how
they guide the development of the Open Science Archive protocol.

## Motivation

Protocol changes need a written, reviewable trail. OEPs record design decisions
and their rationale, let the community take part asynchronously, and keep
implementations coherent.

## Specification

Every OEP carries a preamble (number, title, authors, status, type, creation
date) followed by Abstract, Motivation, Specification and Rationale sections.
Technical OEPs also include Security Considerations and a reference
implementation.
""",
    },
    {
        "oep": 2,
        "title": "Archive Manifest Specification",
        "authors": "Alice Chen <alice@example.org>, Bob Smith <bob@example.org>",
        "status": "accepted",
        "type": "technical",
        "created": "2024-02-20",
        "labels": ["manifest", "metadata"],
        "body": """\
## Abstract

Defines the Archive Manifest: the machine-readable document at the root of
every archive that lists its contents, metadata and provenance.

## Specification

A manifest is a JSON document with `version`, `id`, `files` and `metadata`
fields. Each file entry carries a path, size and content hash.
""",
    },
    {
        "oep": 3,
        "title": "Content Addressing Scheme",
        "authors": "Carol Williams <carol@example.org>",
        "status": "accepted",
        "type": "technical",
        "created": "2024-03-10",
        "labels": ["storage"],
        "body": """\
## Abstract

Archive objects are identified by the multihash of their bytes, so any copy
can be verified without trusting the host that served it.
""",
    },
    {
        "oep": 4,
        "title": "Archive Versioning Protocol",
        "authors": "David Lee <david@example.org>",
        "status": "ideation",
        "type": "technical",
        "created": "2024-04-05",
        "labels": ["manifest", "versioning"],
        "body": """\
## Abstract

Proposes linking successive manifests through a `previous` field so an
archive's history forms a verifiable chain.
""",
    },
    {
        "oep": 5,
        "title": "Peer Review Integration",
        "authors": "Emma Wilson <emma@example.org>, Frank Garcia <frank@example.org>",
        "status": "discussion",
        "type": "technical",
        "created": "2024-04-20",
        "labels": ["review"],
        "discussion": "https://github.com/opensciencearchive/oeps/discussions/5",
        "body": """\
## Abstract

Specifies how peer review records are attached to and verified alongside an
archive, giving machine-readable provenance of its review status without
altering its content hash.
""",
    },
    {
        "oep": 6,
        "title": "Decentralized Storage Providers",
        "authors": "Grace Kim <grace@example.org>",
        "status": "ideation",
        "type": "technical",
        "created": "2024-05-01",
        "labels": ["storage", "network"],
        "body": """\
## Abstract

Defines how storage providers join the network to host and serve archived
data, so that availability and redundancy do not depend on a single host.
""",
    },
    {
        "oep": 7,
        "title": "Citation Format",
        "authors": "Henry Zhang <henry@example.org>",
        "status": "abandoned",
        "type": "informational",
        "created": "2024-03-01",
        "labels": ["citation"],
        "body": """\
## Abstract

A recommended citation string for archives. Withdrawn in favour of existing
citation standards.
""",
    },
]


def render_fixture(fixture: dict, revision: SchemaRevision = CURRENT) -> str:
    """Render one fixture as a frontmatter document for the given revision."""
    status = fixture["status"]
    kind = fixture["type"]
    if revision.name == "legacy":
        status = _LEGACY_STATUS[status]
        kind = kind.capitalize()

    lines = [
        "---",
        f"oep: {fixture['oep']}",
        f"title: {fixture['title']}",
        f"{'authors' if revision.strict else 'author'}: {fixture['authors']}",
        f"status: {status}",
        f"type: {kind}",
        f"created: {fixture['created']}",
    ]
    if "labels" in revision.optional_keys and fixture.get("labels"):
        lines.append(f"labels: [{', '.join(fixture['labels'])}]")
    if "discussion" in revision.optional_keys and fixture.get("discussion"):
        lines.append(f"discussion: {fixture['discussion']}")
    lines.append("---")
    return "\n".join(lines) + "\n\n" + fixture["body"]


def fixture_documents(revision: SchemaRevision = CURRENT) -> list[tuple[str, str]]:
    """(filename, markdown) pairs for every fixture, named oep-<index+1>.md."""
    return [
        (f"oep-{index + 1}.md", render_fixture(fixture, revision))
        for index, fixture in enumerate(FIXTURES)
    ]
