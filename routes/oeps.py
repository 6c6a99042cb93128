"""OEP collection endpoints consumed by the site renderer."""

from flask import Blueprint, jsonify, request

from config import get_backend, get_schema_revision
from services.loader import load_proposals

bp = Blueprint("oeps", __name__)


def _load():
    return load_proposals(get_backend(), get_schema_revision())


@bp.route("/api/oeps")
def oep_list():
    """All valid OEPs, optionally filtered by status, type or label."""
    result = _load()
    records = result.records

    status = request.args.get("status", "").strip()
    kind = request.args.get("type", "").strip()
    label = request.args.get("label", "").strip()
    if status:
        records = [r for r in records if r.status == status]
    if kind:
        records = [r for r in records if r.type == kind]
    if label:
        records = [r for r in records if label in r.labels]

    return jsonify(
        {
            "source": "fallback" if result.fallback else "loaded",
            "reason": result.reason,
            "count": len(records),
            "oeps": [r.to_dict() for r in records],
        }
    )


@bp.route("/api/oeps/<identifier>")
def oep_detail(identifier):
    """One OEP by identifier (oep-0001)."""
    wanted = identifier.lower()
    for record in _load().records:
        if record.identifier == wanted:
            return jsonify(record.to_dict())
    return jsonify({"error": f"OEP not found: {identifier}"}), 404
