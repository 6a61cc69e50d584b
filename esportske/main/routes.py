"""Routes for the main blueprint."""

from __future__ import annotations

from typing import Any

from flask import jsonify

from esportske.core.utils import utcnow_iso

from . import bp


@bp.route("/health")
def health_check() -> Any:
    """Perform a simple health check."""
    return jsonify({"status": "ok", "timestamp": utcnow_iso()})
