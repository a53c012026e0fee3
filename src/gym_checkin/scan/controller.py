from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..auth.guards import login_required
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/scan/check-in", methods=["POST"], endpoint="api_scan_check_in")
    @login_required
    def api_scan_check_in():
        """Kiosk scan: check the member in or out depending on today's open log."""
        data = request.get_json(silent=True) or {}
        try:
            outcome = container.scan_orchestrator.handle_scan(data.get("payload"))
        except Exception:
            logger.exception("Scan failed for payload %r", data.get("payload"))
            return jsonify({"ok": False, "message": "Server error."}), 500

        return jsonify(outcome.to_dict()), 200
