from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..auth.guards import login_required
from ..container import Container
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        if request.is_json:
            return request.get_json(silent=True) or {}
        return request.form.to_dict()

    @app.route("/api/memberships/monthly", methods=["POST"], endpoint="api_create_monthly")
    @login_required
    def api_create_monthly():
        data = _payload()
        try:
            membership = container.membership_service.create_monthly(data.get("user_id"), data.get("months"))
        except ValidationError as e:
            return jsonify({"ok": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Monthly membership creation failed")
            return jsonify({"ok": False, "message": "Failed to create monthly membership."}), 500
        return jsonify({"ok": True, "membership": membership.to_dict()})

    @app.route("/api/passes/daily", methods=["POST"], endpoint="api_create_daily_pass")
    @login_required
    def api_create_daily_pass():
        data = _payload()
        try:
            membership = container.membership_service.create_daily_pass(data.get("user_id"))
        except ValidationError as e:
            return jsonify({"ok": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Daily pass creation failed")
            return jsonify({"ok": False, "message": "Failed to create daily pass."}), 500
        return jsonify({"ok": True, "membership": membership.to_dict()})
