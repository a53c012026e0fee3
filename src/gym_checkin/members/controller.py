from __future__ import annotations

import io
import logging

from flask import Flask, abort, jsonify, request, send_file

from ..auth.guards import login_required
from ..common.validators import is_member_id
from ..container import Container
from ..core.exceptions import ConflictError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/create-user", methods=["POST"], endpoint="api_create_user")
    @login_required
    def api_create_user():
        password = request.form.get("password", "")
        name = request.form.get("name")
        if not password:
            return jsonify({"ok": False, "message": "password is required"}), 400

        upload = request.files.get("photo")
        if upload is None or not upload.filename:
            return jsonify({"ok": False, "message": "photo is required"}), 400

        try:
            created = container.member_service.create_member(password=password, name=name, photo=upload.read())
        except ValidationError as e:
            return jsonify({"ok": False, "message": str(e)}), 400
        except ConflictError:
            logger.warning("Member number collision, admin should retry")
            return jsonify({"ok": False, "message": "Member number already taken, try again."}), 409
        except Exception:
            logger.exception("Member creation failed")
            return jsonify({"ok": False, "message": "Failed to create user."}), 500

        return jsonify(
            {
                "ok": True,
                "email": created.email,
                "number": created.number,
                "userId": created.identity.identity_id,
            }
        )

    @app.route("/photos/<member_id>", endpoint="member_photo")
    @login_required
    def member_photo(member_id: str):
        if not is_member_id(member_id):
            abort(404)
        path = container.photo_store.path_for(member_id)
        if path is None:
            abort(404)
        return send_file(path, mimetype="image/jpeg", max_age=0)

    @app.route("/api/members/<member_id>/qr.png", endpoint="member_badge_qr")
    @login_required
    def member_badge_qr(member_id: str):
        """Printable QR badge for a member."""
        try:
            png = container.member_service.badge_png(member_id)
        except ValidationError as e:
            return jsonify({"ok": False, "message": str(e)}), 400
        return send_file(io.BytesIO(png), mimetype="image/png", download_name=f"{member_id}.png")
