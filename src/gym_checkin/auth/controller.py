from __future__ import annotations

import logging

from flask import Flask, jsonify, redirect, render_template, request, session, url_for

from ..container import Container
from ..core.exceptions import AuthenticationError
from .guards import login_required

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/", endpoint="index")
    def index():
        return redirect(url_for("login"))

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if request.method == "GET":
            if session.get("admin"):
                return redirect(url_for("dashboard"))
            return render_template("login.html")

        wants_json = request.is_json
        data = (request.get_json(silent=True) or {}) if wants_json else request.form
        try:
            admin = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        except AuthenticationError as e:
            logger.info("Rejected login for %r", data.get("email", ""))
            if wants_json:
                return jsonify({"ok": False, "message": str(e)}), 401
            return render_template("login.html", error=str(e)), 401

        session.clear()
        session.permanent = True
        session["admin"] = {"email": admin.email}
        if wants_json:
            return jsonify({"ok": True})
        return redirect(url_for("dashboard"))

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return redirect(url_for("login"))

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        return render_template("dashboard.html", admin=session.get("admin"))
