from __future__ import annotations

from functools import wraps

from flask import jsonify, redirect, request, session, url_for


def login_required(view):
    """Pages redirect to /login, API calls get a JSON 401."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if not session.get("admin"):
            if request.path.startswith("/api/"):
                return jsonify({"ok": False, "message": "Authentication required."}), 401
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper
