"""Core routes: health check."""

from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

bp = Blueprint("core", __name__)


@bp.route("/")
def index():
    return jsonify({
        "message": "Content API is running",
        "version": current_app.config.get("API_VERSION", "1.0.0"),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })
