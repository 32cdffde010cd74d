"""
Shared helpers used across blueprints.

JSON envelopes, query-string parsing and the error wrapper for read routes.
"""

from __future__ import annotations

import logging
import sqlite3
from functools import wraps

from flask import current_app, jsonify, request

logger = logging.getLogger(__name__)


class BadQueryArg(ValueError):
    """A query-string parameter could not be parsed."""


def api_error(error: str, status: int, message: str | None = None):
    """Standard failure envelope: ``{success: false, error[, message]}``."""
    body = {"success": False, "error": error}
    if message is not None:
        body["message"] = message
    return jsonify(body), status


def store_errors(action: str):
    """Decorator turning bad query args into 400s and store failures into 500s.

    ``action`` is the client-facing label, e.g. "Failed to fetch subjects".
    """
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except BadQueryArg as e:
                return api_error(str(e), 400)
            except sqlite3.Error as e:
                logger.exception("%s: %s", action, request.path)
                return api_error(action, 500, str(e))
        return decorated
    return decorator


def int_arg(name: str, minimum: int | None = None) -> int | None:
    """Parse an optional integer query parameter. Raises BadQueryArg."""
    raw = request.args.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise BadQueryArg(f"{name} must be an integer")
    if minimum is not None and value < minimum:
        raise BadQueryArg(f"{name} must be >= {minimum}")
    return value


def limit_arg() -> int | None:
    """Extract ``limit`` from request.args, capped at API_MAX_LIMIT."""
    limit = int_arg("limit", minimum=1)
    if limit is None:
        return None
    return min(limit, current_app.config.get("API_MAX_LIMIT", 500))


def choice_arg(name: str, choices: tuple[str, ...]) -> str | None:
    raw = request.args.get(name, "").strip()
    if not raw:
        return None
    if raw not in choices:
        raise BadQueryArg(f"{name} must be one of: {', '.join(choices)}")
    return raw
