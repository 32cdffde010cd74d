"""Past exam question routes."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

import content_store
from helpers import int_arg, limit_arg, store_errors

bp = Blueprint("past_questions", __name__, url_prefix="/api/past-questions")


@bp.route("/<board>/<subject>")
@store_errors("Failed to fetch past questions")
def list_past_questions(board, subject):
    year = int_arg("year")
    topic = request.args.get("topic", "").strip() or None
    limit = limit_arg()

    questions = content_store.list_past_questions(board, subject, year, topic, limit)
    return jsonify({
        "success": True,
        "examBoard": board,
        "subjectCode": subject,
        "filters": {
            "year": year or "all",
            "topic": topic or "all",
            "limit": limit or "none",
        },
        "count": len(questions),
        "data": questions,
    })
