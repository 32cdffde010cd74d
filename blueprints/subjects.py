"""Subject routes: subject listing, lookup by code and its topics."""

from __future__ import annotations

from flask import Blueprint, jsonify

import content_store
from helpers import api_error, store_errors

bp = Blueprint("subjects", __name__, url_prefix="/api/subjects")


def _not_found(code: str):
    return api_error(f'Subject with code "{code}" not found', 404)


@bp.route("")
@store_errors("Failed to fetch subjects")
def list_subjects():
    subjects = content_store.list_subjects()
    return jsonify({"success": True, "count": len(subjects), "data": subjects})


@bp.route("/<code>")
@store_errors("Failed to fetch subject")
def get_subject(code):
    subject = content_store.get_subject(code)
    if subject is None:
        return _not_found(code)
    return jsonify({"success": True, "data": subject})


@bp.route("/<code>/topics")
@store_errors("Failed to fetch topics")
def subject_topics(code):
    subject = content_store.get_subject(code)
    if subject is None:
        return _not_found(code)
    topics = content_store.list_topics(subject["id"])
    return jsonify({
        "success": True,
        "subjectCode": subject["code"],
        "subjectName": subject["name"],
        "count": len(topics),
        "data": topics,
    })
