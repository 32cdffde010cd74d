"""Concept routes: ordered lesson content and practice questions."""

from __future__ import annotations

from flask import Blueprint, jsonify

import content_store
from helpers import api_error, choice_arg, limit_arg, store_errors
from importer.schemas import DIFFICULTIES

bp = Blueprint("concepts", __name__, url_prefix="/api/concepts")


def _not_found(concept_id: int):
    return api_error(f'Concept with ID "{concept_id}" not found', 404)


@bp.route("/<int:concept_id>/lesson")
@store_errors("Failed to fetch lesson content")
def concept_lesson(concept_id):
    concept = content_store.get_concept(concept_id)
    if concept is None:
        return _not_found(concept_id)
    sections = content_store.list_lesson_sections(concept_id)
    return jsonify({
        "success": True,
        "conceptId": concept_id,
        "conceptTitle": concept["title"],
        "estimatedMinutes": concept["estimatedMinutes"],
        "sectionsCount": len(sections),
        "data": sections,
    })


@bp.route("/<int:concept_id>/questions")
@store_errors("Failed to fetch questions")
def concept_questions(concept_id):
    difficulty = choice_arg("difficulty", DIFFICULTIES)
    limit = limit_arg()

    concept = content_store.get_concept(concept_id)
    if concept is None:
        return _not_found(concept_id)
    questions = content_store.list_concept_questions(concept_id, difficulty, limit)
    return jsonify({
        "success": True,
        "conceptId": concept_id,
        "conceptTitle": concept["title"],
        "filters": {
            "difficulty": difficulty or "all",
            "limit": limit or "none",
        },
        "count": len(questions),
        "data": questions,
    })
