"""Topic routes."""

from __future__ import annotations

from flask import Blueprint, jsonify

import content_store
from helpers import api_error, store_errors

bp = Blueprint("topics", __name__, url_prefix="/api/topics")


@bp.route("/<int:topic_id>/concepts")
@store_errors("Failed to fetch concepts")
def topic_concepts(topic_id):
    topic = content_store.get_topic(topic_id)
    if topic is None:
        return api_error(f'Topic with ID "{topic_id}" not found', 404)
    concepts = content_store.list_concepts(topic_id)
    return jsonify({
        "success": True,
        "topicId": topic_id,
        "topicName": topic["name"],
        "count": len(concepts),
        "data": concepts,
    })
