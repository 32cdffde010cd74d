"""
Blueprint registration for the content API.

The health check lives at ``/``; every read route sits under ``/api``.
"""

from __future__ import annotations


def register_blueprints(app):
    from blueprints.core import bp as core_bp
    from blueprints.subjects import bp as subjects_bp
    from blueprints.topics import bp as topics_bp
    from blueprints.concepts import bp as concepts_bp
    from blueprints.past_questions import bp as past_questions_bp

    app.register_blueprint(core_bp)
    app.register_blueprint(subjects_bp)
    app.register_blueprint(topics_bp)
    app.register_blueprint(concepts_bp)
    app.register_blueprint(past_questions_bp)
