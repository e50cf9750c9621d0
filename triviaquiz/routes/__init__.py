import logging

from flask import jsonify

from triviaquiz.services.errors import QuizError
from .public_routes import public_bp
from .scoreboard_routes import scoreboard_bp

logger = logging.getLogger(__name__)


def handle_quiz_error(error):
    if error.status_code >= 500:
        logger.error("%s: %s", error.kind, error.msg)
    return jsonify(error.to_dict()), error.status_code


def register_routes(app):
    app.register_blueprint(public_bp)
    app.register_blueprint(scoreboard_bp)
    app.register_error_handler(QuizError, handle_quiz_error)
