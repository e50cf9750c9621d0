import logging

import click
from flask import Flask

from config import Config
from extensions import db, socketio
from triviaquiz.routes import register_routes
from triviaquiz.services.grading_service import AnswerGrader, FeedbackLines
from triviaquiz.sockets import register_sockets


def create_app(config_class=Config, grader=None):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    db.init_app(app)
    socketio.init_app(app)

    app.extensions["answer_grader"] = grader or AnswerGrader(FeedbackLines.from_config(app.config))

    register_routes(app)
    register_sockets(socketio)

    with app.app_context():
        # Import models so that they are registered before create_all
        import triviaquiz.models  # noqa: F401
        db.create_all()

    @app.cli.command("init-db")
    def init_db():
        """Create the quiz tables."""
        db.create_all()
        click.echo("Database initialized.")

    return app


if __name__ == "__main__":
    app = create_app()
    print("TRIVIA QUIZ READY ON 0.0.0.0:8001")
    socketio.run(app, host="0.0.0.0", port=8001, debug=True)
