from flask import Blueprint, current_app, jsonify, redirect, request, url_for

from triviaquiz.services.contestant_service import register
from triviaquiz.services.errors import AlreadyRegistered, ContestantNotFound
from triviaquiz.services.progression_service import next_question
from triviaquiz.services.quiz_service import get_quiz
from triviaquiz.sockets.scoreboard_events import broadcast_leaderboard

public_bp = Blueprint("public", __name__)


def _contestant_id_from_request():
    cookie_name = current_app.config["CONTESTANT_COOKIE"]
    contestant_id = request.cookies.get(cookie_name) or request.form.get("contestant-id")
    if not contestant_id:
        raise ContestantNotFound("No contestant id supplied, please register first")
    return contestant_id


@public_bp.route("/<quiz_id>/<group>/", methods=["GET", "POST"])
def home(quiz_id, group):
    quiz = get_quiz(quiz_id)
    payload = {"quiz_id": quiz.quiz_id, "quiz_title": quiz.name, "group": group.lower()}

    if request.method == "GET":
        return jsonify(payload)

    try:
        contestant_id = register(quiz.quiz_id, request.form.get("contestant-name", ""), group)
    except AlreadyRegistered as e:
        payload.update(e.to_dict())
        payload["existing"] = True
        return jsonify(payload), e.status_code

    response = redirect(url_for("public.quiz", quiz_id=quiz.quiz_id))
    response.set_cookie(current_app.config["CONTESTANT_COOKIE"], contestant_id, path="/")
    return response


@public_bp.route("/quiz/<quiz_id>/", methods=["GET", "POST"])
def quiz(quiz_id):
    progress = next_question(
        _contestant_id_from_request(),
        last_answered=request.form.get("question"),
        quiz_id=quiz_id,
    )
    return jsonify(progress.to_dict())


@public_bp.route("/record-answer/", methods=["POST"])
def record_answer():
    grader = current_app.extensions["answer_grader"]
    result = grader.grade(
        request.form.get("contestant-id", ""),
        request.form.get("question"),
        request.form.get("answers"),
    )
    broadcast_leaderboard(result.quiz_id, result.group)
    return jsonify(result.to_dict())
