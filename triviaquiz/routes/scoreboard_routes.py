from flask import Blueprint, jsonify, request

from triviaquiz.services.leaderboard_service import scoreboard

scoreboard_bp = Blueprint("scoreboard", __name__)


@scoreboard_bp.route("/scoreboard/<quiz_id>/", methods=["GET", "POST"])
def contestant_scoreboard(quiz_id):
    # Linked with ?c=<id>, or posted from the last question
    contestant_id = request.args.get("c") or request.form.get("contestant-id")
    return jsonify(scoreboard(quiz_id, contestant_id=contestant_id or None))


@scoreboard_bp.route("/scoreboard/<quiz_id>/<group>")
def group_scoreboard(quiz_id, group):
    return jsonify(scoreboard(quiz_id, group=group))
