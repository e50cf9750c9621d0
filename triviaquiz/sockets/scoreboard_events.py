import logging

from flask_socketio import emit, join_room

from extensions import socketio
from triviaquiz.services.errors import QuizError
from triviaquiz.services.leaderboard_service import rank

logger = logging.getLogger(__name__)


def scoreboard_room(quiz_id, group):
    return f"scoreboard:{quiz_id.lower()}:{(group or '').lower()}"


def _leaderboard_payload(quiz_id, group):
    return {
        "quiz_id": quiz_id,
        "group": (group or "").lower(),
        "scores": [s.to_dict() for s in rank(quiz_id, group)],
    }


def broadcast_leaderboard(quiz_id, group):
    """Pushes the current ranks to every screen watching this group."""
    try:
        payload = _leaderboard_payload(quiz_id, group)
    except QuizError as e:
        logger.warning("leaderboard broadcast for %s/%s skipped: %s", quiz_id, group, e.msg)
        return
    socketio.emit("update_leaderboard", payload, to=scoreboard_room(quiz_id, group))


def register_scoreboard_events(socketio):

    # ---------------------------
    # SCREEN JOINS A GROUP
    # ---------------------------
    @socketio.on("scoreboard_join")
    def handle_join(data):
        quiz_id = (data or {}).get("quiz_id") or ""
        group = (data or {}).get("group") or ""
        try:
            payload = _leaderboard_payload(quiz_id, group)
        except QuizError as e:
            emit("scoreboard_error", e.to_dict())
            return

        join_room(scoreboard_room(quiz_id, group))
        emit("update_leaderboard", payload)
