from dataclasses import dataclass
from typing import Optional

from triviaquiz.models import Contestant
from triviaquiz.services.contestant_service import get_contestant
from triviaquiz.services.errors import ContestantNotFound, StateMismatch
from triviaquiz.services.quiz_service import count_active_questions, get_quiz
from triviaquiz.services.store import store_read


@dataclass
class Score:
    position: int
    contestant_id: str
    name: str
    group: str
    correct_answers: int
    elapsed_seconds: Optional[int]

    @property
    def time_taken(self):
        if self.elapsed_seconds is None:
            return None
        return format_duration(self.elapsed_seconds)

    def to_dict(self):
        return {
            "position": self.position,
            "contestant_id": self.contestant_id,
            "name": self.name,
            "group": self.group,
            "correct_answers": self.correct_answers,
            "elapsed_seconds": self.elapsed_seconds,
            "time_taken": self.time_taken,
        }


def format_duration(seconds):
    """3725 -> '01:02:05'. Hours are not wrapped at 24."""
    seconds = max(0, int(seconds))
    return "%02d:%02d:%02d" % (seconds // 3600, seconds // 60 % 60, seconds % 60)


def _rank_key(contestant):
    elapsed = contestant.elapsed_seconds
    # Unfinished contestants go after everyone finished on the same score
    return (-contestant.correct_answers, elapsed is None, elapsed or 0, contestant.id)


@store_read
def _group_contestants(quiz_id, group):
    return Contestant.query.filter_by(quiz_id=quiz_id, group=group).all()


def rank(quiz_id, group):
    quiz = get_quiz(quiz_id)
    group = (group or "").lower()
    contestants = sorted(_group_contestants(quiz.quiz_id, group), key=_rank_key)
    return [
        Score(
            position=position,
            contestant_id=c.contestant_id,
            name=c.name,
            group=c.group,
            correct_answers=c.correct_answers,
            elapsed_seconds=c.elapsed_seconds,
        )
        for position, c in enumerate(contestants, start=1)
    ]


def scoreboard(quiz_id, contestant_id=None, group=None):
    """Scoreboard payload for a group, taken from the contestant when one is given."""
    quiz = get_quiz(quiz_id)
    contestant = None
    if contestant_id:
        contestant = get_contestant(contestant_id)
        if contestant.quiz_id.lower() != quiz.quiz_id.lower():
            raise StateMismatch("Contestant is registered for a different quiz")
        group = contestant.group
    elif not group:
        raise ContestantNotFound("No contestant id supplied, please register first")

    return {
        "quiz_id": quiz.quiz_id,
        "quiz_title": quiz.name,
        "group": (group or "").lower(),
        "total_questions": count_active_questions(quiz.quiz_id),
        "contestant": {
            "contestant_id": contestant.contestant_id,
            "name": contestant.name,
            "correct_answers": contestant.correct_answers,
            "questions_answered": contestant.questions_answered,
            "state": contestant.state.value,
        } if contestant else None,
        "scores": [s.to_dict() for s in rank(quiz.quiz_id, group)],
    }
