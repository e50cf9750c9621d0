import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from sqlalchemy import update

from extensions import db
from triviaquiz.models import Contestant, ContestantState
from triviaquiz.services.contestant_service import get_contestant
from triviaquiz.services.errors import InvalidAnswerFormat, QuestionNotFound, StateMismatch
from triviaquiz.services.event_log import log_event
from triviaquiz.services.quiz_service import (
    count_active_questions,
    get_question_by_number,
    get_question_display,
    get_quiz,
)
from triviaquiz.services.store import store_write

logger = logging.getLogger(__name__)


@dataclass
class Progress:
    contestant_id: str
    quiz_id: str
    quiz_title: str
    group: str
    state: ContestantState
    total_questions: int
    first_visit: bool = False
    question: Optional[dict] = field(default=None)

    @property
    def view(self):
        if self.state is ContestantState.FINISHED or self.question is None:
            return "finished"
        return "base" if self.first_visit else "question"

    def to_dict(self):
        return {
            "view": self.view,
            "contestant_id": self.contestant_id,
            "quiz_id": self.quiz_id,
            "quiz_title": self.quiz_title,
            "group": self.group,
            "state": self.state.value,
            "total_questions": self.total_questions,
            "question": self.question,
        }


def parse_question_number(value):
    """Client supplied question number; missing means nothing answered yet."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidAnswerFormat(f"Invalid question number: {value!r}")


@store_write
def mark_started(contestant_id):
    """Stamps `started` unless it is already set. Returns True if it stamped."""
    result = db.session.execute(
        update(Contestant)
        .where(Contestant.contestant_id == contestant_id)
        .where(Contestant.started.is_(None))
        .values(started=datetime.utcnow())
    )
    db.session.commit()
    return result.rowcount == 1


def next_question(contestant_id, last_answered=None, quiz_id=None):
    """
    Works out which question the contestant should see next.

    The client tells us the last question it answered; that must agree with
    the stored counter, otherwise the request is a replay or a forgery.
    """
    contestant = get_contestant(contestant_id)
    if quiz_id and quiz_id.lower() != contestant.quiz_id.lower():
        raise StateMismatch("Contestant is registered for a different quiz")

    claimed = parse_question_number(last_answered)
    if (claimed or 0) != contestant.questions_answered:
        logger.warning(
            "progress mismatch for %s: client says %s, stored %d",
            contestant_id, claimed, contestant.questions_answered,
        )
        raise StateMismatch()

    quiz = get_quiz(contestant.quiz_id)
    total = count_active_questions(quiz.quiz_id)
    number = contestant.questions_answered + 1

    progress = Progress(
        contestant_id=contestant.contestant_id,
        quiz_id=quiz.quiz_id,
        quiz_title=quiz.name,
        group=contestant.group,
        state=contestant.state,
        total_questions=total,
        first_visit=claimed is None,
    )
    if contestant.finished is not None or number > total:
        progress.state = ContestantState.FINISHED
        return progress

    question = get_question_by_number(quiz.quiz_id, number)
    if question is None:
        raise QuestionNotFound(f"Question {number} not found")

    if number == 1 and contestant.started is None:
        if mark_started(contestant.contestant_id):
            log_event("progress", f"{contestant.name} started {quiz.quiz_id}/{contestant.group}")
        progress.state = ContestantState.STARTED

    progress.question = get_question_display(question, number, total)
    return progress
