import logging
import random
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, update

from extensions import db
from triviaquiz.models import Contestant
from triviaquiz.services.contestant_service import get_contestant
from triviaquiz.services.errors import InvalidAnswerFormat, QuestionNotFound, StateMismatch
from triviaquiz.services.event_log import log_event
from triviaquiz.services.progression_service import parse_question_number
from triviaquiz.services.quiz_service import count_active_questions, get_question_by_number
from triviaquiz.services.store import store_write

logger = logging.getLogger(__name__)

OPTION_NUMBERS = (1, 2, 3, 4)


@dataclass(frozen=True)
class FeedbackLines:
    correct: tuple
    incorrect: tuple

    @classmethod
    def from_config(cls, config):
        return cls(
            correct=tuple(config["CORRECT_ANSWER_LINES"]),
            incorrect=tuple(config["INCORRECT_ANSWER_LINES"]),
        )


@dataclass
class GradeResult:
    contestant_id: str
    quiz_id: str
    group: str
    question_number: int
    total_questions: int
    correct: bool
    message: str
    finished: bool

    def to_dict(self):
        return {
            "contestant_id": self.contestant_id,
            "quiz_id": self.quiz_id,
            "question_number": self.question_number,
            "total_questions": self.total_questions,
            "correct": self.correct,
            "message": self.message,
            "finished": self.finished,
        }


def parse_option(value):
    try:
        option = int(value)
    except (TypeError, ValueError):
        raise InvalidAnswerFormat()
    if option not in OPTION_NUMBERS:
        raise InvalidAnswerFormat()
    return option


@store_write
def record_answer(contestant_id, expected_answered, correct, is_last):
    """
    Applies one graded answer in a single UPDATE. The statement only matches
    while `questions_answered` still equals `expected_answered`, so a repeated
    submission cannot be counted twice. Returns False when nothing matched.
    """
    now = datetime.utcnow()
    values = {
        "questions_answered": Contestant.questions_answered + 1,
        "started": func.coalesce(Contestant.started, now),
    }
    if correct:
        values["correct_answers"] = Contestant.correct_answers + 1
    if is_last:
        values["finished"] = func.coalesce(Contestant.finished, now)

    result = db.session.execute(
        update(Contestant)
        .where(Contestant.contestant_id == contestant_id)
        .where(Contestant.questions_answered == expected_answered)
        .where(Contestant.finished.is_(None))
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    db.session.commit()
    return result.rowcount == 1


class AnswerGrader:
    def __init__(self, lines, rng=None):
        self.lines = lines
        self.rng = rng or random.Random()

    def _feedback(self, correct):
        if correct:
            return f"Correct! {self.rng.choice(self.lines.correct)}"
        return f"Incorrect! {self.rng.choice(self.lines.incorrect)}"

    def grade(self, contestant_id, question_number, selected_option):
        option = parse_option(selected_option)
        number = parse_question_number(question_number)
        if number is None:
            raise InvalidAnswerFormat("Question number is required")

        # The quiz always comes from the stored record
        contestant = get_contestant(contestant_id)
        quiz_id = contestant.quiz_id
        group = contestant.group
        name = contestant.name

        question = get_question_by_number(quiz_id, number)
        if question is None:
            raise QuestionNotFound(f"Question {number} not found")

        if contestant.finished is not None or number != contestant.questions_answered + 1:
            logger.warning(
                "answer for question %d from %s does not follow stored progress %d",
                number, contestant_id, contestant.questions_answered,
            )
            raise StateMismatch()

        total = count_active_questions(quiz_id)
        correct = option == question.correct_answer
        is_last = number == total

        if not record_answer(contestant_id, number - 1, correct, is_last):
            raise StateMismatch("This question has already been answered")

        if is_last:
            log_event("grader", f"{name} finished {quiz_id}/{group}")

        return GradeResult(
            contestant_id=contestant_id,
            quiz_id=quiz_id,
            group=group,
            question_number=number,
            total_questions=total,
            correct=correct,
            message=self._feedback(correct),
            finished=is_last,
        )
