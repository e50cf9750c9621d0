import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

root_dir = Path(__file__).resolve().parents[1]
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from app import create_app
from config import TestingConfig
from extensions import db, socketio
from triviaquiz.models import Contestant, Question, Quiz
from triviaquiz.services.grading_service import AnswerGrader, FeedbackLines

QUIZ_ID = "xmas"
QUIZ_NAME = "Christmas Quiz"

# (sort_order, question, correct option, active)
SEED_QUESTIONS = [
    (10, "Which reindeer has a red nose?", 2, True),
    (20, "In which country did the tradition of the Christmas tree start?", 1, True),
    (30, "Retired question that must never be served", 3, False),
    (40, "How many gifts in total are given in The Twelve Days of Christmas?", 4, True),
]
CORRECT_OPTIONS = [2, 1, 4]


def _seed_quiz():
    quiz = Quiz(quiz_id=QUIZ_ID, name=QUIZ_NAME)
    db.session.add(quiz)
    db.session.add(Quiz(quiz_id="summer", name="Summer Quiz"))
    for sort_order, text, correct, active in SEED_QUESTIONS:
        db.session.add(Question(
            quiz_id=QUIZ_ID,
            sort_order=sort_order,
            question=text,
            answer_1=f"{sort_order}-a",
            answer_2=f"{sort_order}-b",
            answer_3=f"{sort_order}-c",
            answer_4=f"{sort_order}-d",
            correct_answer=correct,
            active=active,
        ))
    db.session.commit()


@pytest.fixture()
def grader():
    lines = FeedbackLines(
        correct=TestingConfig.CORRECT_ANSWER_LINES,
        incorrect=TestingConfig.INCORRECT_ANSWER_LINES,
    )
    return AnswerGrader(lines, rng=random.Random(1225))


@pytest.fixture()
def app(grader):
    app = create_app(TestingConfig, grader=grader)
    with app.app_context():
        _seed_quiz()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def socket_client(app):
    sio = socketio.test_client(app)
    yield sio
    if sio.is_connected():
        sio.disconnect()


@pytest.fixture()
def make_contestant(app):
    """Inserts a contestant row directly, with explicit progress and timings."""
    def _make(name, group="elves", correct=0, answered=0, elapsed=None, quiz_id=QUIZ_ID):
        started = finished = None
        if elapsed is not None:
            started = datetime(2025, 12, 24, 18, 0, 0)
            finished = started + timedelta(seconds=elapsed)
        contestant = Contestant(
            contestant_id=f"id-{name}-{group}",
            quiz_id=quiz_id,
            group=group,
            name=name,
            correct_answers=correct,
            questions_answered=answered,
            started=started,
            finished=finished,
        )
        db.session.add(contestant)
        db.session.commit()
        return contestant.contestant_id
    return _make


def fetch_contestant(contestant_id):
    db.session.expire_all()
    return Contestant.query.filter_by(contestant_id=contestant_id).one()
