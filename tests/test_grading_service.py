import random

import pytest

from config import TestingConfig
from triviaquiz.services.contestant_service import register
from triviaquiz.services.errors import InvalidAnswerFormat, QuestionNotFound, StateMismatch
from triviaquiz.services.grading_service import AnswerGrader, FeedbackLines, record_answer
from triviaquiz.services.progression_service import next_question

from conftest import CORRECT_OPTIONS, QUIZ_ID, fetch_contestant


@pytest.fixture()
def cid(app):
    contestant_id = register(QUIZ_ID, "Ann", "elves")
    next_question(contestant_id)
    return contestant_id


def _counts(cid):
    c = fetch_contestant(cid)
    return c.correct_answers, c.questions_answered


def test_correct_answer_increments_both_counters(cid, grader):
    result = grader.grade(cid, "1", str(CORRECT_OPTIONS[0]))

    assert result.correct is True
    assert result.message.startswith("Correct! ")
    assert result.message[len("Correct! "):] in TestingConfig.CORRECT_ANSWER_LINES
    assert _counts(cid) == (1, 1)


def test_wrong_answer_increments_answered_only(cid, grader):
    result = grader.grade(cid, "1", "3")

    assert result.correct is False
    assert result.message.startswith("Incorrect! ")
    assert result.message[len("Incorrect! "):] in TestingConfig.INCORRECT_ANSWER_LINES
    assert _counts(cid) == (0, 1)


def test_feedback_lines_are_injectable(cid):
    grader = AnswerGrader(FeedbackLines(correct=("yes",), incorrect=("no",)), rng=random.Random(0))

    assert grader.grade(cid, 1, CORRECT_OPTIONS[0]).message == "Correct! yes"
    assert grader.grade(cid, 2, 4).message == "Incorrect! no"


@pytest.mark.parametrize("selected", ["", "abc", None, "0", "5", "2.5"])
def test_invalid_selection(cid, grader, selected):
    with pytest.raises(InvalidAnswerFormat):
        grader.grade(cid, "1", selected)
    assert _counts(cid) == (0, 0)


def test_missing_question_number(cid, grader):
    with pytest.raises(InvalidAnswerFormat):
        grader.grade(cid, "", "1")


def test_unknown_question_mutates_nothing(cid, grader):
    with pytest.raises(QuestionNotFound):
        grader.grade(cid, "99", "1")
    assert _counts(cid) == (0, 0)


def test_out_of_order_answer_is_rejected(cid, grader):
    with pytest.raises(StateMismatch):
        grader.grade(cid, "2", str(CORRECT_OPTIONS[1]))
    assert _counts(cid) == (0, 0)


def test_repeated_answer_is_not_counted_twice(cid, grader):
    grader.grade(cid, 1, CORRECT_OPTIONS[0])

    with pytest.raises(StateMismatch):
        grader.grade(cid, 1, CORRECT_OPTIONS[0])
    assert _counts(cid) == (1, 1)


def test_record_answer_guards_expected_counter(cid):
    assert record_answer(cid, 1, True, False) is False
    assert _counts(cid) == (0, 0)
    assert record_answer(cid, 0, True, False) is True
    assert _counts(cid) == (1, 1)


def test_finished_is_stamped_on_last_question_only(cid, grader):
    grader.grade(cid, 1, CORRECT_OPTIONS[0])
    grader.grade(cid, 2, 3)
    assert fetch_contestant(cid).finished is None

    result = grader.grade(cid, 3, CORRECT_OPTIONS[2])

    assert result.finished is True
    assert result.total_questions == 3
    contestant = fetch_contestant(cid)
    assert contestant.finished is not None
    assert contestant.finished >= contestant.started
    assert (contestant.correct_answers, contestant.questions_answered) == (2, 3)


def test_finished_is_stamped_at_most_once(cid, grader):
    for number, option in enumerate(CORRECT_OPTIONS, start=1):
        grader.grade(cid, number, option)
    finished = fetch_contestant(cid).finished

    with pytest.raises(StateMismatch):
        grader.grade(cid, 3, CORRECT_OPTIONS[2])
    assert fetch_contestant(cid).finished == finished
    assert _counts(cid) == (3, 3)


def test_grading_without_visit_still_stamps_start(app, grader):
    cid = register(QUIZ_ID, "Bob", "elves")

    grader.grade(cid, 1, CORRECT_OPTIONS[0])

    assert fetch_contestant(cid).started is not None
