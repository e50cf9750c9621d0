from sqlalchemy import func

from extensions import db
from triviaquiz.models import Quiz, Question
from triviaquiz.services.errors import QuizNotFound
from triviaquiz.services.store import store_read


@store_read
def find_quiz(quiz_id):
    if not quiz_id:
        return None
    # SQLite lower() only folds ASCII, so an exact match has to come first
    quiz = Quiz.query.filter_by(quiz_id=quiz_id).first()
    if quiz is None:
        quiz = Quiz.query.filter(func.lower(Quiz.quiz_id) == quiz_id.lower()).first()
    return quiz


def get_quiz(quiz_id):
    quiz = find_quiz(quiz_id)
    if quiz is None:
        raise QuizNotFound(f"Quiz '{quiz_id}' not found")
    return quiz


@store_read
def count_active_questions(quiz_id):
    return db.session.query(func.count(Question.id)) \
        .filter(Question.quiz_id == quiz_id) \
        .filter(Question.active.is_(True)) \
        .scalar() or 0


@store_read
def get_question_by_number(quiz_id, number):
    """Returns the n-th active question (1-based) ordered by sort position."""
    if number < 1:
        return None
    return Question.query \
        .filter(Question.quiz_id == quiz_id) \
        .filter(Question.active.is_(True)) \
        .order_by(Question.sort_order) \
        .offset(number - 1) \
        .first()


def get_question_display(question, number, total):
    return {
        "number": number,
        "order": question.sort_order,
        "question_text": question.question,
        "answers": question.get_answers(),
        "total_questions": total,
    }
