import logging

from sqlalchemy.exc import IntegrityError

from extensions import db
from triviaquiz.models import Contestant
from triviaquiz.services.errors import (
    AlreadyRegistered,
    ContestantNotFound,
    InvalidRegistration,
    StoreUnavailable,
)
from triviaquiz.services.event_log import log_event
from triviaquiz.services.identity import contestant_identity
from triviaquiz.services.quiz_service import get_quiz
from triviaquiz.services.store import store_read, store_write

logger = logging.getLogger(__name__)

REGISTER_ATTEMPTS = 3


@store_read
def find_contestant(contestant_id):
    if not contestant_id:
        return None
    return Contestant.query.filter_by(contestant_id=contestant_id).first()


def get_contestant(contestant_id):
    contestant = find_contestant(contestant_id)
    if contestant is None:
        raise ContestantNotFound()
    return contestant


@store_read
def _find_by_natural_key(quiz_id, group, name):
    return Contestant.query.filter_by(quiz_id=quiz_id, group=group, name=name).first()


@store_write
def register(quiz_id, name, group):
    """
    Creates a contestant, or hands back the existing id of one who registered
    but never answered. Anyone who has already answered is rejected.

    Returns the contestant id.
    """
    name = (name or "").strip()
    if not name:
        raise InvalidRegistration()
    quiz = get_quiz(quiz_id)
    group = (group or "").lower()
    contestant_id = contestant_identity(name, quiz.quiz_id, group)

    for attempt in range(REGISTER_ATTEMPTS):
        existing = _find_by_natural_key(quiz.quiz_id, group, name)
        if existing is not None:
            if existing.questions_answered > 0:
                logger.info("rejected re-registration of %r in %s/%s", name, quiz.quiz_id, group)
                raise AlreadyRegistered()
            return existing.contestant_id

        db.session.add(Contestant(
            contestant_id=contestant_id,
            quiz_id=quiz.quiz_id,
            group=group,
            name=name,
            correct_answers=0,
            questions_answered=0,
        ))
        try:
            db.session.commit()
        except IntegrityError:
            # Lost a race with an identical registration, look it up again
            db.session.rollback()
            logger.info("registration conflict for %r in %s/%s (attempt %d)",
                        name, quiz.quiz_id, group, attempt + 1)
            continue

        log_event("registry", f"{name} registered for {quiz.quiz_id}/{group}")
        return contestant_id

    raise StoreUnavailable("Could not complete registration, please try again.")
