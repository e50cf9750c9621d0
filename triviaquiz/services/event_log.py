import logging

from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from triviaquiz.models import LogEntry

logger = logging.getLogger(__name__)


def log_event(source, message):
    """Logs and persists a quiz event. A failed insert is logged, not raised."""
    logger.info("[%s] %s", source, message)
    try:
        db.session.add(LogEntry(source=source, message=message))
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning("could not persist log entry from %s: %s", source, e)
