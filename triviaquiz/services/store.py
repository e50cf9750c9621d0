import logging
import time
from functools import wraps

from flask import current_app
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from extensions import db
from triviaquiz.services.errors import StoreUnavailable

logger = logging.getLogger(__name__)


def store_read(f):
    """Retries a read on connection errors, then gives up with StoreUnavailable."""
    @wraps(f)
    def wrapped(*args, **kwargs):
        retries = int(current_app.config.get("STORE_READ_RETRIES", 3))
        delay = float(current_app.config.get("STORE_RETRY_DELAY", 0.2))
        attempt = 0
        while True:
            try:
                return f(*args, **kwargs)
            except OperationalError as e:
                db.session.rollback()
                if attempt >= retries:
                    logger.error("read %s failed after %d retries: %s", f.__name__, attempt, e)
                    raise StoreUnavailable() from e
                attempt += 1
                logger.warning("read %s failed (attempt %d), retrying: %s", f.__name__, attempt, e)
                time.sleep(delay)
    return wrapped


def store_write(f):
    """Rolls back a failed write and surfaces it as StoreUnavailable.

    Integrity errors pass through untouched, callers decide what a
    constraint violation means.
    """
    @wraps(f)
    def wrapped(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except IntegrityError:
            raise
        except DBAPIError as e:
            db.session.rollback()
            logger.error("write %s failed: %s", f.__name__, e)
            raise StoreUnavailable() from e
    return wrapped
