import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, UnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def store_guard(db: Session, action: str) -> Iterator[None]:
    """Roll back and translate store failures raised while performing ``action``."""

    try:
        yield
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Integrity violation while %s: %s", action, exc.orig)
        raise ConflictError(f"Conflicting data while {action}") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Store failure while %s", action)
        raise UnavailableError() from exc
