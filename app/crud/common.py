# app/crud/common.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateError, InternalError
from app.services.integrity import is_duplicate_key

logger = logging.getLogger(__name__)


def commit_or_raise(db: Session, *, duplicate_message: str, failure_message: str) -> None:
    """
    Commit cu reclasificarea erorilor de store:
    - duplicate-key (index UNIQUE) -> DuplicateError, chiar dacă pre-check-ul a trecut (cursă)
    - orice altă eroare DB -> InternalError cu mesajul driverului
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_duplicate_key(e):
            logger.info("Duplicate-key signal on commit: %s", duplicate_message)
            raise DuplicateError(duplicate_message) from e
        logger.exception("Integrity error on commit")
        raise InternalError(failure_message, error=str(getattr(e, "orig", e))) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store error on commit")
        raise InternalError(failure_message, error=str(e)) from e
