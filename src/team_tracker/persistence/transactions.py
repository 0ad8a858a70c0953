"""Unit-of-work helper wrapping a session in a single transaction."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..services.errors import StorageFailure

logger = logging.getLogger(__name__)


@contextmanager
def transaction(session: Session, action: str) -> Iterator[Session]:
    """Commit everything done in the block, or roll all of it back.

    Database errors are logged with their cause and re-raised as StorageFailure
    carrying only ``action``; any other exception rolls back and propagates as is.
    """
    try:
        yield session
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(f"Failed to {action}: {exc}")
        raise StorageFailure(f"Failed to {action}") from exc
    except Exception:
        session.rollback()
        raise
