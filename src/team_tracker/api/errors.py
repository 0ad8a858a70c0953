"""Translate service exceptions into HTTP errors."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from ..services.errors import InvalidInput, NotFound, PlanConflict, StorageFailure


def http_error(exc: Exception, message: str) -> HTTPException:
    """Map ``exc`` to an HTTPException.

    Client errors keep their own message. Storage and unexpected errors are
    logged with their cause and answered with ``message`` only.
    """
    if isinstance(exc, InvalidInput):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, NotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, PlanConflict):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, StorageFailure):
        logging.error(f"{message}: {exc} (cause: {exc.__cause__})")
    else:
        logging.exception(f"{message}: {exc}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)
