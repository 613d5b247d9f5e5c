from __future__ import annotations

from fastapi import HTTPException

from startupcall.core.middleware.audit import get_logger
from startupcall.shared.exceptions import AppError

logger = get_logger()


def http_error(exc: AppError) -> HTTPException:
    """Translate a domain error into the response the route raises."""
    logger.info("request.rejected", error=type(exc).__name__, status_code=exc.status_code, detail=str(exc))
    return HTTPException(status_code=exc.status_code, detail=str(exc))
