from __future__ import annotations

from typing import ClassVar


class AppError(Exception):
    """Base error for domain rules. ``status_code`` is the HTTP status routes answer with."""

    status_code: ClassVar[int] = 400


class NotAuthorized(AppError):
    """Actor lacks the role or ownership for the operation."""

    status_code = 403


class NotFound(AppError):
    """Entity is missing or belongs to another startup."""

    status_code = 404


class ValidationError(AppError):
    status_code = 400


class InvalidTransition(AppError):
    """Status change outside the startup lifecycle."""

    status_code = 409
