from __future__ import annotations

import logging

from flask import Flask
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from .responses import fail

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An unexpected error occurred"


def register_error_handlers(app: Flask) -> None:
    def _debug() -> bool:
        return bool(app.config.get("DEBUG", False))

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return fail("Validation Error", e.message, 400, details=e.details)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return fail("Not Found", e.message, 404, details=e.details)

    @app.errorhandler(ConflictError)
    def _conflict(e: ConflictError):
        return fail("Conflict", e.message, 409, details=e.details, count=e.count)

    @app.errorhandler(AuthenticationError)
    def _unauthorized(e: AuthenticationError):
        return fail("Unauthorized", e.message, 401)

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return fail("Bad Request", e.message, 400, details=e.details)

    @app.errorhandler(StorageError)
    def _storage(e: StorageError):
        logger.exception("Storage failure")
        return fail("Internal Server Error", GENERIC_ERROR, 500)

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        if e.code == 404:
            return fail("Not Found", "Route not found", 404)
        return fail(e.name, e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        logger.exception("Unhandled error")
        return fail("Internal Server Error", str(e) if _debug() else GENERIC_ERROR, 500)
