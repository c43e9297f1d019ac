from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    def __init__(self, message: str, *, details: Optional[list[dict]] = None):
        super().__init__(message)
        self.message = message
        self.details = list(details or [])


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    @classmethod
    def for_field(cls, field: str, message: str, *, summary: Optional[str] = None) -> "ValidationError":
        return cls(summary or message, details=[{"field": field, "message": message}])


class NotFoundError(DomainError):
    """Raised when a referenced identifier does not resolve."""


class ConflictError(DomainError):
    """Raised on uniqueness, one-record-per-day or workflow-order violations."""

    def __init__(self, message: str, *, details: Optional[list[dict]] = None, count: Optional[int] = None):
        super().__init__(message, details=details)
        self.count = count


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class StorageError(Exception):
    """Raised by repositories when the storage engine fails."""


class UniqueConstraintViolation(StorageError):
    """Raised when a write collides with a unique index."""

    def __init__(self, message: str, *, constraint: Optional[str] = None):
        super().__init__(message)
        self.constraint = constraint


class ForeignKeyViolation(StorageError):
    """Raised when a write or delete breaks a foreign key."""

    def __init__(self, message: str, *, constraint: Optional[str] = None):
        super().__init__(message)
        self.constraint = constraint
