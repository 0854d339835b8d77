"""Custom Exceptions for the Contact Service.

This module defines the error taxonomy shared by every layer. Callers classify a
failure by its exception class, never by parsing the message.

Recoverable errors are transient issues that may resolve on retry:
- Connection loss or timeout talking to PostgreSQL

Permanent errors are client faults that won't resolve on retry:
- Malformed input (validation)
- Referenced records that do not exist
- Unique constraint conflicts

Internal errors are server faults that must be investigated, not retried:
- Stored rows that no longer satisfy domain invariants
- Commit/rollback failures
"""

from typing import Any


class ContactServiceError(Exception):
    """Base exception for all contact service errors.

    Args:
        message: Human readable description
        **context: Structured details used for logging and error responses
    """

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context


class RecoverableError(ContactServiceError):
    """Error that may be resolved on retry.

    Only read-only or idempotent operations should be retried automatically.
    """
    pass


class PermanentError(ContactServiceError):
    """Client fault that won't be resolved on retry."""
    pass


class InternalError(ContactServiceError):
    """Server fault: data integrity or transaction failure."""
    pass


# Recoverable
class StorageError(RecoverableError):
    """Database connection, pool or timeout failure."""
    pass


# Permanent
class ValidationError(PermanentError):
    """Malformed user input rejected by a value object or query builder."""

    def __init__(self, message: str, field: str | None = None, **context: Any):
        super().__init__(message, field=field, **context)
        self.field = field


class NotFoundError(PermanentError):
    """Referenced record does not exist."""

    def __init__(self, message: str, entity: str, entity_id: Any = None, **context: Any):
        super().__init__(message, entity=entity, entity_id=str(entity_id), **context)
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(PermanentError):
    """Record with the same identity already exists."""
    pass


# Internal
class ReconstructionError(InternalError):
    """Stored data fails domain invariants on read-back."""

    def __init__(
        self,
        message: str,
        entity: str,
        entity_id: Any = None,
        field: str | None = None,
        **context: Any
    ):
        super().__init__(
            message, entity=entity, entity_id=str(entity_id), field=field, **context
        )
        self.entity = entity
        self.entity_id = entity_id
        self.field = field


class TransactionError(InternalError):
    """Commit or rollback failed; the final state of the unit of work is unknown.

    Never retried automatically: retrying a commit after an unknown outcome
    could apply the same writes twice.
    """

    def __init__(
        self,
        message: str,
        original_error: BaseException | None = None,
        **context: Any
    ):
        super().__init__(message, **context)
        self.original_error = original_error
