"""Database Error Translation.

Maps driver exceptions onto the service error taxonomy using SQLSTATE codes,
so callers never inspect raw driver messages.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import asyncpg
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError

from ..core.constants import ErrorMessages
from ..core.exceptions import ConflictError, NotFoundError, StorageError
from ..core.logging import get_logger

logger = get_logger(__name__)

FOREIGN_KEY_VIOLATION = '23503'
UNIQUE_VIOLATION = '23505'
QUERY_CANCELED = '57014'
CONNECTION_EXCEPTION_CLASS = '08'


def get_sqlstate(error: BaseException) -> str | None:
    """Extract the SQLSTATE from a SQLAlchemy-wrapped or raw asyncpg error.

    Examples:
        >>> get_sqlstate(asyncpg.exceptions.UniqueViolationError())
        '23505'
    """
    candidates = [error]
    if isinstance(error, DBAPIError):
        candidates.append(error.orig)
    candidates.extend(c.__cause__ for c in list(candidates) if c is not None)

    for candidate in candidates:
        if candidate is None:
            continue
        code = getattr(candidate, 'sqlstate', None) or getattr(candidate, 'pgcode', None)
        if code:
            return str(code)
    return None


def is_storage_failure(error: BaseException) -> bool:
    """Connectivity, pool exhaustion or timeout."""
    if isinstance(error, (OperationalError, InterfaceError, TimeoutError, OSError)):
        return True
    if isinstance(error, (asyncpg.PostgresConnectionError, asyncpg.InterfaceError)):
        return True
    if isinstance(error, DBAPIError) and error.connection_invalidated:
        return True
    sqlstate = get_sqlstate(error)
    return sqlstate == QUERY_CANCELED or bool(sqlstate and sqlstate.startswith(CONNECTION_EXCEPTION_CLASS))


@contextmanager
def translate_db_errors(
    entity: str,
    entity_id: Any = None,
    not_found_message: str | None = None,
    **context: Any
) -> Iterator[None]:
    """Translate driver errors raised inside the block.

    - foreign-key violation -> NotFoundError (a referenced row is missing)
    - unique violation -> ConflictError
    - connection/timeout -> StorageError

    Anything else propagates unchanged.

    Args:
        entity: Entity being written ("contact", "group", "group_contact")
        entity_id: Identifier for error context
        not_found_message: Message used for foreign-key violations
        **context: Extra structured context for logs and the raised error
    """
    try:
        yield
    except (IntegrityError, asyncpg.IntegrityConstraintViolationError) as e:
        sqlstate = get_sqlstate(e)
        if sqlstate == FOREIGN_KEY_VIOLATION:
            raise NotFoundError(
                not_found_message or f"Referenced record for {entity} {entity_id} not found",
                entity=entity,
                entity_id=entity_id,
                **context
            ) from e
        if sqlstate == UNIQUE_VIOLATION:
            raise ConflictError(
                ErrorMessages.CONFLICT,
                entity=entity,
                entity_id=str(entity_id),
                **context
            ) from e
        raise
    except (DBAPIError, asyncpg.PostgresError, asyncpg.InterfaceError, TimeoutError, OSError) as e:
        if not is_storage_failure(e):
            raise
        logger.error(
            "Storage failure",
            extra={
                'entity': entity,
                'entity_id': str(entity_id),
                'error': str(e),
                'error_type': type(e).__name__,
                **context
            }
        )
        raise StorageError(
            ErrorMessages.STORAGE_UNAVAILABLE,
            entity=entity,
            entity_id=str(entity_id),
            **context
        ) from e
