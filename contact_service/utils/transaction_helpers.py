"""Transaction Helper Utilities.

Provides safe transaction management: every unit of work ends in exactly one
commit or one rollback, and the caller always learns the true final state.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import TransactionError
from ..core.logging import get_logger

logger = get_logger(__name__)


async def finish_transaction(
    db: AsyncSession,
    error: BaseException | None,
    context: str = ""
) -> BaseException | None:
    """Finalize a unit of work.

    Args:
        db: Session holding the in-flight transaction
        error: Outcome of the business logic that ran inside it (None on success)
        context: Context string for logging (e.g., "contact creation")

    Returns:
        None if the commit succeeded. Otherwise the exception the caller must
        raise:
        - the original ``error`` when it was rolled back cleanly;
        - a TransactionError when the rollback or the commit itself failed.
    """
    if error is not None:
        try:
            await db.rollback()
        except Exception as rollback_error:
            logger.error(
                "Rollback failed",
                extra={
                    'rollback_error': str(rollback_error),
                    'rollback_error_type': type(rollback_error).__name__,
                    'original_error': str(error),
                    'original_error_type': type(error).__name__,
                    'context': context
                },
                exc_info=rollback_error
            )
            failure = TransactionError(
                f"Rollback failed: {rollback_error}",
                original_error=error,
                context=context
            )
            failure.__cause__ = rollback_error
            return failure

        logger.debug(
            "Transaction rolled back",
            extra={
                'error': str(error),
                'error_type': type(error).__name__,
                'context': context
            }
        )
        return error

    try:
        await db.commit()
    except Exception as commit_error:
        logger.error(
            "Commit failed",
            extra={
                'commit_error': str(commit_error),
                'commit_error_type': type(commit_error).__name__,
                'context': context
            },
            exc_info=commit_error
        )
        failure = TransactionError(f"Commit failed: {commit_error}", context=context)
        failure.__cause__ = commit_error
        return failure

    logger.debug("Transaction committed", extra={'context': context})
    return None


@asynccontextmanager
async def safe_transaction(
    db: AsyncSession,
    context: str = "",
    statement_timeout_ms: int | None = None
) -> AsyncGenerator[AsyncSession, None]:
    """Context manager for a unit of work.

    Commits on success; rolls back on any exception, including task
    cancellation, and re-raises. finish_transaction runs on every exit path.

    Args:
        db: AsyncSession to manage
        context: Context string for logging
        statement_timeout_ms: If set, applied with SET LOCAL for this transaction

    Yields:
        The same AsyncSession for use within the context

    Raises:
        The original exception after a clean rollback, or TransactionError if
        the commit or rollback failed.

    Usage:
        ```python
        async with session_factory() as db:
            async with safe_transaction(db, "contact creation"):
                await ContactRepository(db).create(contact)
        ```
    """
    error: BaseException | None = None
    try:
        if statement_timeout_ms:
            await db.execute(text(f"SET LOCAL statement_timeout = {int(statement_timeout_ms)}"))
        yield db
    except BaseException as e:
        error = e

    outcome = await finish_transaction(db, error, context)
    if outcome is None:
        return
    if outcome is error:
        raise error
    raise outcome from outcome.__cause__
