"""Tests for transaction helper utilities."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from contact_service.core.exceptions import NotFoundError, TransactionError
from contact_service.utils.transaction_helpers import finish_transaction, safe_transaction


@pytest.fixture()
def db():
    """Mocked AsyncSession"""
    return AsyncMock()


class TestFinishTransaction:
    """Test suite for finish_transaction"""

    @pytest.mark.asyncio
    async def test_commits_on_success(self, db):
        outcome = await finish_transaction(db, None, "test")

        assert outcome is None
        db.commit.assert_awaited_once()
        db.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rolls_back_and_returns_original_error(self, db):
        error = ValueError("business failure")

        outcome = await finish_transaction(db, error, "test")

        assert outcome is error
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rollback_failure_is_transaction_error(self, db):
        error = ValueError("business failure")
        rollback_error = ConnectionError("connection lost")
        db.rollback.side_effect = rollback_error

        outcome = await finish_transaction(db, error, "test")

        assert isinstance(outcome, TransactionError)
        assert outcome.original_error is error
        assert outcome.__cause__ is rollback_error
        db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commit_failure_is_transaction_error(self, db):
        commit_error = ConnectionError("connection lost")
        db.commit.side_effect = commit_error

        outcome = await finish_transaction(db, None, "test")

        assert isinstance(outcome, TransactionError)
        assert outcome.__cause__ is commit_error
        db.rollback.assert_not_awaited()


class TestSafeTransaction:
    """Test suite for safe_transaction"""

    @pytest.mark.asyncio
    async def test_commits_on_success(self, db):
        async with safe_transaction(db, "test") as session:
            assert session is db

        db.commit.assert_awaited_once()
        db.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rolls_back_and_re_raises(self, db):
        with pytest.raises(NotFoundError):
            async with safe_transaction(db, "test"):
                raise NotFoundError("Contact missing", entity="contact")

        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rolls_back_on_cancellation(self, db):
        with pytest.raises(asyncio.CancelledError):
            async with safe_transaction(db, "test"):
                raise asyncio.CancelledError()

        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commit_failure_raises_transaction_error(self, db):
        db.commit.side_effect = ConnectionError("connection lost")

        with pytest.raises(TransactionError) as exc_info:
            async with safe_transaction(db, "test"):
                pass

        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_rollback_failure_raises_transaction_error(self, db):
        db.rollback.side_effect = ConnectionError("connection lost")

        with pytest.raises(TransactionError) as exc_info:
            async with safe_transaction(db, "test"):
                raise ValueError("business failure")

        assert isinstance(exc_info.value.original_error, ValueError)

    @pytest.mark.asyncio
    async def test_sets_statement_timeout(self, db):
        async with safe_transaction(db, "test", statement_timeout_ms=2500):
            pass

        statement = db.execute.await_args.args[0]
        assert str(statement) == "SET LOCAL statement_timeout = 2500"

    @pytest.mark.asyncio
    async def test_no_statement_timeout_by_default(self, db):
        async with safe_transaction(db, "test"):
            pass

        db.execute.assert_not_awaited()
