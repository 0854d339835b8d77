"""
Tests for the use case services with mocked repositories.

Each operation must end in exactly one commit or one rollback.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from contact_service.core.exceptions import NotFoundError, StorageError, TransactionError
from contact_service.domain.query import QueryParameter
from contact_service.services.contact_service import ContactService
from contact_service.services.group_service import GroupService


@pytest.fixture()
def db():
    """Mocked AsyncSession"""
    return AsyncMock()


@pytest.fixture()
def contact_repository():
    return AsyncMock()


@pytest.fixture()
def group_repository():
    return AsyncMock()


@pytest.fixture()
def contact_service(db, settings, contact_repository):
    return ContactService(db, settings, repository=contact_repository)


@pytest.fixture()
def group_service(db, settings, group_repository, contact_repository):
    return GroupService(
        db, settings, repository=group_repository, contact_repository=contact_repository
    )


class TestContactService:
    """Test suite for ContactService"""

    @pytest.mark.asyncio
    async def test_create_contact_commits(self, contact_service, contact_repository, db, make_contact):
        contacts = [make_contact(), make_contact(name="Petr")]
        contact_repository.create.return_value = contacts

        created = await contact_service.create_contact(*contacts)

        assert created == contacts
        contact_repository.create.assert_awaited_once_with(*contacts)
        db.commit.assert_awaited_once()
        db.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_transaction_sets_statement_timeout(self, contact_service, contact_repository, db, make_contact):
        contact_repository.create.return_value = [make_contact()]

        await contact_service.create_contact(make_contact())

        statement = db.execute.await_args_list[0].args[0]
        assert str(statement) == "SET LOCAL statement_timeout = 5000"

    @pytest.mark.asyncio
    async def test_update_missing_contact_rolls_back(self, contact_service, contact_repository, db, make_contact):
        contact = make_contact()
        contact_repository.update.side_effect = NotFoundError(
            "Contact not found", entity="contact", entity_id=contact.id
        )

        with pytest.raises(NotFoundError):
            await contact_service.update_contact(contact)

        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_contact(self, contact_service, contact_repository, db):
        contact_id = uuid4()

        await contact_service.delete_contact(contact_id)

        contact_repository.delete.assert_awaited_once_with(contact_id)
        db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_storage_failure_propagates_after_rollback(self, contact_service, contact_repository, db):
        contact_repository.read_by_id.side_effect = StorageError("Storage is unavailable")

        with pytest.raises(StorageError):
            await contact_service.read_contact_by_id(uuid4())

        db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_commit_failure_is_reported(self, contact_service, contact_repository, db, make_contact):
        contact_repository.create.return_value = [make_contact()]
        db.commit.side_effect = ConnectionError("connection lost")

        with pytest.raises(TransactionError):
            await contact_service.create_contact(make_contact())

    @pytest.mark.asyncio
    async def test_list_contacts_with_total(self, contact_service, contact_repository, make_contact):
        page = [make_contact()]
        contact_repository.list.return_value = page
        contact_repository.count.return_value = 42
        params = QueryParameter()

        contacts, total = await contact_service.list_contacts_with_total(params)

        assert contacts == page
        assert total == 42
        contact_repository.list.assert_awaited_once_with(params)

    @pytest.mark.asyncio
    async def test_count_contacts(self, contact_service, contact_repository):
        contact_repository.count.return_value = 3
        assert await contact_service.count_contacts() == 3


class TestGroupService:
    """Test suite for GroupService"""

    @pytest.mark.asyncio
    async def test_create_group(self, group_service, group_repository, db, make_group):
        group = make_group()
        group_repository.create.return_value = group

        assert await group_service.create_group(group) is group
        db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_groups(self, group_service, group_repository, make_group):
        groups = [make_group(), make_group(name="Work")]
        group_repository.list.return_value = groups
        group_repository.count.return_value = 2

        assert await group_service.list_groups(QueryParameter()) == (groups, 2)

    @pytest.mark.asyncio
    async def test_create_contact_into_missing_group_rolls_back(
        self, group_service, contact_repository, db, make_contact
    ):
        group_id = uuid4()
        contact_repository.create_contact_into_group.side_effect = NotFoundError(
            "Group not found", entity="group", entity_id=group_id
        )

        with pytest.raises(NotFoundError):
            await group_service.create_contact_into_group(group_id, make_contact())

        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_and_remove_member(self, group_service, contact_repository, db):
        group_id, contact_id = uuid4(), uuid4()

        await group_service.add_contact_to_group(group_id, contact_id)
        await group_service.delete_contact_from_group(group_id, contact_id)

        contact_repository.add_contact_to_group.assert_awaited_once_with(group_id, contact_id)
        contact_repository.delete_contact_from_group.assert_awaited_once_with(group_id, contact_id)
        assert db.commit.await_count == 2
