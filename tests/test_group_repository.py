"""
Integration tests for GroupRepository against PostgreSQL.
"""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from contact_service.core.exceptions import NotFoundError
from contact_service.domain.group import Group
from contact_service.domain.query import QueryParameter, build_query_parameter
from contact_service.repositories.contact_repository import ContactRepository
from contact_service.repositories.group_repository import GROUP_SORT_OPTIONS, GroupRepository
from contact_service.utils.transaction_helpers import safe_transaction

pytestmark = pytest.mark.db


async def store_groups(test_db, settings, *groups):
    async with test_db() as db:
        async with safe_transaction(db, "test setup"):
            repository = GroupRepository(db, settings)
            for group in groups:
                await repository.create(group)


@pytest.mark.asyncio
async def test_create_and_read(test_db, settings, make_group):
    group = make_group()

    await store_groups(test_db, settings, group)

    async with test_db() as db:
        stored = await GroupRepository(db, settings).read_by_id(group.id)

    assert stored.name.value == "Family"
    assert stored.description.value == "Close relatives"
    assert stored.contacts_count == 0


@pytest.mark.asyncio
async def test_create_with_initial_members(test_db, settings, make_contact):
    contacts = [make_contact(), make_contact(name="Petr")]
    async with test_db() as db:
        async with safe_transaction(db):
            await ContactRepository(db, settings).create(*contacts)

    now = datetime.now(UTC)
    group = Group.with_id(uuid4(), now, now, name="Friends", contact_ids=[c.id for c in contacts])
    await store_groups(test_db, settings, group)

    async with test_db() as db:
        stored = await GroupRepository(db, settings).read_by_id(group.id)

    assert stored.contact_ids == frozenset(c.id for c in contacts)


@pytest.mark.asyncio
async def test_create_with_unknown_member_stores_nothing(test_db, settings, row_count):
    now = datetime.now(UTC)
    group = Group.with_id(uuid4(), now, now, name="Friends", contact_ids=[uuid4()])

    with pytest.raises(NotFoundError):
        await store_groups(test_db, settings, group)

    assert await row_count("group") == 0


@pytest.mark.asyncio
async def test_update(test_db, settings, make_group):
    group = make_group()
    await store_groups(test_db, settings, group)
    now = datetime.now(UTC)

    async with test_db() as db:
        async with safe_transaction(db):
            updated = await GroupRepository(db, settings).update(
                Group.with_id(group.id, now, now, name="Relatives", description="")
            )

    assert updated.name.value == "Relatives"
    assert updated.description.value == ""
    assert updated.created_at == group.created_at


@pytest.mark.asyncio
async def test_update_missing_group(test_db, settings, make_group):
    async with test_db() as db:
        with pytest.raises(NotFoundError):
            async with safe_transaction(db):
                await GroupRepository(db, settings).update(make_group())


@pytest.mark.asyncio
async def test_delete_keeps_contacts(test_db, settings, make_contact, make_group, row_count):
    contact = make_contact()
    group = make_group()
    async with test_db() as db:
        async with safe_transaction(db):
            await ContactRepository(db, settings).create(contact)
            await GroupRepository(db, settings).create(group)
            await ContactRepository(db, settings).add_contact_to_group(group.id, contact.id)

    async with test_db() as db:
        async with safe_transaction(db):
            await GroupRepository(db, settings).delete(group.id)

    assert await row_count("group") == 0
    assert await row_count("group_contact") == 0
    assert await row_count("contact") == 1


@pytest.mark.asyncio
async def test_delete_missing_group(test_db, settings):
    async with test_db() as db:
        with pytest.raises(NotFoundError):
            async with safe_transaction(db):
                await GroupRepository(db, settings).delete(uuid4())


@pytest.mark.asyncio
async def test_list_sorted_with_members(test_db, settings, make_contact, make_group):
    contact = make_contact()
    work, family, clubs = make_group("Work"), make_group("Family"), make_group("Clubs")
    async with test_db() as db:
        async with safe_transaction(db):
            await ContactRepository(db, settings).create(contact)
    await store_groups(test_db, settings, work, family, clubs)
    async with test_db() as db:
        async with safe_transaction(db):
            await ContactRepository(db, settings).add_contact_to_group(family.id, contact.id)

    params = build_query_parameter(GROUP_SORT_OPTIONS, sort="name", settings=settings)
    async with test_db() as db:
        repository = GroupRepository(db, settings)
        listed = await repository.list(params)
        total = await repository.count()

    assert [group.name.value for group in listed] == ["Clubs", "Family", "Work"]
    assert [group.contacts_count for group in listed] == [0, 1, 0]
    assert total == 3


@pytest.mark.asyncio
async def test_list_empty(test_db, settings):
    async with test_db() as db:
        assert await GroupRepository(db, settings).list(QueryParameter()) == []
