"""Contact Repository.

Data access layer for Contact aggregates and their group memberships.
Separates data access logic from business logic (Repository Pattern).

The repository never commits: every method runs inside the caller's unit of
work (see ``safe_transaction``) so multi-step writes are atomic.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings, get_settings
from ..core.constants import ErrorMessages
from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..domain.contact import Contact
from ..domain.query import QueryParameter, SortOptions, apply_query_parameter
from ..models.contact import CONTACT_COPY_COLUMNS, ContactModel, GroupContactModel, GroupModel
from ..utils.generators import utc_now
from .errors import translate_db_errors

logger = get_logger(__name__)

CONTACT_SORT_OPTIONS = SortOptions({
    'name': ContactModel.name,
    'surname': ContactModel.surname,
    'patronymic': ContactModel.patronymic,
    'phoneNumber': ContactModel.phone_number,
    'email': ContactModel.email,
    'gender': ContactModel.gender,
    'age': ContactModel.age,
    'createdAt': ContactModel.created_at,
    'modifiedAt': ContactModel.modified_at,
})


def contact_to_row(contact: Contact) -> tuple:
    """Map a contact to a bulk-load record in CONTACT_COPY_COLUMNS order."""
    return (
        contact.id,
        contact.created_at,
        contact.modified_at,
        contact.phone_number.value,
        contact.email.value,
        contact.name.value,
        contact.surname.value,
        contact.patronymic.value,
        contact.age.value,
        contact.gender.value,
    )


def contact_to_values(contact: Contact) -> dict:
    """Map a contact to column values for INSERT/UPDATE statements."""
    return dict(zip(CONTACT_COPY_COLUMNS, contact_to_row(contact)))


def row_to_contact(row: ContactModel) -> Contact:
    """Rebuild a Contact from a stored row.

    Raises:
        ReconstructionError: If the row no longer satisfies domain rules
    """
    return Contact.reconstruct(
        row.id,
        created_at=row.created_at,
        modified_at=row.modified_at,
        phone_number=row.phone_number,
        email=row.email,
        name=row.name,
        surname=row.surname,
        patronymic=row.patronymic,
        age=row.age,
        gender=row.gender,
    )


class ContactRepository:
    """Repository for Contact data access operations."""

    def __init__(self, db: AsyncSession, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    async def create(self, *contacts: Contact) -> list[Contact]:
        """Insert contacts with a single COPY.

        All rows are written by one COPY statement inside the caller's
        transaction, so either every contact is stored or none is.

        Args:
            *contacts: Validated contacts to store

        Returns:
            The stored contacts, in input order
        """
        if not contacts:
            return []

        records = [contact_to_row(contact) for contact in contacts]

        with translate_db_errors('contact', contacts[0].id, count=len(records)):
            driver_connection = await self._driver_connection()
            await driver_connection.copy_records_to_table(
                ContactModel.__tablename__,
                records=records,
                columns=list(CONTACT_COPY_COLUMNS)
            )

        logger.info("Contacts bulk loaded", extra={'count': len(records)})
        return list(contacts)

    async def update(self, contact: Contact) -> Contact:
        """Replace every field of an existing contact.

        created_at is kept from storage; modified_at is refreshed.

        Raises:
            NotFoundError: If no contact has contact.id
        """
        values = contact_to_values(contact)
        values.pop('id')
        values.pop('created_at')
        values['modified_at'] = utc_now()

        stmt = (
            update(ContactModel)
            .where(ContactModel.id == contact.id)
            .values(**values)
            .returning(ContactModel)
        )
        with translate_db_errors('contact', contact.id):
            result = await self.db.execute(stmt)
            row = result.scalar_one_or_none()

        if row is None:
            raise NotFoundError(
                ErrorMessages.CONTACT_NOT_FOUND.format(contact_id=contact.id),
                entity='contact',
                entity_id=contact.id
            )
        return row_to_contact(row)

    async def delete(self, contact_id: UUID) -> None:
        """Delete a contact and every membership link that references it.

        Raises:
            NotFoundError: If the contact does not exist
        """
        with translate_db_errors('contact', contact_id):
            await self.db.execute(
                delete(GroupContactModel).where(GroupContactModel.contact_id == contact_id)
            )
            result = await self.db.execute(
                delete(ContactModel).where(ContactModel.id == contact_id).returning(ContactModel.id)
            )
            deleted = result.scalar_one_or_none()

        if deleted is None:
            raise NotFoundError(
                ErrorMessages.CONTACT_NOT_FOUND.format(contact_id=contact_id),
                entity='contact',
                entity_id=contact_id
            )

    async def read_by_id(self, contact_id: UUID) -> Contact:
        """Find contact by ID.

        Raises:
            NotFoundError: If the contact does not exist
            ReconstructionError: If the stored row is invalid
        """
        with translate_db_errors('contact', contact_id):
            result = await self.db.execute(
                select(ContactModel).where(ContactModel.id == contact_id)
            )
            row = result.scalar_one_or_none()

        if row is None:
            raise NotFoundError(
                ErrorMessages.CONTACT_NOT_FOUND.format(contact_id=contact_id),
                entity='contact',
                entity_id=contact_id
            )
        return row_to_contact(row)

    async def list(self, params: QueryParameter) -> list[Contact]:
        """List contacts in a deterministic order.

        Args:
            params: Validated sort and pagination parameters

        Returns:
            One page of contacts
        """
        stmt = apply_query_parameter(
            select(ContactModel),
            params,
            CONTACT_SORT_OPTIONS,
            default_order=[ContactModel.created_at],
            tiebreaker=ContactModel.id,
            settings=self.settings
        )
        with translate_db_errors('contact'):
            result = await self.db.execute(stmt)
            rows = result.scalars().all()

        return [row_to_contact(row) for row in rows]

    async def count(self) -> int:
        """Total number of contacts."""
        with translate_db_errors('contact'):
            result = await self.db.execute(select(func.count()).select_from(ContactModel))
            return result.scalar_one()

    async def add_contact_to_group(self, group_id: UUID, contact_id: UUID) -> None:
        """Link an existing contact to a group. Linking twice is a no-op.

        Raises:
            NotFoundError: If the group or the contact does not exist
        """
        stmt = (
            pg_insert(GroupContactModel)
            .values(group_id=group_id, contact_id=contact_id)
            .on_conflict_do_nothing(index_elements=['group_id', 'contact_id'])
        )
        with translate_db_errors(
            'group_contact',
            group_id,
            not_found_message=ErrorMessages.GROUP_OR_CONTACT_NOT_FOUND.format(
                group_id=group_id, contact_id=contact_id
            ),
            contact_id=str(contact_id)
        ):
            await self.db.execute(stmt)
            await self._touch_group(group_id)

    async def delete_contact_from_group(self, group_id: UUID, contact_id: UUID) -> None:
        """Remove a contact from a group. Removing a non-member is a no-op.

        Raises:
            NotFoundError: If the group does not exist
        """
        with translate_db_errors('group_contact', group_id, contact_id=str(contact_id)):
            await self._touch_group(group_id)
            await self.db.execute(
                delete(GroupContactModel).where(
                    GroupContactModel.group_id == group_id,
                    GroupContactModel.contact_id == contact_id
                )
            )

    async def create_contact_into_group(self, group_id: UUID, contact: Contact) -> list[Contact]:
        """Create a contact and make it a member of a group.

        Both writes happen in the caller's transaction; if the link cannot be
        created the contact insert is rolled back with it.

        Raises:
            NotFoundError: If the group does not exist
        """
        created = await self.create(contact)
        for item in created:
            await self.add_contact_to_group(group_id, item.id)
        return created

    async def _touch_group(self, group_id: UUID) -> None:
        """Refresh the group's modified_at, locking its row for this transaction.

        Raises:
            NotFoundError: If the group does not exist
        """
        result = await self.db.execute(
            update(GroupModel)
            .where(GroupModel.id == group_id)
            .values(modified_at=utc_now())
            .returning(GroupModel.id)
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError(
                ErrorMessages.GROUP_NOT_FOUND.format(group_id=group_id),
                entity='group',
                entity_id=group_id
            )

    async def _driver_connection(self):
        """Return the asyncpg connection behind this session's transaction.

        The SQLAlchemy asyncpg adapter opens its transaction lazily on the first
        statement, so one is issued before handing the raw connection out;
        otherwise COPY would autocommit outside the unit of work.
        """
        connection = await self.db.connection()
        await connection.execute(select(1))
        raw_connection = await connection.get_raw_connection()
        return raw_connection.driver_connection

