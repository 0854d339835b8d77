"""Contact Use Cases.

Orchestrates validation, repository calls and the transaction boundary for
contact operations. Every operation runs as one unit of work.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings, get_settings
from ..core.logging import get_logger
from ..domain.contact import Contact
from ..domain.query import QueryParameter
from ..repositories.contact_repository import ContactRepository
from ..utils.strings import mask_email, mask_phone_number
from ..utils.transaction_helpers import safe_transaction

logger = get_logger(__name__)


class ContactService:
    """Use cases for contacts and their group memberships."""

    def __init__(
        self,
        db: AsyncSession,
        settings: Settings | None = None,
        repository: ContactRepository | None = None
    ):
        self.db = db
        self.settings = settings or get_settings()
        self.repository = repository or ContactRepository(db, self.settings)

    def _transaction(self, context: str):
        return safe_transaction(
            self.db,
            context=context,
            statement_timeout_ms=self.settings.DB_STATEMENT_TIMEOUT_MS
        )

    async def create_contact(self, *contacts: Contact) -> list[Contact]:
        """Store one or more contacts atomically.

        Args:
            *contacts: Validated contacts

        Returns:
            The stored contacts, in input order
        """
        logger.info("Creating contacts", extra={'count': len(contacts)})

        async with self._transaction("contact creation"):
            created = await self.repository.create(*contacts)

        for contact in created:
            logger.info(
                "Contact created",
                extra={
                    'contact_id': str(contact.id),
                    'email': mask_email(contact.email.value),
                    'phone_number': mask_phone_number(contact.phone_number.value)
                }
            )
        return created

    async def update_contact(self, contact: Contact) -> Contact:
        """Replace an existing contact with a fully re-validated one.

        Raises:
            NotFoundError: If the contact does not exist
        """
        async with self._transaction("contact update"):
            updated = await self.repository.update(contact)

        logger.info("Contact updated", extra={'contact_id': str(contact.id)})
        return updated

    async def delete_contact(self, contact_id: UUID) -> None:
        """Delete a contact and its group memberships.

        Raises:
            NotFoundError: If the contact does not exist
        """
        async with self._transaction("contact deletion"):
            await self.repository.delete(contact_id)

        logger.info("Contact deleted", extra={'contact_id': str(contact_id)})

    async def list_contacts(self, params: QueryParameter) -> list[Contact]:
        """Return one page of contacts."""
        async with self._transaction("contact listing"):
            return await self.repository.list(params)

    async def count_contacts(self) -> int:
        """Return the total number of contacts."""
        async with self._transaction("contact count"):
            return await self.repository.count()

    async def list_contacts_with_total(self, params: QueryParameter) -> tuple[list[Contact], int]:
        """Return one page of contacts and the total, read in the same transaction."""
        async with self._transaction("contact listing"):
            contacts = await self.repository.list(params)
            total = await self.repository.count()
        return contacts, total

    async def read_contact_by_id(self, contact_id: UUID) -> Contact:
        """Return a contact.

        Raises:
            NotFoundError: If the contact does not exist
        """
        async with self._transaction("contact read"):
            return await self.repository.read_by_id(contact_id)
