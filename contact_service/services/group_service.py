"""Group Use Cases.

Group CRUD plus the cross-aggregate membership operations. Creating a contact
directly into a group is a single unit of work: the contact insert and the
membership link commit together or not at all.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings, get_settings
from ..core.logging import get_logger
from ..domain.contact import Contact
from ..domain.group import Group
from ..domain.query import QueryParameter
from ..repositories.contact_repository import ContactRepository
from ..repositories.group_repository import GroupRepository
from ..utils.transaction_helpers import safe_transaction

logger = get_logger(__name__)


class GroupService:
    """Use cases for groups."""

    def __init__(
        self,
        db: AsyncSession,
        settings: Settings | None = None,
        repository: GroupRepository | None = None,
        contact_repository: ContactRepository | None = None
    ):
        self.db = db
        self.settings = settings or get_settings()
        self.repository = repository or GroupRepository(db, self.settings)
        self.contact_repository = contact_repository or ContactRepository(db, self.settings)

    def _transaction(self, context: str):
        return safe_transaction(
            self.db,
            context=context,
            statement_timeout_ms=self.settings.DB_STATEMENT_TIMEOUT_MS
        )

    async def create_group(self, group: Group) -> Group:
        """Store a new group."""
        async with self._transaction("group creation"):
            created = await self.repository.create(group)
        return created

    async def update_group(self, group: Group) -> Group:
        """Replace a group's name and description.

        Raises:
            NotFoundError: If the group does not exist
        """
        async with self._transaction("group update"):
            updated = await self.repository.update(group)

        logger.info("Group updated", extra={'group_id': str(group.id)})
        return updated

    async def delete_group(self, group_id: UUID) -> None:
        """Delete a group; its member contacts are kept.

        Raises:
            NotFoundError: If the group does not exist
        """
        async with self._transaction("group deletion"):
            await self.repository.delete(group_id)

        logger.info("Group deleted", extra={'group_id': str(group_id)})

    async def read_group_by_id(self, group_id: UUID) -> Group:
        """Return a group with its member ids.

        Raises:
            NotFoundError: If the group does not exist
        """
        async with self._transaction("group read"):
            return await self.repository.read_by_id(group_id)

    async def list_groups(self, params: QueryParameter) -> tuple[list[Group], int]:
        """Return one page of groups and the total number of groups."""
        async with self._transaction("group listing"):
            groups = await self.repository.list(params)
            total = await self.repository.count()
        return groups, total

    async def create_contact_into_group(self, group_id: UUID, contact: Contact) -> list[Contact]:
        """Create a contact and add it to a group in one unit of work.

        Raises:
            NotFoundError: If the group does not exist (nothing is stored)
        """
        async with self._transaction("contact creation into group"):
            created = await self.contact_repository.create_contact_into_group(group_id, contact)

        logger.info(
            "Contact created into group",
            extra={'group_id': str(group_id), 'contact_id': str(contact.id)}
        )
        return created

    async def add_contact_to_group(self, group_id: UUID, contact_id: UUID) -> None:
        """Add an existing contact to a group.

        Raises:
            NotFoundError: If the group or contact does not exist
        """
        async with self._transaction("add contact to group"):
            await self.contact_repository.add_contact_to_group(group_id, contact_id)

        logger.info(
            "Contact added to group",
            extra={'group_id': str(group_id), 'contact_id': str(contact_id)}
        )

    async def delete_contact_from_group(self, group_id: UUID, contact_id: UUID) -> None:
        """Remove a contact from a group.

        Raises:
            NotFoundError: If the group does not exist
        """
        async with self._transaction("delete contact from group"):
            await self.contact_repository.delete_contact_from_group(group_id, contact_id)

        logger.info(
            "Contact removed from group",
            extra={'group_id': str(group_id), 'contact_id': str(contact_id)}
        )
