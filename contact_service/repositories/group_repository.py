"""Group Repository.

Data access layer for Group aggregates. Membership links are loaded with the
group; linking and unlinking contacts lives in ContactRepository.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings, get_settings
from ..core.constants import ErrorMessages
from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..domain.group import Group
from ..domain.query import QueryParameter, SortOptions, apply_query_parameter
from ..models.contact import GroupContactModel, GroupModel
from ..utils.generators import utc_now
from .errors import translate_db_errors

logger = get_logger(__name__)

GROUP_SORT_OPTIONS = SortOptions({
    'name': GroupModel.name,
    'description': GroupModel.description,
    'createdAt': GroupModel.created_at,
    'modifiedAt': GroupModel.modified_at,
})


def row_to_group(row: GroupModel, contact_ids: Iterable[UUID] = ()) -> Group:
    """Rebuild a Group from its row and membership links.

    Raises:
        ReconstructionError: If the row no longer satisfies domain rules
    """
    return Group.reconstruct(
        row.id,
        created_at=row.created_at,
        modified_at=row.modified_at,
        name=row.name,
        description=row.description,
        contact_ids=contact_ids,
    )


class GroupRepository:
    """Repository for Group data access operations."""

    def __init__(self, db: AsyncSession, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    async def create(self, group: Group) -> Group:
        """Insert a group together with any initial members.

        Raises:
            ConflictError: If a group with the same id exists
            NotFoundError: If an initial member does not exist
        """
        with translate_db_errors('group', group.id):
            await self.db.execute(
                insert(GroupModel).values(
                    id=group.id,
                    created_at=group.created_at,
                    modified_at=group.modified_at,
                    name=group.name.value,
                    description=group.description.value,
                )
            )
            if group.contact_ids:
                await self.db.execute(
                    insert(GroupContactModel),
                    [
                        {'group_id': group.id, 'contact_id': contact_id}
                        for contact_id in sorted(group.contact_ids)
                    ]
                )

        logger.info(
            "Group created",
            extra={'group_id': str(group.id), 'contacts_count': group.contacts_count}
        )
        return group

    async def update(self, group: Group) -> Group:
        """Replace the group's name and description.

        Membership is changed through the contact/group link operations only.

        Raises:
            NotFoundError: If the group does not exist
        """
        stmt = (
            update(GroupModel)
            .where(GroupModel.id == group.id)
            .values(
                name=group.name.value,
                description=group.description.value,
                modified_at=utc_now(),
            )
            .returning(GroupModel)
        )
        with translate_db_errors('group', group.id):
            result = await self.db.execute(stmt)
            row = result.scalar_one_or_none()

        if row is None:
            raise NotFoundError(
                ErrorMessages.GROUP_NOT_FOUND.format(group_id=group.id),
                entity='group',
                entity_id=group.id
            )
        return row_to_group(row, await self._contact_ids(group.id))

    async def delete(self, group_id: UUID) -> None:
        """Delete a group and its membership links; contacts are kept.

        Raises:
            NotFoundError: If the group does not exist
        """
        with translate_db_errors('group', group_id):
            await self.db.execute(
                delete(GroupContactModel).where(GroupContactModel.group_id == group_id)
            )
            result = await self.db.execute(
                delete(GroupModel).where(GroupModel.id == group_id).returning(GroupModel.id)
            )
            deleted = result.scalar_one_or_none()

        if deleted is None:
            raise NotFoundError(
                ErrorMessages.GROUP_NOT_FOUND.format(group_id=group_id),
                entity='group',
                entity_id=group_id
            )

    async def read_by_id(self, group_id: UUID) -> Group:
        """Find group by ID, including its members.

        Raises:
            NotFoundError: If the group does not exist
        """
        with translate_db_errors('group', group_id):
            result = await self.db.execute(select(GroupModel).where(GroupModel.id == group_id))
            row = result.scalar_one_or_none()

        if row is None:
            raise NotFoundError(
                ErrorMessages.GROUP_NOT_FOUND.format(group_id=group_id),
                entity='group',
                entity_id=group_id
            )
        return row_to_group(row, await self._contact_ids(group_id))

    async def list(self, params: QueryParameter) -> list[Group]:
        """List groups in a deterministic order, members included."""
        stmt = apply_query_parameter(
            select(GroupModel),
            params,
            GROUP_SORT_OPTIONS,
            default_order=[GroupModel.created_at],
            tiebreaker=GroupModel.id,
            settings=self.settings
        )
        with translate_db_errors('group'):
            result = await self.db.execute(stmt)
            rows = result.scalars().all()

            members: dict[UUID, set[UUID]] = defaultdict(set)
            if rows:
                links = await self.db.execute(
                    select(GroupContactModel.group_id, GroupContactModel.contact_id)
                    .where(GroupContactModel.group_id.in_([row.id for row in rows]))
                )
                for group_id, contact_id in links.all():
                    members[group_id].add(contact_id)

        return [row_to_group(row, members[row.id]) for row in rows]

    async def count(self) -> int:
        """Total number of groups."""
        with translate_db_errors('group'):
            result = await self.db.execute(select(func.count()).select_from(GroupModel))
            return result.scalar_one()

    async def _contact_ids(self, group_id: UUID) -> set[UUID]:
        with translate_db_errors('group', group_id):
            result = await self.db.execute(
                select(GroupContactModel.contact_id).where(GroupContactModel.group_id == group_id)
            )
            return set(result.scalars().all())
