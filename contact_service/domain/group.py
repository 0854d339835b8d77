"""Group Aggregate.

A group owns its membership links (contact ids), never the contacts themselves.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any
from uuid import UUID

from ..core.exceptions import ReconstructionError, ValidationError
from ..utils.generators import generate_entity_id, utc_now
from .value_objects import (
    GroupDescription,
    GroupName,
    as_value_object,
    require_utc_datetime,
    require_uuid,
)


@dataclass(frozen=True)
class Group:
    """Group aggregate with a set of member contact ids."""

    id: UUID
    created_at: datetime
    modified_at: datetime
    name: GroupName
    description: GroupDescription = field(default_factory=GroupDescription)
    contact_ids: frozenset[UUID] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "id", require_uuid(self.id))
        object.__setattr__(self, "created_at", require_utc_datetime(self.created_at, "created_at"))
        object.__setattr__(self, "modified_at", require_utc_datetime(self.modified_at, "modified_at"))
        object.__setattr__(self, "name", as_value_object(GroupName, self.name))
        object.__setattr__(self, "description", as_value_object(GroupDescription, self.description))
        object.__setattr__(
            self,
            "contact_ids",
            frozenset(require_uuid(cid, "contact_id") for cid in (self.contact_ids or ())),
        )

    @classmethod
    def create(cls, name: GroupName | str, description: GroupDescription | str = "") -> Group:
        """Create a new, empty group with a generated id.

        Raises:
            ValidationError: If name or description is invalid
        """
        now = utc_now()
        return cls.with_id(generate_entity_id(), now, now, name=name, description=description)

    @classmethod
    def with_id(
        cls,
        group_id: UUID,
        created_at: datetime,
        modified_at: datetime,
        name: GroupName | str,
        description: GroupDescription | str = "",
        contact_ids: Iterable[UUID] = (),
    ) -> Group:
        """Build a group with an externally supplied identity and timestamps."""
        return cls(
            id=group_id,
            created_at=created_at,
            modified_at=modified_at,
            name=name,
            description=description,
            contact_ids=frozenset(contact_ids),
        )

    @classmethod
    def reconstruct(cls, group_id: Any, **fields: Any) -> Group:
        """Rebuild a group from storage.

        Raises:
            ReconstructionError: If the stored data fails validation
        """
        try:
            return cls.with_id(group_id, **fields)
        except ValidationError as e:
            raise ReconstructionError(
                f"Stored group {group_id} is invalid: {e.message}",
                entity="group",
                entity_id=group_id,
                field=e.field,
            ) from e

    def with_contact(self, contact_id: UUID) -> Group:
        """Return a copy that includes contact_id as a member."""
        return replace(self, contact_ids=self.contact_ids | {contact_id})

    def without_contact(self, contact_id: UUID) -> Group:
        """Return a copy without contact_id."""
        return replace(self, contact_ids=self.contact_ids - {contact_id})

    def has_contact(self, contact_id: UUID) -> bool:
        return contact_id in self.contact_ids

    @property
    def contacts_count(self) -> int:
        return len(self.contact_ids)
