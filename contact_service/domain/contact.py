"""Contact Aggregate.

A contact is built from value objects plus identity and timestamps. Every entry
point (fresh creation, construction with an existing identity, reconstruction
from storage) goes through the same validation in ``__post_init__``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from ..core.exceptions import ReconstructionError, ValidationError
from ..utils.generators import generate_entity_id, utc_now
from .value_objects import (
    Age,
    Email,
    Gender,
    Name,
    Patronymic,
    PhoneNumber,
    Surname,
    as_value_object,
    require_utc_datetime,
    require_uuid,
)


@dataclass(frozen=True)
class Contact:
    """Contact aggregate.

    Use ``Contact.create`` for new contacts and ``Contact.with_id`` when the
    identity already exists (updates). Instances are immutable; an update is a
    new Contact with the same id.
    """

    id: UUID
    created_at: datetime
    modified_at: datetime
    phone_number: PhoneNumber
    email: Email
    name: Name
    surname: Surname
    patronymic: Patronymic
    age: Age
    gender: Gender

    def __post_init__(self):
        object.__setattr__(self, "id", require_uuid(self.id))
        object.__setattr__(self, "created_at", require_utc_datetime(self.created_at, "created_at"))
        object.__setattr__(self, "modified_at", require_utc_datetime(self.modified_at, "modified_at"))
        object.__setattr__(self, "phone_number", as_value_object(PhoneNumber, self.phone_number))
        object.__setattr__(self, "email", as_value_object(Email, self.email))
        object.__setattr__(self, "name", as_value_object(Name, self.name))
        object.__setattr__(self, "surname", as_value_object(Surname, self.surname))
        object.__setattr__(self, "patronymic", as_value_object(Patronymic, self.patronymic))
        object.__setattr__(self, "age", as_value_object(Age, self.age))
        object.__setattr__(self, "gender", Gender.parse(self.gender))

    @classmethod
    def create(
        cls,
        phone_number: PhoneNumber | str,
        email: Email | str,
        name: Name | str,
        surname: Surname | str,
        patronymic: Patronymic | str,
        age: Age | int,
        gender: Gender | str,
        phone_region: str | None = None,
    ) -> Contact:
        """Create a brand-new contact with a generated id and current timestamps.

        Args:
            phone_number: Phone number (raw string or PhoneNumber)
            email: Email address (raw string or Email)
            name: Given name
            surname: Family name
            patronymic: Patronymic
            age: Age in years
            gender: Gender member or name
            phone_region: Region used to parse phone numbers without a "+" prefix

        Returns:
            The new Contact

        Raises:
            ValidationError: If any field is invalid
        """
        now = utc_now()
        return cls.with_id(
            generate_entity_id(),
            now,
            now,
            phone_number=phone_number,
            email=email,
            name=name,
            surname=surname,
            patronymic=patronymic,
            age=age,
            gender=gender,
            phone_region=phone_region,
        )

    @classmethod
    def with_id(
        cls,
        contact_id: UUID,
        created_at: datetime,
        modified_at: datetime,
        phone_number: PhoneNumber | str,
        email: Email | str,
        name: Name | str,
        surname: Surname | str,
        patronymic: Patronymic | str,
        age: Age | int,
        gender: Gender | str,
        phone_region: str | None = None,
    ) -> Contact:
        """Build a contact with an externally supplied identity and timestamps.

        Raises:
            ValidationError: If any field is invalid
        """
        return cls(
            id=contact_id,
            created_at=created_at,
            modified_at=modified_at,
            phone_number=as_value_object(PhoneNumber, phone_number, default_region=phone_region),
            email=email,
            name=name,
            surname=surname,
            patronymic=patronymic,
            age=age,
            gender=gender,
        )

    @classmethod
    def reconstruct(cls, contact_id: Any, **fields: Any) -> Contact:
        """Rebuild a contact from its stored representation.

        A stored value that no longer satisfies the domain rules is a data
        integrity problem, not a client fault.

        Raises:
            ReconstructionError: If the stored data fails validation
        """
        try:
            return cls.with_id(contact_id, **fields)
        except ValidationError as e:
            raise ReconstructionError(
                f"Stored contact {contact_id} is invalid: {e.message}",
                entity="contact",
                entity_id=contact_id,
                field=e.field,
            ) from e

    @property
    def full_name(self) -> str:
        return f"{self.surname} {self.name} {self.patronymic}"
