"""Pydantic Schemas for API Request/Response Validation.

These schemas only check JSON shape and types. Domain rules are enforced by the
value objects when the request is turned into an aggregate.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ..domain.contact import Contact
from ..domain.group import Group


class ContactBase(BaseModel):
    """Fields a client supplies for a contact."""
    phone_number: str = Field(..., examples=["+16502530000"])
    email: str = Field(..., examples=["ivan.petrov@gmail.com"])
    name: str = Field(..., examples=["Ivan"])
    surname: str = Field(..., examples=["Petrov"])
    patronymic: str = Field(..., examples=["Sergeevich"])
    age: int = Field(..., examples=[34])
    gender: str = Field(..., examples=["MALE"])


class ContactCreate(ContactBase):
    """Schema for creating a contact."""

    def to_domain(self, phone_region: str | None = None) -> Contact:
        """Build a new Contact.

        Raises:
            ValidationError: If any field breaks a domain rule
        """
        return Contact.create(
            phone_number=self.phone_number,
            email=self.email,
            name=self.name,
            surname=self.surname,
            patronymic=self.patronymic,
            age=self.age,
            gender=self.gender,
            phone_region=phone_region,
        )


class ContactUpdate(ContactBase):
    """Schema for replacing a contact; every field is required."""

    def to_domain(
        self,
        contact_id: UUID,
        now: datetime,
        phone_region: str | None = None
    ) -> Contact:
        """Build the replacement Contact for contact_id.

        created_at is ignored by the repository, which keeps the stored value.
        """
        return Contact.with_id(
            contact_id,
            now,
            now,
            phone_number=self.phone_number,
            email=self.email,
            name=self.name,
            surname=self.surname,
            patronymic=self.patronymic,
            age=self.age,
            gender=self.gender,
            phone_region=phone_region,
        )


class ContactResponse(BaseModel):
    """Schema for contact response."""
    id: UUID
    created_at: datetime
    modified_at: datetime
    phone_number: str
    email: str
    name: str
    surname: str
    patronymic: str
    full_name: str
    age: int
    gender: str

    @classmethod
    def from_domain(cls, contact: Contact) -> "ContactResponse":
        return cls(
            id=contact.id,
            created_at=contact.created_at,
            modified_at=contact.modified_at,
            phone_number=contact.phone_number.value,
            email=contact.email.value,
            name=contact.name.value,
            surname=contact.surname.value,
            patronymic=contact.patronymic.value,
            full_name=contact.full_name,
            age=contact.age.value,
            gender=contact.gender.value,
        )


class ContactListResponse(BaseModel):
    """Schema for paginated contact list response."""
    total: int
    limit: int
    offset: int
    list: list[ContactResponse]


class GroupBase(BaseModel):
    """Fields a client supplies for a group."""
    name: str = Field(..., examples=["Family"])
    description: str = Field(default="", examples=["Close relatives"])


class GroupCreate(GroupBase):
    """Schema for creating a group."""

    def to_domain(self) -> Group:
        return Group.create(name=self.name, description=self.description)


class GroupUpdate(GroupBase):
    """Schema for replacing a group's name and description."""

    def to_domain(self, group_id: UUID, now: datetime) -> Group:
        return Group.with_id(group_id, now, now, name=self.name, description=self.description)


class GroupResponse(BaseModel):
    """Schema for group response."""
    id: UUID
    created_at: datetime
    modified_at: datetime
    name: str
    description: str
    contacts_count: int
    contact_ids: list[UUID]

    @classmethod
    def from_domain(cls, group: Group) -> "GroupResponse":
        return cls(
            id=group.id,
            created_at=group.created_at,
            modified_at=group.modified_at,
            name=group.name.value,
            description=group.description.value,
            contacts_count=group.contacts_count,
            contact_ids=sorted(group.contact_ids),
        )


class GroupListResponse(BaseModel):
    """Schema for paginated group list response."""
    total: int
    limit: int
    offset: int
    list: list[GroupResponse]


class ErrorResponse(BaseModel):
    """Schema for error responses."""
    detail: str
    error_type: str
    field: str | None = None
    request_id: str | None = None
