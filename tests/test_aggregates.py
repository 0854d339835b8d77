"""
Tests for the Contact and Group aggregates.
"""

import dataclasses
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from contact_service.core.exceptions import ReconstructionError, ValidationError
from contact_service.domain.contact import Contact
from contact_service.domain.group import Group
from contact_service.domain.value_objects import Email, Gender, PhoneNumber


def stored_contact_fields(**overrides):
    now = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)
    fields = {
        "created_at": now,
        "modified_at": now,
        "phone_number": "+16502530000",
        "email": "ivan.petrov@gmail.com",
        "name": "Ivan",
        "surname": "Petrov",
        "patronymic": "Sergeevich",
        "age": 34,
        "gender": "MALE",
    }
    fields.update(overrides)
    return fields


class TestContact:
    """Test suite for the Contact aggregate"""

    def test_create_generates_identity_and_timestamps(self, sample_contact_data):
        contact = Contact.create(**sample_contact_data)

        assert isinstance(contact.id, UUID)
        assert contact.created_at.tzinfo is not None
        assert contact.created_at == contact.modified_at
        assert contact.phone_number == PhoneNumber("+16502530000")
        assert contact.email == Email("ivan.petrov@gmail.com")
        assert contact.gender is Gender.MALE
        assert contact.age.value == 34

    def test_create_generates_distinct_ids(self, make_contact):
        assert make_contact().id != make_contact().id

    def test_full_name(self, make_contact):
        assert make_contact().full_name == "Petrov Ivan Sergeevich"

    def test_create_uses_phone_region(self, make_contact):
        contact = make_contact(phone_number="020 8366 1177", phone_region="GB")
        assert contact.phone_number.value == "+442083661177"

    @pytest.mark.parametrize("field,value", [
        ("name", "R2D2"),
        ("surname", ""),
        ("patronymic", "123"),
        ("email", "not-an-email"),
        ("phone_number", "12"),
        ("age", 151),
        ("gender", "UNKNOWN"),
    ])
    def test_create_rejects_invalid_field(self, sample_contact_data, field, value):
        with pytest.raises(ValidationError) as exc_info:
            Contact.create(**{**sample_contact_data, field: value})
        assert exc_info.value.field == field

    def test_with_id_keeps_identity(self, sample_contact_data):
        contact_id = uuid4()
        now = datetime.now(UTC)

        contact = Contact.with_id(contact_id, now, now, **sample_contact_data)

        assert contact.id == contact_id
        assert contact.created_at == now

    def test_with_id_rejects_naive_timestamps(self, sample_contact_data):
        naive = datetime(2024, 1, 15, 12, 0)
        with pytest.raises(ValidationError) as exc_info:
            Contact.with_id(uuid4(), naive, naive, **sample_contact_data)
        assert exc_info.value.field == "created_at"

    def test_with_id_rejects_non_uuid(self, sample_contact_data):
        now = datetime.now(UTC)
        with pytest.raises(ValidationError):
            Contact.with_id("not-a-uuid", now, now, **sample_contact_data)

    def test_reconstruct_valid_row(self):
        contact_id = uuid4()
        contact = Contact.reconstruct(contact_id, **stored_contact_fields())
        assert contact.id == contact_id
        assert contact.surname.value == "Petrov"

    def test_reconstruct_accepts_string_id(self):
        contact_id = uuid4()
        contact = Contact.reconstruct(str(contact_id), **stored_contact_fields())
        assert contact.id == contact_id

    def test_reconstruct_invalid_row_is_internal_error(self):
        contact_id = uuid4()

        with pytest.raises(ReconstructionError) as exc_info:
            Contact.reconstruct(contact_id, **stored_contact_fields(patronymic="123"))

        error = exc_info.value
        assert error.entity == "contact"
        assert error.entity_id == contact_id
        assert error.field == "patronymic"
        assert isinstance(error.__cause__, ValidationError)

    def test_is_immutable(self, make_contact):
        contact = make_contact()
        with pytest.raises(dataclasses.FrozenInstanceError):
            contact.age = 40


class TestGroup:
    """Test suite for the Group aggregate"""

    def test_create_empty_group(self):
        group = Group.create(name="Family", description="Close relatives")

        assert isinstance(group.id, UUID)
        assert group.name.value == "Family"
        assert group.description.value == "Close relatives"
        assert group.contacts_count == 0
        assert group.contact_ids == frozenset()

    def test_description_is_optional(self):
        assert Group.create(name="Work").description.value == ""

    def test_create_rejects_empty_name(self):
        with pytest.raises(ValidationError) as exc_info:
            Group.create(name="  ")
        assert exc_info.value.field == "group_name"

    def test_membership_changes_return_new_group(self, make_group):
        group = make_group()
        contact_id = uuid4()

        with_member = group.with_contact(contact_id)

        assert with_member.has_contact(contact_id)
        assert with_member.contacts_count == 1
        assert not group.has_contact(contact_id)

        without_member = with_member.without_contact(contact_id)
        assert without_member.contacts_count == 0

    def test_adding_member_twice_keeps_one(self, make_group):
        contact_id = uuid4()
        group = make_group().with_contact(contact_id).with_contact(contact_id)
        assert group.contacts_count == 1

    def test_with_id_coerces_contact_ids(self):
        now = datetime.now(UTC)
        contact_id = uuid4()

        group = Group.with_id(uuid4(), now, now, name="Family", contact_ids=[str(contact_id)])

        assert group.contact_ids == frozenset({contact_id})

    def test_reconstruct_invalid_row_is_internal_error(self):
        now = datetime.now(UTC)
        group_id = uuid4()

        with pytest.raises(ReconstructionError) as exc_info:
            Group.reconstruct(group_id, created_at=now, modified_at=now, name="")

        assert exc_info.value.entity == "group"
        assert exc_info.value.field == "group_name"
