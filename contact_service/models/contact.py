"""SQLAlchemy Models for Contacts and Groups.

Storage rows only; domain rules live in the aggregates. Repositories translate
between these rows and ``Contact``/``Group``.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    SmallInteger,
    String,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import UUID as PGUUID

from ..core.constants import DatabaseLimits, GenderValues, TableNames, ValidationLimits
from ..db.database import Base


class ContactModel(Base):
    """Contact row."""

    __tablename__ = TableNames.CONTACT

    __table_args__ = (
        CheckConstraint(
            f"age BETWEEN {ValidationLimits.AGE_MIN} AND {ValidationLimits.AGE_MAX}",
            name='ck_contact_age_range'
        ),
        CheckConstraint(
            "gender IN (" + ", ".join(f"'{g}'" for g in GenderValues.ALL) + ")",
            name='ck_contact_gender'
        ),
        Index('idx_contact_created_at_id', 'created_at', 'id'),
    )

    id = Column(PGUUID(as_uuid=True), primary_key=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP")
    )
    modified_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP")
    )
    phone_number = Column(String(ValidationLimits.PHONE_NUMBER_MAX_LENGTH), nullable=False)
    email = Column(String(ValidationLimits.EMAIL_MAX_LENGTH), nullable=False)
    name = Column(String(ValidationLimits.NAME_MAX_LENGTH), nullable=False)
    surname = Column(String(ValidationLimits.SURNAME_MAX_LENGTH), nullable=False)
    patronymic = Column(String(ValidationLimits.PATRONYMIC_MAX_LENGTH), nullable=False)
    age = Column(SmallInteger, nullable=False)
    gender = Column(String(DatabaseLimits.GENDER_MAX_LENGTH), nullable=False)

    def __repr__(self):
        return f"<ContactModel(id={self.id}, surname={self.surname}, name={self.name})>"


class GroupModel(Base):
    """Group row."""

    __tablename__ = TableNames.GROUP

    __table_args__ = (
        Index('idx_group_created_at_id', 'created_at', 'id'),
    )

    id = Column(PGUUID(as_uuid=True), primary_key=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP")
    )
    modified_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP")
    )
    name = Column(String(ValidationLimits.GROUP_NAME_MAX_LENGTH), nullable=False)
    description = Column(Text, nullable=False, server_default=text("''"))

    def __repr__(self):
        return f"<GroupModel(id={self.id}, name={self.name})>"


class GroupContactModel(Base):
    """Membership link between a group and a contact."""

    __tablename__ = TableNames.GROUP_CONTACT

    __table_args__ = (
        Index('idx_group_contact_contact_id', 'contact_id'),
    )

    group_id = Column(
        PGUUID(as_uuid=True),
        ForeignKey(f'{TableNames.GROUP}.id', ondelete='CASCADE'),
        primary_key=True
    )
    contact_id = Column(
        PGUUID(as_uuid=True),
        ForeignKey(f'{TableNames.CONTACT}.id', ondelete='CASCADE'),
        primary_key=True
    )

    def __repr__(self):
        return f"<GroupContactModel(group={self.group_id}, contact={self.contact_id})>"


# Column order used by the bulk loader; must match ContactRepository's row mapping.
CONTACT_COPY_COLUMNS = (
    'id',
    'created_at',
    'modified_at',
    'phone_number',
    'email',
    'name',
    'surname',
    'patronymic',
    'age',
    'gender',
)
