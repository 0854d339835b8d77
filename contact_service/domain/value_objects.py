"""Domain Value Objects.

Self-validating, immutable wrappers around the scalar fields of contacts and
groups. Constructing one is the only way to obtain it; invalid input raises
ValidationError and no instance is produced.
"""

import enum
from dataclasses import InitVar, dataclass
from datetime import datetime
from typing import Any, ClassVar
from uuid import UUID

import phonenumbers
from email_validator import EmailNotValidError, validate_email

from ..core.constants import ErrorMessages, GenderValues, ValidationLimits
from ..core.exceptions import ValidationError
from ..utils.strings import has_control_characters, is_person_name, sanitize_string


def _require_text(raw: Any, field: str) -> str:
    if raw is None:
        raise ValidationError(ErrorMessages.FIELD_REQUIRED.format(field=field), field=field)
    if not isinstance(raw, str):
        raise ValidationError(ErrorMessages.FIELD_NOT_STRING.format(field=field), field=field)
    if has_control_characters(raw):
        raise ValidationError(
            ErrorMessages.FIELD_CONTROL_CHARACTERS.format(field=field), field=field
        )
    return sanitize_string(raw)


def _check_length(value: str, field: str, max_length: int) -> None:
    if len(value) > max_length:
        raise ValidationError(
            ErrorMessages.FIELD_TOO_LONG.format(field=field, max_length=max_length),
            field=field
        )


@dataclass(frozen=True)
class _PersonNamePart:
    """Shared rule for name, surname and patronymic."""

    FIELD: ClassVar[str] = "name"
    MAX_LENGTH: ClassVar[int] = ValidationLimits.NAME_MAX_LENGTH

    value: str

    def __post_init__(self):
        value = _require_text(self.value, self.FIELD)
        if len(value) < ValidationLimits.NAME_MIN_LENGTH:
            raise ValidationError(
                ErrorMessages.FIELD_REQUIRED.format(field=self.FIELD), field=self.FIELD
            )
        _check_length(value, self.FIELD, self.MAX_LENGTH)
        if not is_person_name(value):
            raise ValidationError(
                ErrorMessages.FIELD_INVALID_CHARACTERS.format(field=self.FIELD),
                field=self.FIELD
            )
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Name(_PersonNamePart):
    """Given name."""

    FIELD: ClassVar[str] = "name"
    MAX_LENGTH: ClassVar[int] = ValidationLimits.NAME_MAX_LENGTH


@dataclass(frozen=True)
class Surname(_PersonNamePart):
    """Family name."""

    FIELD: ClassVar[str] = "surname"
    MAX_LENGTH: ClassVar[int] = ValidationLimits.SURNAME_MAX_LENGTH


@dataclass(frozen=True)
class Patronymic(_PersonNamePart):
    """Name derived from the father's given name."""

    FIELD: ClassVar[str] = "patronymic"
    MAX_LENGTH: ClassVar[int] = ValidationLimits.PATRONYMIC_MAX_LENGTH


@dataclass(frozen=True)
class Age:
    """Age in whole years."""

    value: int

    def __post_init__(self):
        # bool is an int subclass; True is not an age
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(ErrorMessages.AGE_NOT_INTEGER, field="age")
        if not ValidationLimits.AGE_MIN <= self.value <= ValidationLimits.AGE_MAX:
            raise ValidationError(
                ErrorMessages.AGE_OUT_OF_RANGE.format(
                    min_age=ValidationLimits.AGE_MIN,
                    max_age=ValidationLimits.AGE_MAX
                ),
                field="age"
            )

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class PhoneNumber:
    """Phone number normalized to E.164.

    Numbers without a leading "+" need a default_region (ISO 3166-1 alpha-2)
    to be parsed. Numbers that libphonenumber does not consider valid are
    rejected.

    Examples:
        >>> PhoneNumber("+1 650-253-0000").value
        "+16502530000"
        >>> PhoneNumber("020 8366 1177", default_region="GB").value
        "+442083661177"
    """

    value: str
    default_region: InitVar[str | None] = None

    def __post_init__(self, default_region: str | None):
        raw = _require_text(self.value, "phone_number")
        if not raw:
            raise ValidationError(
                ErrorMessages.FIELD_REQUIRED.format(field="phone_number"), field="phone_number"
            )
        _check_length(raw, "phone_number", ValidationLimits.PHONE_NUMBER_INPUT_MAX_LENGTH)

        try:
            parsed = phonenumbers.parse(raw, default_region)
        except phonenumbers.NumberParseException as e:
            raise ValidationError(
                ErrorMessages.PHONE_NUMBER_INVALID, field="phone_number", reason=str(e)
            ) from e

        if not phonenumbers.is_valid_number(parsed):
            raise ValidationError(ErrorMessages.PHONE_NUMBER_INVALID, field="phone_number")

        normalized = phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Email:
    """Syntactically valid email address in normalized form.

    Deliverability (DNS) is not checked: construction stays pure.
    """

    value: str

    def __post_init__(self):
        raw = _require_text(self.value, "email")
        if not raw:
            raise ValidationError(ErrorMessages.FIELD_REQUIRED.format(field="email"), field="email")
        _check_length(raw, "email", ValidationLimits.EMAIL_MAX_LENGTH)

        try:
            validated = validate_email(raw, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValidationError(
                ErrorMessages.EMAIL_INVALID.format(reason=str(e)), field="email"
            ) from e

        object.__setattr__(self, "value", validated.normalized)

    def __str__(self) -> str:
        return self.value


class Gender(str, enum.Enum):
    """Closed gender enumeration."""
    MALE = GenderValues.MALE
    FEMALE = GenderValues.FEMALE

    @classmethod
    def parse(cls, raw: Any) -> "Gender":
        """Build a Gender from user or storage input.

        Args:
            raw: Gender member or its name in any letter case

        Returns:
            The matching Gender

        Raises:
            ValidationError: If raw is not one of the allowed values
        """
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            try:
                return cls(raw.strip().upper())
            except ValueError:
                pass
        raise ValidationError(
            ErrorMessages.GENDER_INVALID.format(allowed=", ".join(GenderValues.ALL)),
            field="gender"
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GroupName:
    """Display name of a group."""

    value: str

    def __post_init__(self):
        value = _require_text(self.value, "group_name")
        if not value:
            raise ValidationError(
                ErrorMessages.FIELD_REQUIRED.format(field="group_name"), field="group_name"
            )
        _check_length(value, "group_name", ValidationLimits.GROUP_NAME_MAX_LENGTH)
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GroupDescription:
    """Free-text group description; may be empty."""

    value: str = ""

    def __post_init__(self):
        value = "" if self.value is None else _require_text(self.value, "description")
        _check_length(value, "description", ValidationLimits.GROUP_DESCRIPTION_MAX_LENGTH)
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


def as_value_object(value_type: type, raw: Any, **kwargs: Any) -> Any:
    """Return raw unchanged if it already is a value_type, otherwise build one."""
    if isinstance(raw, value_type):
        return raw
    return value_type(raw, **kwargs)


def require_uuid(raw: Any, field: str = "id") -> UUID:
    """Coerce raw into a UUID or raise ValidationError."""
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field} must be a UUID", field=field) from e


def require_utc_datetime(raw: Any, field: str) -> datetime:
    """Accept only timezone-aware datetimes."""
    if not isinstance(raw, datetime) or raw.tzinfo is None:
        raise ValidationError(f"{field} must be a timezone-aware datetime", field=field)
    return raw
