"""String manipulation utilities."""

import re
import unicodedata

# Letters from any script, separated by single spaces, hyphens or apostrophes.
_PERSON_NAME_PATTERN = re.compile(r"^[^\W\d_]+(?:[ '\-][^\W\d_]+)*$")

MASK_CHAR = "*"
PHONE_VISIBLE_CHARS = 4

_ALLOWED_CONTROL_CHARACTERS = frozenset("\t\n\r")


def sanitize_string(value: str) -> str:
    """Sanitize string by trimming surrounding whitespace.

    Examples:
        >>> sanitize_string("  hello world  ")
        "hello world"
    """
    if not value:
        return ""

    return value.strip()


def has_control_characters(value: str) -> bool:
    """Check for control characters other than tab and line breaks.

    PostgreSQL text columns cannot store NUL.

    Examples:
        >>> has_control_characters("line one\\nline two")
        False
        >>> has_control_characters("Fa\\x00mily")
        True
    """
    return any(
        unicodedata.category(char) == "Cc" and char not in _ALLOWED_CONTROL_CHARACTERS
        for char in value
    )


def is_person_name(value: str) -> bool:
    """Check that a value only contains name characters.

    Examples:
        >>> is_person_name("Anna-Maria")
        True
        >>> is_person_name("O'Neil")
        True
        >>> is_person_name("R2D2")
        False
    """
    return bool(_PERSON_NAME_PATTERN.match(value))


def mask_phone_number(phone_number: str) -> str:
    """Mask a phone number for logging, keeping the last digits.

    Examples:
        >>> mask_phone_number("+16502530000")
        "********0000"
    """
    if not phone_number or len(phone_number) <= PHONE_VISIBLE_CHARS:
        return MASK_CHAR * PHONE_VISIBLE_CHARS
    masked_length = len(phone_number) - PHONE_VISIBLE_CHARS
    return MASK_CHAR * masked_length + phone_number[-PHONE_VISIBLE_CHARS:]


def mask_email(email: str) -> str:
    """Mask the local part of an email address for logging.

    Examples:
        >>> mask_email("ivan.petrov@example.com")
        "i***@example.com"
    """
    if not email or "@" not in email:
        return MASK_CHAR * 3
    local, domain = email.rsplit("@", 1)
    return f"{local[:1]}{MASK_CHAR * 3}@{domain}"
