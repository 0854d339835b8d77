"""Tests for string utilities."""

import pytest

from contact_service.utils.strings import (
    has_control_characters,
    is_person_name,
    mask_email,
    mask_phone_number,
    sanitize_string,
)


@pytest.mark.parametrize("value,expected", [
    ("  hello world  ", "hello world"),
    ("", ""),
    (None, ""),
])
def test_sanitize_string(value, expected):
    assert sanitize_string(value) == expected


@pytest.mark.parametrize("value,expected", [
    ("Fa\x00mily", True),
    ("bell\x07", True),
    ("\x7f", True),
    ("first line\nsecond line", False),
    ("tab\tseparated\r\n", False),
    ("Семья", False),
])
def test_has_control_characters(value, expected):
    assert has_control_characters(value) is expected


@pytest.mark.parametrize("value,expected", [
    ("Anna-Maria", True),
    ("O'Neil", True),
    ("Ivan Petrov", True),
    ("R2D2", False),
    ("Ivan  Petrov", False),
    ("snake_case", False),
])
def test_is_person_name(value, expected):
    assert is_person_name(value) is expected


def test_mask_phone_number():
    assert mask_phone_number("+16502530000") == "********0000"
    assert mask_phone_number("123") == "****"


def test_mask_email():
    assert mask_email("ivan.petrov@gmail.com") == "i***@gmail.com"
    assert mask_email("broken") == "***"
