"""Domain layer: value objects, aggregates and list query parameters."""

from .contact import Contact
from .group import Group
from .query import Pagination, QueryParameter, Sort, SortOptions, build_query_parameter
from .value_objects import (
    Age,
    Email,
    Gender,
    GroupDescription,
    GroupName,
    Name,
    Patronymic,
    PhoneNumber,
    Surname,
)

__all__ = [
    "Age",
    "Contact",
    "Email",
    "Gender",
    "Group",
    "GroupDescription",
    "GroupName",
    "Name",
    "Pagination",
    "Patronymic",
    "PhoneNumber",
    "QueryParameter",
    "Sort",
    "SortOptions",
    "Surname",
    "build_query_parameter",
]
