"""API schemas."""

from .contact import (
    ContactCreate,
    ContactListResponse,
    ContactResponse,
    ContactUpdate,
    ErrorResponse,
    GroupCreate,
    GroupListResponse,
    GroupResponse,
    GroupUpdate,
)

__all__ = [
    "ContactCreate",
    "ContactListResponse",
    "ContactResponse",
    "ContactUpdate",
    "ErrorResponse",
    "GroupCreate",
    "GroupListResponse",
    "GroupResponse",
    "GroupUpdate",
]
