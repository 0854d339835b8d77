"""Models package.

Export all models for easy importing
"""

from .contact import CONTACT_COPY_COLUMNS, ContactModel, GroupContactModel, GroupModel

__all__ = [
    "CONTACT_COPY_COLUMNS",
    "ContactModel",
    "GroupContactModel",
    "GroupModel",
]
