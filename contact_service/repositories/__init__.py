"""Repository Layer.

Data access layer following Repository Pattern.
Separates data access logic from business logic.
"""

from .contact_repository import CONTACT_SORT_OPTIONS, ContactRepository
from .group_repository import GROUP_SORT_OPTIONS, GroupRepository

__all__ = [
    'CONTACT_SORT_OPTIONS',
    'ContactRepository',
    'GROUP_SORT_OPTIONS',
    'GroupRepository',
]
