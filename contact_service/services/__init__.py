"""Use case layer."""

from .contact_service import ContactService
from .group_service import GroupService

__all__ = ["ContactService", "GroupService"]
