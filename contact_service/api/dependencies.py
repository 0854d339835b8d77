"""FastAPI Dependencies.

Builds per-request use case services on top of the request's database session.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings, get_settings
from ..db.database import get_db
from ..services.contact_service import ContactService
from ..services.group_service import GroupService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_contact_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> ContactService:
    """Contact use cases bound to this request's session."""
    return ContactService(db, settings)


def get_group_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> GroupService:
    """Group use cases bound to this request's session."""
    return GroupService(db, settings)
