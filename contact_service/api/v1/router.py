"""API v1 Router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from .endpoints import contacts, groups

api_router = APIRouter()

api_router.include_router(
    contacts.router,
    prefix="/contacts",
    tags=["Contacts"]
)

api_router.include_router(
    groups.router,
    prefix="/groups",
    tags=["Groups"]
)
