"""Group Endpoints.

RESTful API endpoints for groups and group membership.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from ....core.config import Settings
from ....domain.query import build_query_parameter
from ....repositories.group_repository import GROUP_SORT_OPTIONS
from ....schemas.contact import (
    ContactCreate,
    ContactResponse,
    ErrorResponse,
    GroupCreate,
    GroupListResponse,
    GroupResponse,
    GroupUpdate,
)
from ....services.group_service import GroupService
from ....utils.generators import utc_now
from ...dependencies import get_app_settings, get_group_service

router = APIRouter()


@router.post(
    "",
    response_model=GroupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a group",
    responses={400: {"model": ErrorResponse, "description": "Validation error"}}
)
async def create_group(
    group: GroupCreate,
    service: GroupService = Depends(get_group_service)
):
    """Create a new, empty group."""
    created = await service.create_group(group.to_domain())
    return GroupResponse.from_domain(created)


@router.put(
    "/{group_id}",
    response_model=GroupResponse,
    summary="Replace a group's name and description",
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        404: {"model": ErrorResponse, "description": "Group not found"}
    }
)
async def update_group(
    group_id: UUID,
    group: GroupUpdate,
    service: GroupService = Depends(get_group_service)
):
    updated = await service.update_group(group.to_domain(group_id, utc_now()))
    return GroupResponse.from_domain(updated)


@router.delete(
    "/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a group",
    responses={404: {"model": ErrorResponse, "description": "Group not found"}}
)
async def delete_group(
    group_id: UUID,
    service: GroupService = Depends(get_group_service)
):
    """Delete a group. Its contacts are kept."""
    await service.delete_group(group_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "",
    response_model=GroupListResponse,
    summary="List groups",
    responses={400: {"model": ErrorResponse, "description": "Invalid sort or pagination"}}
)
async def list_groups(
    sort: str | None = Query(
        None,
        description="Comma separated fields; prefix with '-' for descending, e.g. -createdAt"
    ),
    limit: int | None = Query(None, description="Page size; clamped to the configured maximum"),
    offset: int | None = Query(None, description="Number of groups to skip"),
    service: GroupService = Depends(get_group_service),
    settings: Settings = Depends(get_app_settings)
):
    """List groups with sorting and limit/offset pagination.

    Sortable fields: name, description, createdAt, modifiedAt.
    """
    params = build_query_parameter(
        GROUP_SORT_OPTIONS, sort=sort, limit=limit, offset=offset, settings=settings
    )
    groups, total = await service.list_groups(params)

    return GroupListResponse(
        total=total,
        limit=params.pagination.limit,
        offset=params.pagination.offset,
        list=[GroupResponse.from_domain(group) for group in groups]
    )


@router.get(
    "/{group_id}",
    response_model=GroupResponse,
    summary="Get a group",
    responses={404: {"model": ErrorResponse, "description": "Group not found"}}
)
async def get_group(
    group_id: UUID,
    service: GroupService = Depends(get_group_service)
):
    """Get a group and the IDs of its contacts."""
    group = await service.read_group_by_id(group_id)
    return GroupResponse.from_domain(group)


@router.post(
    "/{group_id}/contacts",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a contact inside a group",
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        404: {"model": ErrorResponse, "description": "Group not found"}
    }
)
async def create_contact_into_group(
    group_id: UUID,
    contact: ContactCreate,
    service: GroupService = Depends(get_group_service),
    settings: Settings = Depends(get_app_settings)
):
    """Create a contact and add it to the group.

    Both writes commit together: if the group does not exist, the contact is
    not created either.
    """
    created = await service.create_contact_into_group(
        group_id, contact.to_domain(settings.PHONE_DEFAULT_REGION)
    )
    return ContactResponse.from_domain(created[0])


@router.put(
    "/{group_id}/contacts/{contact_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Add a contact to a group",
    responses={404: {"model": ErrorResponse, "description": "Group or contact not found"}}
)
async def add_contact_to_group(
    group_id: UUID,
    contact_id: UUID,
    service: GroupService = Depends(get_group_service)
):
    """Add an existing contact to a group. Adding a member twice is a no-op."""
    await service.add_contact_to_group(group_id, contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{group_id}/contacts/{contact_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Remove a contact from a group",
    responses={404: {"model": ErrorResponse, "description": "Group not found"}}
)
async def delete_contact_from_group(
    group_id: UUID,
    contact_id: UUID,
    service: GroupService = Depends(get_group_service)
):
    await service.delete_contact_from_group(group_id, contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
