"""Contact Endpoints.

RESTful API endpoints for the contact directory. Domain and storage errors
propagate to the exception handlers registered in main.py.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from ....core.config import Settings
from ....domain.query import build_query_parameter
from ....repositories.contact_repository import CONTACT_SORT_OPTIONS
from ....schemas.contact import (
    ContactCreate,
    ContactListResponse,
    ContactResponse,
    ContactUpdate,
    ErrorResponse,
)
from ....services.contact_service import ContactService
from ....utils.generators import utc_now
from ...dependencies import get_app_settings, get_contact_service

router = APIRouter()


@router.post(
    "",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a contact",
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Contact already exists"},
        503: {"model": ErrorResponse, "description": "Storage unavailable"}
    }
)
async def create_contact(
    contact: ContactCreate,
    service: ContactService = Depends(get_contact_service),
    settings: Settings = Depends(get_app_settings)
):
    """Create a new contact.

    The phone number is stored in E.164 form and the email address in its
    normalized form.
    """
    created = await service.create_contact(contact.to_domain(settings.PHONE_DEFAULT_REGION))
    return ContactResponse.from_domain(created[0])


@router.put(
    "/{contact_id}",
    response_model=ContactResponse,
    summary="Replace a contact",
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        404: {"model": ErrorResponse, "description": "Contact not found"}
    }
)
async def update_contact(
    contact_id: UUID,
    contact: ContactUpdate,
    service: ContactService = Depends(get_contact_service),
    settings: Settings = Depends(get_app_settings)
):
    """Replace every field of an existing contact."""
    updated = await service.update_contact(
        contact.to_domain(contact_id, utc_now(), settings.PHONE_DEFAULT_REGION)
    )
    return ContactResponse.from_domain(updated)


@router.delete(
    "/{contact_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a contact",
    responses={404: {"model": ErrorResponse, "description": "Contact not found"}}
)
async def delete_contact(
    contact_id: UUID,
    service: ContactService = Depends(get_contact_service)
):
    """Delete a contact and remove it from every group."""
    await service.delete_contact(contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "",
    response_model=ContactListResponse,
    summary="List contacts",
    responses={400: {"model": ErrorResponse, "description": "Invalid sort or pagination"}}
)
async def list_contacts(
    sort: str | None = Query(
        None,
        description="Comma separated fields; prefix with '-' for descending, e.g. surname,-age"
    ),
    limit: int | None = Query(None, description="Page size; clamped to the configured maximum"),
    offset: int | None = Query(None, description="Number of contacts to skip"),
    service: ContactService = Depends(get_contact_service),
    settings: Settings = Depends(get_app_settings)
):
    """List contacts with sorting and limit/offset pagination.

    Sortable fields: name, surname, patronymic, phoneNumber, email, gender,
    age, createdAt, modifiedAt. Without a sort, contacts are returned oldest
    first.
    """
    params = build_query_parameter(
        CONTACT_SORT_OPTIONS, sort=sort, limit=limit, offset=offset, settings=settings
    )
    contacts, total = await service.list_contacts_with_total(params)

    return ContactListResponse(
        total=total,
        limit=params.pagination.limit,
        offset=params.pagination.offset,
        list=[ContactResponse.from_domain(contact) for contact in contacts]
    )


@router.get(
    "/{contact_id}",
    response_model=ContactResponse,
    summary="Get a contact",
    responses={404: {"model": ErrorResponse, "description": "Contact not found"}}
)
async def get_contact(
    contact_id: UUID,
    service: ContactService = Depends(get_contact_service)
):
    """Get a contact by ID."""
    contact = await service.read_contact_by_id(contact_id)
    return ContactResponse.from_domain(contact)
