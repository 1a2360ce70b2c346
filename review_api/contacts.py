"""Contact management routes for the Review API."""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status
from loguru import logger

from . import models, results, schemas
from .deps import get_contact_service
from .responses import error_response, failure_response, render, to_response
from .services import ContactService

router = APIRouter(prefix="/contacts", tags=["contacts"])

ERRORS = {
    400: {"model": schemas.ErrorOut, "description": "Invalid Contact supplied"},
    404: {"model": schemas.ErrorOut, "description": "Contact with id not found"},
    409: {"model": schemas.ErrorOut, "description": "Contact email already in use"},
    500: {"model": schemas.ErrorOut, "description": "Unexpected error"},
}


@router.get("", response_model=List[schemas.ContactOut])
def retrieve_all_contacts(
    email: Optional[str] = Query(None),
    firstname: Optional[str] = Query(None),
    lastname: Optional[str] = Query(None),
    service: ContactService = Depends(get_contact_service),
):
    """
    Retrieve contacts ordered by last name, then first name.

    At most one filter is applied, checked in the order email, first
    name, last name.

    Args:
        email (str | None): Only return the contact with this email.
        firstname (str | None): Only return contacts with this first name.
        lastname (str | None): Only return contacts with this last name.
        service (ContactService): Contact service for this request.

    Returns:
        list[ContactOut]: Matching contacts.
    """
    if email is not None:
        contact = service.find_by_email(email)
        contacts = [contact] if contact is not None else []
    elif firstname is not None:
        contacts = service.find_all_by_first_name(firstname)
    elif lastname is not None:
        contacts = service.find_all_by_last_name(lastname)
    else:
        contacts = service.find_all()
    return render(contacts, schemas.ContactOut)


@router.get("/{contact_id}", response_model=schemas.ContactOut, responses=ERRORS)
def retrieve_contact_by_id(
    contact_id: int = Path(..., ge=0, le=schemas.MAX_ID),
    service: ContactService = Depends(get_contact_service),
):
    """
    Retrieve a single contact by ID.

    Args:
        contact_id (int): Contact identifier.
        service (ContactService): Contact service for this request.

    Returns:
        ContactOut: Contact data, or 404 when the id is unknown.
    """
    contact = service.find_by_id(contact_id)
    if contact is None:
        return failure_response(
            results.NotFound(f"No Contact with the id {contact_id} was found!")
        )
    return render(contact, schemas.ContactOut)


@router.post(
    "",
    response_model=schemas.ContactOut,
    status_code=status.HTTP_201_CREATED,
    responses=ERRORS,
)
def create_contact(
    contact_in: Optional[schemas.ContactIn] = Body(None),
    service: ContactService = Depends(get_contact_service),
):
    """
    Create a new contact.

    Args:
        contact_in (ContactIn): Contact input data, without an id.
        service (ContactService): Contact service for this request.

    Returns:
        ContactOut: Created contact (201).
    """
    if contact_in is None:
        return error_response(status.HTTP_400_BAD_REQUEST, "Bad Request")
    if contact_in.id is not None:
        return error_response(status.HTTP_400_BAD_REQUEST, "ContactId should be null")

    contact = models.Contact(**contact_in.model_dump(exclude={"id"}))
    outcome = service.create(contact)
    if isinstance(outcome, results.Ok):
        logger.info("createContact completed. Contact = {!r}", outcome.value)
    return to_response(outcome, schemas.ContactOut, status.HTTP_201_CREATED)


@router.put("", response_model=schemas.ContactOut, responses=ERRORS)
def update_contact(
    contact_in: Optional[schemas.ContactIn] = Body(None),
    service: ContactService = Depends(get_contact_service),
):
    """
    Replace an existing contact.

    The body carries the full contact including its id. The email may
    stay the same; changing it to one owned by another contact gives 409.

    Args:
        contact_in (ContactIn): Complete contact data.
        service (ContactService): Contact service for this request.

    Returns:
        ContactOut: Updated contact, or 404 when the id is unknown.
    """
    if contact_in is None:
        return error_response(status.HTTP_400_BAD_REQUEST, "Bad Request")
    if contact_in.id is None:
        return error_response(status.HTTP_400_BAD_REQUEST, "ContactId is required")

    contact = models.Contact(**contact_in.model_dump())
    outcome = service.update(contact)
    if isinstance(outcome, results.Ok):
        logger.info("updateContact completed. Contact = {!r}", outcome.value)
    return to_response(outcome, schemas.ContactOut)


@router.delete(
    "/{contact_id}", status_code=status.HTTP_204_NO_CONTENT, responses=ERRORS
)
def delete_contact(
    contact_id: int = Path(..., ge=0, le=schemas.MAX_ID),
    service: ContactService = Depends(get_contact_service),
):
    """
    Delete a contact.

    Args:
        contact_id (int): Contact identifier.
        service (ContactService): Contact service for this request.

    Returns:
        204 on success, 404 when the id is unknown.
    """
    contact = service.find_by_id(contact_id)
    if contact is None:
        return failure_response(
            results.NotFound(f"No Contact with the id {contact_id} was found!")
        )

    outcome = service.delete(contact)
    if isinstance(outcome, results.Ok):
        logger.info("deleteContact completed. Contact = {!r}", contact)
    return to_response(outcome, status_code=status.HTTP_204_NO_CONTENT)
