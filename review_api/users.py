"""User routes for the Review API."""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, status
from loguru import logger

from . import models, results, schemas
from .deps import get_user_service
from .responses import error_response, failure_response, render, to_response
from .services import UserService

router = APIRouter(prefix="/user", tags=["users"])

ERRORS = {
    400: {"model": schemas.ErrorOut, "description": "Invalid User supplied"},
    404: {"model": schemas.ErrorOut, "description": "User with id not found"},
    409: {"model": schemas.ErrorOut, "description": "User conflicts with an existing User"},
    500: {"model": schemas.ErrorOut, "description": "Unexpected error"},
}


@router.get("", response_model=List[schemas.UserOut])
def retrieve_all_users(service: UserService = Depends(get_user_service)):
    """
    Fetch all users ordered by name.

    Args:
        service (UserService): User service for this request.

    Returns:
        list[UserOut]: Stored users.
    """
    return render(service.find_all(), schemas.UserOut)


@router.get("/{user_id}", response_model=schemas.UserOut, responses=ERRORS)
def retrieve_user_by_id(
    user_id: int = Path(..., ge=0, le=schemas.MAX_ID),
    service: UserService = Depends(get_user_service),
):
    """
    Fetch a single user by ID.

    Returns:
        UserOut: User data, or 404 when the id is unknown.
    """
    user = service.find_by_id(user_id)
    if user is None:
        return failure_response(
            results.NotFound(f"No User with the id {user_id} was found!")
        )
    return render(user, schemas.UserOut)


@router.post(
    "",
    response_model=schemas.UserOut,
    status_code=status.HTTP_201_CREATED,
    responses=ERRORS,
)
def create_user(
    user_in: Optional[schemas.UserIn] = Body(None),
    service: UserService = Depends(get_user_service),
):
    """
    Add a new user. The id must be left out of the request body.

    Args:
        user_in (UserIn): User input data.
        service (UserService): User service for this request.

    Returns:
        UserOut: Created user (201). Invalid fields give 400 with a
        reason per field, a taken email gives 409.
    """
    if user_in is None:
        return error_response(status.HTTP_400_BAD_REQUEST, "Bad Request")
    if user_in.id is not None:
        return error_response(status.HTTP_400_BAD_REQUEST, "UserId should be null")

    user = models.User(**user_in.model_dump(exclude={"id"}))
    outcome = service.create(user)
    if isinstance(outcome, results.Ok):
        logger.info("createUser completed. User = {!r}", outcome.value)
    return to_response(outcome, schemas.UserOut, status.HTTP_201_CREATED)


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT, responses=ERRORS
)
def delete_user(
    user_id: int = Path(..., ge=0, le=schemas.MAX_ID),
    service: UserService = Depends(get_user_service),
):
    """
    Delete a user together with the reviews they wrote.

    Returns:
        204 on success, 404 when no user has ``user_id``.
    """
    user = service.find_by_id(user_id)
    if user is None:
        return failure_response(
            results.NotFound(f"No User with the id {user_id} was found!")
        )

    outcome = service.delete(user)
    if isinstance(outcome, results.Ok):
        logger.info("deleteUser completed. User = {!r}", user)
    return to_response(outcome, status_code=status.HTTP_204_NO_CONTENT)
