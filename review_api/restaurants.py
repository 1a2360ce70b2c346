"""Restaurant routes for the Review API."""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status
from loguru import logger

from . import models, results, schemas
from .deps import get_restaurant_service
from .responses import error_response, failure_response, render, to_response
from .services import RestaurantService

router = APIRouter(prefix="/restaurants", tags=["restaurants"])

ERRORS = {
    400: {"model": schemas.ErrorOut, "description": "Invalid Restaurant supplied"},
    404: {"model": schemas.ErrorOut, "description": "Restaurant with id not found"},
    409: {
        "model": schemas.ErrorOut,
        "description": "Restaurant conflicts with an existing Restaurant",
    },
    500: {"model": schemas.ErrorOut, "description": "Unexpected error"},
}


@router.get("", response_model=List[schemas.RestaurantOut])
def retrieve_all_restaurants(
    phonenumber: Optional[str] = Query(None),
    service: RestaurantService = Depends(get_restaurant_service),
):
    """
    Fetch restaurants ordered by phone number.

    Args:
        phonenumber (str | None): Only return the restaurant with this number.
        service (RestaurantService): Restaurant service for this request.

    Returns:
        list[RestaurantOut]: Matching restaurants.
    """
    if phonenumber is not None:
        restaurant = service.find_by_phonenumber(phonenumber)
        restaurants = [restaurant] if restaurant is not None else []
    else:
        restaurants = service.find_all()
    return render(restaurants, schemas.RestaurantOut)


@router.get("/{restaurant_id}", response_model=schemas.RestaurantOut, responses=ERRORS)
def retrieve_restaurant_by_id(
    restaurant_id: int = Path(..., ge=0, le=schemas.MAX_ID),
    service: RestaurantService = Depends(get_restaurant_service),
):
    restaurant = service.find_by_id(restaurant_id)
    if restaurant is None:
        return failure_response(
            results.NotFound(f"No Restaurant with the id {restaurant_id} was found!")
        )
    return render(restaurant, schemas.RestaurantOut)


@router.post(
    "",
    response_model=schemas.RestaurantOut,
    status_code=status.HTTP_201_CREATED,
    responses=ERRORS,
)
def create_restaurant(
    restaurant_in: Optional[schemas.RestaurantIn] = Body(None),
    service: RestaurantService = Depends(get_restaurant_service),
):
    """
    Add a new restaurant.

    Returns:
        RestaurantOut: Created restaurant (201). A phone number already
        in use gives 409.
    """
    if restaurant_in is None:
        return error_response(status.HTTP_400_BAD_REQUEST, "Bad Request")
    if restaurant_in.id is not None:
        return error_response(
            status.HTTP_400_BAD_REQUEST, "RestaurantId should be null"
        )

    restaurant = models.Restaurant(**restaurant_in.model_dump(exclude={"id"}))
    outcome = service.create(restaurant)
    if isinstance(outcome, results.Ok):
        logger.info("createRestaurant completed. Restaurant = {!r}", outcome.value)
    return to_response(outcome, schemas.RestaurantOut, status.HTTP_201_CREATED)


@router.delete(
    "/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT, responses=ERRORS
)
def delete_restaurant(
    restaurant_id: int = Path(..., ge=0, le=schemas.MAX_ID),
    service: RestaurantService = Depends(get_restaurant_service),
):
    """Delete a restaurant and every review left for it."""
    restaurant = service.find_by_id(restaurant_id)
    if restaurant is None:
        return failure_response(
            results.NotFound(f"No Restaurant with the id {restaurant_id} was found!")
        )

    outcome = service.delete(restaurant)
    if isinstance(outcome, results.Ok):
        logger.info("deleteRestaurant completed. Restaurant = {!r}", restaurant)
    return to_response(outcome, status_code=status.HTTP_204_NO_CONTENT)
