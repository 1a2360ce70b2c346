"""Review routes for the Review API.

A review names its user and restaurant by id only; both are resolved
through their own services before the review itself is validated.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status
from loguru import logger

from . import models, results, schemas
from .deps import get_restaurant_service, get_review_service, get_user_service
from .responses import error_response, failure_response, render, to_response
from .services import RestaurantService, ReviewService, UserService

router = APIRouter(prefix="/reviews", tags=["reviews"])

ERRORS = {
    400: {
        "model": schemas.ErrorOut,
        "description": "Invalid Review, or unknown user or restaurant id",
    },
    404: {"model": schemas.ErrorOut, "description": "Review with id not found"},
    409: {"model": schemas.ErrorOut, "description": "The user already reviewed the restaurant"},
    500: {"model": schemas.ErrorOut, "description": "Unexpected error"},
}


@router.get("", response_model=List[schemas.ReviewOut])
def retrieve_all_reviews(
    user_id: Optional[int] = Query(None, alias="userId", ge=0, le=schemas.MAX_ID),
    restaurant_id: Optional[int] = Query(
        None, alias="restaurantId", ge=0, le=schemas.MAX_ID
    ),
    service: ReviewService = Depends(get_review_service),
):
    """
    Fetch reviews, optionally narrowed to one author and/or one restaurant.

    Args:
        user_id (int | None): Author of the reviews.
        restaurant_id (int | None): Restaurant the reviews are about.
        service (ReviewService): Review service for this request.

    Returns:
        list[ReviewOut]: Matching reviews. With both filters the list
        holds at most one review.
    """
    if user_id is not None and restaurant_id is not None:
        review = service.find_by_user_and_restaurant(user_id, restaurant_id)
        reviews = [review] if review is not None else []
    elif user_id is not None:
        reviews = service.find_all_by_user_id(user_id)
    elif restaurant_id is not None:
        reviews = service.find_all_by_restaurant_id(restaurant_id)
    else:
        reviews = service.find_all()
    return render(reviews, schemas.ReviewOut)


@router.get("/getByUserId", response_model=List[schemas.ReviewOut])
def retrieve_all_reviews_by_user_id(
    user_id: Optional[int] = Query(None, alias="userId", ge=0, le=schemas.MAX_ID),
    service: ReviewService = Depends(get_review_service),
):
    """
    Fetch the reviews written by one user.

    Args:
        user_id (int | None): Author of the reviews; every review is
            returned when omitted.
        service (ReviewService): Review service for this request.

    Returns:
        list[ReviewOut]: Matching reviews.
    """
    if user_id is None:
        reviews = service.find_all()
    else:
        reviews = service.find_all_by_user_id(user_id)
    return render(reviews, schemas.ReviewOut)


def _reference_id(reference: Optional[schemas.Reference]) -> Optional[int]:
    return reference.id if reference is not None else None


@router.post(
    "",
    response_model=schemas.ReviewOut,
    status_code=status.HTTP_201_CREATED,
    responses=ERRORS,
)
def create_review(
    review_in: Optional[schemas.ReviewIn] = Body(None),
    service: ReviewService = Depends(get_review_service),
    users: UserService = Depends(get_user_service),
    restaurants: RestaurantService = Depends(get_restaurant_service),
):
    """
    Add a new review.

    Only ``user.id`` and ``restaurant.id`` are read from the nested
    objects; both must refer to stored records.

    Returns:
        ReviewOut: Created review (201). Unknown references give 400
        before the review is validated; a second review of the same
        restaurant by the same user gives 409.
    """
    if review_in is None:
        return error_response(status.HTTP_400_BAD_REQUEST, "Bad Request")
    if review_in.id is not None:
        return error_response(status.HTTP_400_BAD_REQUEST, "ReviewId should be null")

    user_id = _reference_id(review_in.user)
    user = users.find_by_id(user_id) if user_id is not None else None
    if user is None:
        return failure_response(results.ReferenceNotFound("user", "UserId is incorrect"))

    restaurant_id = _reference_id(review_in.restaurant)
    restaurant = (
        restaurants.find_by_id(restaurant_id) if restaurant_id is not None else None
    )
    if restaurant is None:
        return failure_response(
            results.ReferenceNotFound("restaurant", "RestaurantId is incorrect")
        )

    review = models.Review(
        review=review_in.review,
        rating=review_in.rating,
        user_id=user.id,
        restaurant_id=restaurant.id,
    )
    outcome = service.create(review)
    if isinstance(outcome, results.Ok):
        logger.info("createReview completed. Review = {!r}", outcome.value)
    return to_response(outcome, schemas.ReviewOut, status.HTTP_201_CREATED)


@router.delete(
    "/{review_id}", status_code=status.HTTP_204_NO_CONTENT, responses=ERRORS
)
def delete_review(
    review_id: int = Path(..., ge=0, le=schemas.MAX_ID),
    service: ReviewService = Depends(get_review_service),
):
    review = service.find_by_id(review_id)
    if review is None:
        return failure_response(
            results.NotFound(f"No Review with the id {review_id} was found!")
        )

    outcome = service.delete(review)
    if isinstance(outcome, results.Ok):
        logger.info("deleteReview completed. Review = {!r}", review)
    return to_response(outcome, status_code=status.HTTP_204_NO_CONTENT)
