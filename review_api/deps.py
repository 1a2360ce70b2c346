"""FastAPI dependencies that build services for the current request.

Every service is constructed explicitly from its validator and
repository, all sharing the request's session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from .database import get_db
from .repositories import (
    ContactRepository,
    RestaurantRepository,
    ReviewRepository,
    UserRepository,
)
from .services import ContactService, RestaurantService, ReviewService, UserService
from .validators import (
    ContactValidator,
    RestaurantValidator,
    ReviewValidator,
    UserValidator,
)


def get_contact_service(db: Session = Depends(get_db)) -> ContactService:
    """Get the contact service for this request."""
    repository = ContactRepository(db)
    return ContactService(ContactValidator(repository), repository)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Get the user service for this request."""
    repository = UserRepository(db)
    return UserService(UserValidator(repository), repository)


def get_restaurant_service(db: Session = Depends(get_db)) -> RestaurantService:
    """Get the restaurant service for this request."""
    repository = RestaurantRepository(db)
    return RestaurantService(RestaurantValidator(repository), repository)


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    """Get the review service for this request."""
    repository = ReviewRepository(db)
    return ReviewService(ReviewValidator(repository), repository)
