"""Request, response and field-constraint schemas.

Request models only describe the wire shape: every field is optional so
that a bad value is reported together with every other bad field by
:mod:`review_api.validators`, instead of failing the request on the
first one. The ``*Fields`` models hold each entity's field constraints;
validators run them against the ORM entity with ``from_attributes``.
"""

from datetime import date
from typing import Annotated, Optional

from email_validator import validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PastDate

MAX_ID = 2**63 - 1
"""Largest id a 64-bit signed INTEGER column can hold."""

EntityId = Annotated[int, Field(ge=0, le=MAX_ID)]


def email_address(value: str) -> str:
    # special-use domains such as example.test are accepted
    validate_email(value, check_deliverability=False, globally_deliverable=False)
    return value


Email = Annotated[str, AfterValidator(email_address)]

class ContactIn(BaseModel):
    """Payload for creating or updating a contact."""

    id: Optional[EntityId] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    birth_date: Optional[date] = None


class ContactOut(BaseModel):
    """Schema for returning contact with ID."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone_number: str
    birth_date: date

    model_config = ConfigDict(from_attributes=True)


class UserIn(BaseModel):
    """Payload for creating a new user."""

    id: Optional[EntityId] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phonenumber: Optional[str] = None


class UserOut(BaseModel):
    """Response schema for user data."""

    id: int
    name: str
    email: str
    phonenumber: str

    model_config = ConfigDict(from_attributes=True)


class RestaurantIn(BaseModel):
    """Payload for creating a new restaurant."""

    id: Optional[EntityId] = None
    name: Optional[str] = None
    phonenumber: Optional[str] = None
    postcode: Optional[str] = None


class RestaurantOut(BaseModel):
    """Response schema for restaurant data."""

    id: int
    name: str
    phonenumber: str
    postcode: str

    model_config = ConfigDict(from_attributes=True)


class Reference(BaseModel):
    """Reference to an existing record; only ``id`` is read."""

    id: Optional[EntityId] = None

    model_config = ConfigDict(extra="ignore")


class ReviewIn(BaseModel):
    """Payload for creating a review of a restaurant by a user."""

    id: Optional[EntityId] = None
    review: Optional[str] = None
    rating: Optional[int] = None
    user: Optional[Reference] = None
    restaurant: Optional[Reference] = None


class ReviewOut(BaseModel):
    """Response schema for a review, with its user and restaurant inlined."""

    id: int
    review: Optional[str] = None
    rating: int
    user: UserOut
    restaurant: RestaurantOut

    model_config = ConfigDict(from_attributes=True)


class ErrorOut(BaseModel):
    """Error body returned for every non-2xx response."""

    error: str
    reasons: Optional[dict[str, str]] = None


class ContactFields(BaseModel):
    """Field constraints of a contact."""

    first_name: str = Field(min_length=1, max_length=25, pattern=r"^[A-Za-z'-]+$")
    last_name: str = Field(min_length=1, max_length=25, pattern=r"^[A-Za-z'-]+$")
    email: Email
    phone_number: str = Field(pattern=r"^\([2-9][0-9]{2}\)\s?[0-9]{3}-[0-9]{4}$")
    birth_date: PastDate

    model_config = ConfigDict(from_attributes=True)


class UserFields(BaseModel):
    """Field constraints of a user."""

    name: str = Field(min_length=1, max_length=50, pattern=r"^[A-Za-z' .-]+$")
    email: Email
    phonenumber: str = Field(pattern=r"^0[0-9]{10}$")

    model_config = ConfigDict(from_attributes=True)


class RestaurantFields(BaseModel):
    """Field constraints of a restaurant."""

    name: str = Field(min_length=1, max_length=50, pattern=r"^[A-Za-z]+$")
    phonenumber: str = Field(pattern=r"^0[0-9]{10}$")
    postcode: str = Field(pattern=r"^[A-Z0-9]{6}$")

    model_config = ConfigDict(from_attributes=True)


class ReviewFields(BaseModel):
    """Field constraints of a review; the text itself may be left out."""

    review: Optional[str] = Field(None, max_length=300)
    rating: int = Field(ge=0, le=5)
    user_id: int
    restaurant_id: int

    model_config = ConfigDict(from_attributes=True)
