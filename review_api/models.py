"""Database models for the Review API.

This module defines SQLAlchemy ORM models used by the application.
Each model exposes ``natural_key``, the non-generated value that must
stay unique among stored rows.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .database import Base


class Contact(Base):
    """
    SQLAlchemy model representing an address-book contact.

    Contacts are identified by their email address.
    """

    __tablename__ = "contacts"
    __table_args__ = (UniqueConstraint("email", name="uq_contact_email"),)

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(25), nullable=False, index=True)
    last_name = Column(String(25), nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)
    phone_number = Column(String(20), nullable=False)
    birth_date = Column(Date, nullable=False)

    @property
    def natural_key(self) -> tuple:
        return (self.email,)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Contact):
            return NotImplemented
        return self.email == other.email

    def __hash__(self) -> int:
        return hash(self.email)

    def __repr__(self) -> str:
        return (
            f"Contact(id={self.id}, first_name={self.first_name!r}, "
            f"last_name={self.last_name!r}, email={self.email!r})"
        )


class User(Base):
    """
    SQLAlchemy model representing a reviewer.

    A user owns the reviews they wrote; deleting the user deletes them.
    Two users are equal when they share an email address.
    """

    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", name="uq_user_email"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)
    phonenumber = Column(String(11), nullable=False)

    #: Reviews written by the user
    reviews = relationship(
        "Review",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def natural_key(self) -> tuple:
        return (self.email,)

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.email == other.email

    def __hash__(self) -> int:
        return hash(self.email)

    def __repr__(self) -> str:
        return (
            f"User(id={self.id}, name={self.name!r}, email={self.email!r}, "
            f"phonenumber={self.phonenumber!r})"
        )


class Restaurant(Base):
    """
    SQLAlchemy model representing a restaurant.

    The phone number is the natural key; equality is by name.
    """

    __tablename__ = "restaurants"
    __table_args__ = (
        UniqueConstraint("phonenumber", name="uq_restaurant_phonenumber"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    phonenumber = Column(String(11), nullable=False, index=True)
    postcode = Column(String(6), nullable=False)

    #: Reviews left for the restaurant
    reviews = relationship(
        "Review",
        back_populates="restaurant",
        cascade="all, delete-orphan",
    )

    @property
    def natural_key(self) -> tuple:
        return (self.phonenumber,)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Restaurant):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return (
            f"Restaurant(id={self.id}, name={self.name!r}, "
            f"phonenumber={self.phonenumber!r}, postcode={self.postcode!r})"
        )


class Review(Base):
    """
    SQLAlchemy model representing one user's review of one restaurant.

    A user may review a given restaurant at most once.
    """

    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("user_id", "restaurant_id", name="uq_review_user_restaurant"),
    )

    id = Column(Integer, primary_key=True, index=True)
    review = Column(String(300), nullable=True)
    rating = Column(Integer, nullable=False)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    restaurant_id = Column(
        Integer,
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user = relationship("User", back_populates="reviews")
    restaurant = relationship("Restaurant", back_populates="reviews")

    @property
    def natural_key(self) -> tuple:
        return (self.user_id, self.restaurant_id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Review):
            return NotImplemented
        return self.natural_key == other.natural_key

    def __hash__(self) -> int:
        return hash(self.natural_key)

    def __repr__(self) -> str:
        return (
            f"Review(id={self.id}, rating={self.rating}, user_id={self.user_id}, "
            f"restaurant_id={self.restaurant_id})"
        )
