"""Outcomes returned by validators and services.

Validation failures, conflicts and storage errors are values, not
exceptions. Routers hand them to :func:`review_api.responses.to_response`,
which is the only place they are turned into HTTP responses.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """The operation succeeded; ``value`` is the resulting entity."""

    value: T


@dataclass(frozen=True)
class StructuralViolation:
    """One or more field rules failed.

    Attributes:
        reasons: Field name mapped to the message of its first failing rule.
    """

    reasons: dict[str, str]


@dataclass(frozen=True)
class UniquenessViolation:
    """The natural key collides with a different stored record."""

    field: str
    message: str


@dataclass(frozen=True)
class DuplicateEmail(UniquenessViolation):
    field: str = "email"
    message: str = "That email is already used, please use a unique email"


@dataclass(frozen=True)
class DuplicatePhonenumber(UniquenessViolation):
    field: str = "phonenumber"
    message: str = (
        "That phonenumber is already used, please use a unique phonenumber"
    )


@dataclass(frozen=True)
class DuplicateReview(UniquenessViolation):
    field: str = "review"
    message: str = (
        "That user has already reviewed this restaurant, "
        "please choose another restaurant"
    )


@dataclass(frozen=True)
class ReferenceNotFound:
    """A referenced record (the user or restaurant of a review) does not exist."""

    field: str
    message: str


@dataclass(frozen=True)
class NotFound:
    message: str


@dataclass(frozen=True)
class Unexpected:
    """Storage failed for a reason the caller cannot act on."""

    message: str
    cause: Any = None


Failure = Union[
    StructuralViolation, UniquenessViolation, ReferenceNotFound, NotFound, Unexpected
]
Result = Union[Ok[T], Failure]
