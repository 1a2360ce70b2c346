"""Field checks and uniqueness checks for every entity.

Each validator names the pydantic model holding its entity's field
constraints (see the ``*Fields`` models in :mod:`review_api.schemas`).
pydantic reports every failing field at once; the errors are folded
into one message per field, with a small per-validator table replacing
pydantic's wording where the API promises its own.
"""

from typing import Type

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import NoResultFound

from . import results, schemas

NOT_NULL_MESSAGE = "may not be null"
NAME_MESSAGE = "Please use a name without numbers or specials"
EMAIL_MESSAGE = "The email address must be in the format of name@domain.com"

Messages = dict[tuple[str, str], str]


def fold_errors(errors: list[dict], messages: Messages) -> dict[str, str]:
    """
    Reduce pydantic errors to the first message per field.

    Args:
        errors (list[dict]): ``ValidationError.errors()`` output.
        messages (dict): ``(field, error type)`` mapped to the message
            used instead of pydantic's own.

    Returns:
        dict[str, str]: Field name mapped to its message.
    """
    reasons = {}
    for error in errors:
        name = str(error["loc"][0])
        if name in reasons:
            continue
        if error.get("input") is None:
            reasons[name] = NOT_NULL_MESSAGE
        else:
            reasons[name] = messages.get((name, error["type"]), error["msg"])
    return reasons


def check_fields(entity, fields: Type[BaseModel], messages: Messages) -> dict[str, str]:
    """Run ``fields`` against ``entity``; empty when every field passes."""
    try:
        fields.model_validate(entity, from_attributes=True)
    except ValidationError as exc:
        return fold_errors(exc.errors(), messages)
    return {}


class EntityValidator:
    """Structural validation followed by a natural-key uniqueness check.

    Subclasses provide the ``fields`` model, their ``messages`` and the
    ``duplicate`` result returned when another record already owns the
    natural key.
    """

    fields: Type[BaseModel] = BaseModel
    messages: Messages = {}
    duplicate: type = results.UniquenessViolation

    def __init__(self, repository) -> None:
        self.repository = repository

    def validate(self, entity):
        """
        Validate ``entity`` before it is written.

        Returns:
            Ok | StructuralViolation | UniquenessViolation: ``Ok(entity)``
            when the entity may be stored.
        """
        reasons = check_fields(entity, self.fields, self.messages)
        if reasons:
            return results.StructuralViolation(reasons)

        if self.natural_key_taken(entity):
            return self.duplicate()

        return results.Ok(entity)

    def natural_key_taken(self, entity) -> bool:
        """
        Tell whether a different stored record already uses the entity's key.

        A record found by key is not a collision when it is the record the
        entity's own id points to, which is the update-in-place case.
        """
        try:
            existing = self.repository.find_by_natural_key(*entity.natural_key)
        except NoResultFound:
            return False

        if entity.id is not None:
            with_id = self.repository.find_by_id(entity.id)
            if with_id is not None and with_id.id == existing.id:
                return False

        return True


class ContactValidator(EntityValidator):
    fields = schemas.ContactFields
    messages = {
        ("first_name", "string_pattern_mismatch"): NAME_MESSAGE,
        ("last_name", "string_pattern_mismatch"): NAME_MESSAGE,
        ("email", "value_error"): EMAIL_MESSAGE,
        ("birth_date", "date_past"): (
            "Birthdates can not be in the future. Please choose one from the past"
        ),
    }
    duplicate = results.DuplicateEmail


class UserValidator(EntityValidator):
    fields = schemas.UserFields
    messages = {
        ("name", "string_pattern_mismatch"): NAME_MESSAGE,
        ("email", "value_error"): EMAIL_MESSAGE,
    }
    duplicate = results.DuplicateEmail


class RestaurantValidator(EntityValidator):
    fields = schemas.RestaurantFields
    messages = {
        ("name", "string_pattern_mismatch"): (
            "a non-empty alphabetical string less than 50 characters in length"
        ),
    }
    duplicate = results.DuplicatePhonenumber


class ReviewValidator(EntityValidator):
    fields = schemas.ReviewFields
    messages = {
        ("review", "string_too_long"): (
            "a non-empty string less than 300 characters in length"
        ),
    }
    duplicate = results.DuplicateReview
