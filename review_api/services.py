"""Services: validation followed by persistence, one per entity.

Services are built explicitly from a validator and a repository (see
:mod:`review_api.deps`). Write operations return values from
:mod:`review_api.results` and commit before returning, so the route
only ever reports work that is already stored. Storage errors,
including a failed commit, are caught here and returned as
``Unexpected``, or as the entity's uniqueness violation when the
database unique constraint rejected a row the validator let through.
"""

from loguru import logger
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

from . import results
from .repositories import (
    ContactRepository,
    EntityRepository,
    RestaurantRepository,
    ReviewRepository,
    UserRepository,
)
from .validators import (
    ContactValidator,
    EntityValidator,
    RestaurantValidator,
    ReviewValidator,
    UserValidator,
)


class EntityService:
    """Orchestrates an entity's validator and repository."""

    def __init__(self, validator: EntityValidator, repository: EntityRepository) -> None:
        self.validator = validator
        self.repository = repository

    @property
    def name(self) -> str:
        return type(self).__name__

    def find_all(self) -> list:
        return self.repository.find_all()

    def find_by_id(self, entity_id: int):
        return self.repository.find_by_id(entity_id)

    def create(self, entity):
        """
        Validate and insert a new entity.

        Args:
            entity: Transient entity built from the request.

        Returns:
            Ok | StructuralViolation | UniquenessViolation | Unexpected:
            ``Ok`` carries the persisted entity with its id assigned.
        """
        logger.info("{}.create() - Creating {!r}", self.name, entity)
        outcome = self.validator.validate(entity)
        if not isinstance(outcome, results.Ok):
            return outcome

        return self._write(self.repository.create, entity)

    def update(self, entity):
        """
        Validate and merge an existing entity.

        Returns:
            Ok | NotFound | StructuralViolation | UniquenessViolation | Unexpected
        """
        logger.info("{}.update() - Updating {!r}", self.name, entity)
        if entity.id is None or self.repository.find_by_id(entity.id) is None:
            return results.NotFound(f"No entity with the id {entity.id} was found!")

        outcome = self.validator.validate(entity)
        if not isinstance(outcome, results.Ok):
            return outcome

        return self._write(self.repository.update, entity)

    def delete(self, entity):
        """
        Delete a stored entity.

        Returns:
            Ok | Unexpected | None: ``None`` when the entity has no id, in
            which case nothing is deleted.
        """
        logger.info("{}.delete() - Deleting {!r}", self.name, entity)
        if entity.id is None:
            logger.info("{}.delete() - No ID was found so can't Delete.", self.name)
            return None

        try:
            deleted = self.repository.delete(entity)
            self.repository.commit()
        except SQLAlchemyError as exc:
            logger.exception("{}.delete() failed for {!r}", self.name, entity)
            self.repository.rollback()
            return results.Unexpected(str(exc), cause=exc)
        return results.Ok(deleted)

    def _write(self, operation, entity):
        try:
            written = operation(entity)
            self.repository.commit()
        except IntegrityError as exc:
            # two requests passed validation with the same key
            logger.warning(
                "{} - unique constraint rejected {!r}: {}", self.name, entity, exc.orig
            )
            self.repository.rollback()
            return self.validator.duplicate()
        except SQLAlchemyError as exc:
            logger.exception("{} - storage failure for {!r}", self.name, entity)
            self.repository.rollback()
            return results.Unexpected(str(exc), cause=exc)
        return results.Ok(written)


class ContactService(EntityService):
    def __init__(self, validator: ContactValidator, repository: ContactRepository) -> None:
        super().__init__(validator, repository)

    def find_by_email(self, email: str):
        """Return the contact owning ``email``, or ``None``."""
        try:
            return self.repository.find_by_email(email)
        except NoResultFound:
            return None

    def find_all_by_first_name(self, first_name: str) -> list:
        return self.repository.find_all_by_first_name(first_name)

    def find_all_by_last_name(self, last_name: str) -> list:
        return self.repository.find_all_by_last_name(last_name)


class UserService(EntityService):
    def __init__(self, validator: UserValidator, repository: UserRepository) -> None:
        super().__init__(validator, repository)


class RestaurantService(EntityService):
    def __init__(
        self, validator: RestaurantValidator, repository: RestaurantRepository
    ) -> None:
        super().__init__(validator, repository)

    def find_by_phonenumber(self, phonenumber: str):
        """Return the restaurant with ``phonenumber``, or ``None``."""
        try:
            return self.repository.find_by_phonenumber(phonenumber)
        except NoResultFound:
            return None


class ReviewService(EntityService):
    def __init__(self, validator: ReviewValidator, repository: ReviewRepository) -> None:
        super().__init__(validator, repository)

    def find_all_by_user_id(self, user_id: int) -> list:
        return self.repository.find_all_by_user_id(user_id)

    def find_all_by_restaurant_id(self, restaurant_id: int) -> list:
        return self.repository.find_all_by_restaurant_id(restaurant_id)

    def find_by_user_and_restaurant(self, user_id: int, restaurant_id: int):
        """Return the review ``user_id`` wrote about ``restaurant_id``, or ``None``."""
        try:
            return self.repository.find_by_user_and_restaurant(user_id, restaurant_id)
        except NoResultFound:
            return None
