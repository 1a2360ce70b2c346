"""Data access for contacts, users, restaurants and reviews.

Repositories run queries against the request's session and nothing
else. Writes only flush so generated ids are assigned; services call
:meth:`EntityRepository.commit` once the whole write has succeeded.
"""

from loguru import logger
from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from . import models


class EntityRepository:
    """Shared data-access operations for one mapped model.

    Subclasses set ``model``, the ``order_by`` columns used by
    :meth:`find_all` and the ``natural_key`` columns matched by
    :meth:`find_by_natural_key`.
    """

    model: type = None
    order_by: tuple = ()
    natural_key: tuple = ()

    def __init__(self, db: Session) -> None:
        self.db = db

    @property
    def name(self) -> str:
        return type(self).__name__

    def find_all(self) -> list:
        """
        Retrieve every stored entity in the repository's order.

        Returns:
            list: Ordered entities.
        """
        stmt = select(self.model).order_by(*self.order_by)
        return list(self.db.scalars(stmt).all())

    def find_by_id(self, entity_id: int):
        """
        Retrieve an entity by primary key.

        Args:
            entity_id (int): Entity identifier.

        Returns:
            The entity if found, otherwise ``None``.
        """
        return self.db.get(self.model, entity_id)

    def find_by_natural_key(self, *values):
        """
        Retrieve the single entity whose natural key equals ``values``.

        Raises:
            NoResultFound: If no entity matches.
            MultipleResultsFound: If the key matches more than one entity.

        Returns:
            The matching entity.
        """
        clauses = [column == value for column, value in zip(self.natural_key, values)]
        stmt = select(self.model).where(and_(*clauses))
        return self.db.execute(stmt).scalar_one()

    def create(self, entity):
        """
        Insert a new entity; its id is assigned on return.

        Args:
            entity: Transient entity to persist.

        Returns:
            The same entity, now persistent.
        """
        logger.info("{}.create() - Creating {!r}", self.name, entity)
        self.db.add(entity)
        self.db.flush()
        return entity

    def update(self, entity):
        """
        Merge ``entity`` into the session, inserting it if it is unknown.

        Args:
            entity: Entity carrying the new field values.

        Returns:
            The merged, persistent instance.
        """
        logger.info("{}.update() - Updating {!r}", self.name, entity)
        merged = self.db.merge(entity)
        self.db.flush()
        return merged

    def delete(self, entity):
        """
        Remove an entity. Entities without an id are left alone.

        Args:
            entity: Entity to remove.

        Returns:
            The entity passed in.
        """
        logger.info("{}.delete() - Deleting {!r}", self.name, entity)
        if entity.id is not None:
            self.db.delete(self.db.merge(entity))
            self.db.flush()
        else:
            logger.info("{}.delete() - No ID was found so can't Delete.", self.name)
        return entity

    def commit(self) -> None:
        """Commit the unit of work."""
        self.db.commit()

    def rollback(self) -> None:
        """Discard the unit of work after a failed flush."""
        logger.info("{}.rollback() - Rolling back the current transaction", self.name)
        self.db.rollback()


class ContactRepository(EntityRepository):
    model = models.Contact
    order_by = (models.Contact.last_name, models.Contact.first_name)
    natural_key = (models.Contact.email,)

    def find_by_email(self, email: str) -> models.Contact:
        return self.find_by_natural_key(email)

    def find_all_by_first_name(self, first_name: str) -> list[models.Contact]:
        stmt = (
            select(models.Contact)
            .where(models.Contact.first_name == first_name)
            .order_by(*self.order_by)
        )
        return list(self.db.scalars(stmt).all())

    def find_all_by_last_name(self, last_name: str) -> list[models.Contact]:
        stmt = (
            select(models.Contact)
            .where(models.Contact.last_name == last_name)
            .order_by(*self.order_by)
        )
        return list(self.db.scalars(stmt).all())


class UserRepository(EntityRepository):
    model = models.User
    order_by = (models.User.name,)
    natural_key = (models.User.email,)

    def find_by_email(self, email: str) -> models.User:
        return self.find_by_natural_key(email)


class RestaurantRepository(EntityRepository):
    model = models.Restaurant
    order_by = (models.Restaurant.phonenumber,)
    natural_key = (models.Restaurant.phonenumber,)

    def find_by_phonenumber(self, phonenumber: str) -> models.Restaurant:
        return self.find_by_natural_key(phonenumber)


class ReviewRepository(EntityRepository):
    model = models.Review
    order_by = (models.Review.id,)
    natural_key = (models.Review.user_id, models.Review.restaurant_id)

    def find_by_user_and_restaurant(
        self, user_id: int, restaurant_id: int
    ) -> models.Review:
        return self.find_by_natural_key(user_id, restaurant_id)

    def find_all_by_user_id(self, user_id: int) -> list[models.Review]:
        stmt = (
            select(models.Review)
            .where(models.Review.user_id == user_id)
            .order_by(*self.order_by)
        )
        return list(self.db.scalars(stmt).all())

    def find_all_by_restaurant_id(self, restaurant_id: int) -> list[models.Review]:
        stmt = (
            select(models.Review)
            .where(models.Review.restaurant_id == restaurant_id)
            .order_by(*self.order_by)
        )
        return list(self.db.scalars(stmt).all())
