"""
WoofPoint Backend — Dog Service
=================================

What:  Add, patch, and remove entries in the caller's list of dogs.
Why:   Dogs are addressed by a stable id, never by list position, and a
       caller can only ever reach their own list.
How:   The owner profile is always looked up by the authenticated user id;
       the client never supplies an owner-record id. The ordered `dogs`
       collection (ordering_list on `position`) handles ordering, and the
       delete-orphan cascade removes rows dropped from the list.

Operations:
    add_dog     → append with a fresh UUID, unset fields take defaults
    update_dog  → shallow merge of the fields actually sent
    delete_dog  → remove if present; an unknown id is a no-op

Concurrent edits to the same owner's list are not coordinated (see the
models.owner docstring).
"""

import logging
import uuid
from typing import Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError, WoofPointError
from app.models import Dog, OwnerProfile
from app.schemas.owner import DogCreate, DogUpdate, DogView
from app.security import Identity

logger = logging.getLogger(__name__)


def parse_dog_id(dog_id: Union[str, uuid.UUID]) -> uuid.UUID:
    """Turn a path parameter into a UUID, or fail with a 400."""
    if isinstance(dog_id, uuid.UUID):
        return dog_id
    try:
        return uuid.UUID(dog_id)
    except (ValueError, AttributeError, TypeError):
        raise ValidationError(message="Invalid dog ID", field="dogId", context={"dog_id": str(dog_id)})


class DogService:
    """Mutations on an owner's dog list. Every call is scoped to `identity.user_id`."""

    async def _load_owner(self, db: AsyncSession, identity: Identity) -> OwnerProfile:
        owner = await db.scalar(
            select(OwnerProfile).where(OwnerProfile.user_id == identity.user_id)
        )
        if owner is None:
            raise NotFoundError(
                resource="Owner profile",
                message="Owner profile not found",
                context={"user_id": str(identity.user_id)},
            )
        return owner

    async def add_dog(self, db: AsyncSession, identity: Identity, dog_data: DogCreate) -> DogView:
        """
        Append a new dog to the caller's list.

        Raises:
            NotFoundError: the caller has no owner profile
        """
        try:
            owner = await self._load_owner(db, identity)
            dog = Dog(id=uuid.uuid4(), **dog_data.model_dump())
            owner.dogs.append(dog)
            await db.commit()
        except WoofPointError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error adding dog for %s: %s", identity.user_id, e)
            raise DatabaseError()

        logger.info("Dog %s added for owner %s (position %d)", dog.id, identity.user_id, dog.position)
        return DogView.model_validate(dog)

    async def update_dog(
        self,
        db: AsyncSession,
        identity: Identity,
        dog_id: Union[str, uuid.UUID],
        patch: DogUpdate,
    ) -> DogView:
        """
        Overwrite only the fields present in `patch`; the rest keep their values.

        Raises:
            ValidationError: malformed dog id
            NotFoundError: no owner profile, or no dog with that id in it
        """
        target_id = parse_dog_id(dog_id)
        changes = patch.model_dump(exclude_unset=True)

        try:
            owner = await self._load_owner(db, identity)
            dog = owner.find_dog(target_id)
            if dog is None:
                raise NotFoundError(resource="Dog", resource_id=str(target_id), message="Dog not found")

            for field, value in changes.items():
                setattr(dog, field, value)
            await db.commit()
        except WoofPointError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating dog %s: %s", target_id, e)
            raise DatabaseError()

        logger.info("Dog %s updated (%s)", target_id, ", ".join(sorted(changes)) or "no changes")
        return DogView.model_validate(dog)

    async def delete_dog(
        self, db: AsyncSession, identity: Identity, dog_id: Union[str, uuid.UUID]
    ) -> None:
        """
        Remove the dog if it is in the caller's list. Deleting twice is fine.

        Raises:
            ValidationError: malformed dog id
            NotFoundError: no owner profile
        """
        target_id = parse_dog_id(dog_id)

        try:
            owner = await self._load_owner(db, identity)
            dog = owner.find_dog(target_id)
            if dog is None:
                logger.info("Delete of absent dog %s ignored", target_id)
                return
            owner.dogs.remove(dog)
            await db.commit()
        except WoofPointError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error deleting dog %s: %s", target_id, e)
            raise DatabaseError()

        logger.info("Dog %s removed for owner %s", target_id, identity.user_id)


# Module-level singleton
dog_service = DogService()
