"""
WoofPoint Backend — Trainer Directory Service
===============================================

What:  The owner-facing trainer list and trainer detail page.
Why:   Owners browse trainers without ever touching the trainer's own
       profile endpoints. The list tolerates trainers who have not finished
       setup; the detail page does not.
How:   One LEFT OUTER JOIN from `users` to `trainer_profiles` for the list,
       and a primary-key lookup plus profile lookup for the detail page.

    list:    users(role='trainer') ⟕ trainer_profiles   → TrainerSummary[]
             ordered by users.created_at, users.id
    detail:  malformed id → 400
             no user / not a trainer / no profile → 404

The credential hash is never selected into either view.
"""

import logging
import uuid
from typing import List, Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError, WoofPointError
from app.models import TrainerProfile, User, UserRole
from app.schemas.trainer import Certification, Service, TrainerDetail, TrainerLocation, TrainerSummary
from app.services.storage_service import storage_service

logger = logging.getLogger(__name__)


class TrainerDirectoryService:
    """Read-only queries over trainer users and their profiles."""

    async def list_trainers(self, db: AsyncSession) -> List[TrainerSummary]:
        """Every trainer user, with profile fields defaulted when no profile exists."""
        stmt = (
            select(User, TrainerProfile)
            .outerjoin(TrainerProfile, TrainerProfile.user_id == User.id)
            .where(User.role == UserRole.TRAINER.value)
            .order_by(User.created_at, User.id)
        )
        try:
            rows = (await db.execute(stmt)).all()
        except SQLAlchemyError as e:
            logger.error("Database error listing trainers: %s", e)
            raise DatabaseError()

        summaries: List[TrainerSummary] = []
        for user, profile in rows:
            summary = TrainerSummary(
                id=user.id,
                first_name=user.first_name,
                last_name=user.last_name,
                profile_photo=await storage_service.resolve_photo_url(user.profile_photo),
            )
            if profile is not None:
                summary.specializations = list(profile.specializations or [])
                summary.average_rating = profile.average_rating
                summary.total_reviews = profile.total_reviews
                summary.location = TrainerLocation(
                    address=profile.address, city=profile.city, state=profile.state
                )
            summaries.append(summary)

        logger.debug("Trainer directory listed %d trainer(s)", len(summaries))
        return summaries

    async def get_trainer_by_id(
        self, db: AsyncSession, trainer_id: Union[str, uuid.UUID]
    ) -> TrainerDetail:
        """
        Full trainer page for one trainer user.

        Raises:
            ValidationError: `trainer_id` is not a UUID
            NotFoundError: no such user, the user is not a trainer, or the
                           trainer has not created a profile yet
        """
        try:
            user_id = trainer_id if isinstance(trainer_id, uuid.UUID) else uuid.UUID(trainer_id)
        except (ValueError, AttributeError, TypeError):
            raise ValidationError(
                message="Invalid Trainer ID", field="trainerId", context={"trainer_id": str(trainer_id)}
            )

        try:
            user = await db.get(User, user_id)
            if user is None:
                raise NotFoundError(resource="Trainer", resource_id=str(user_id))
            if user.role != UserRole.TRAINER.value:
                raise NotFoundError(
                    resource="Trainer", resource_id=str(user_id), message="This user is not a trainer"
                )
            profile = await db.scalar(
                select(TrainerProfile).where(TrainerProfile.user_id == user.id)
            )
            if profile is None:
                raise NotFoundError(
                    resource="Trainer profile",
                    resource_id=str(user_id),
                    message="Trainer profile not found",
                )
        except WoofPointError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error loading trainer %s: %s", user_id, e)
            raise DatabaseError()

        return TrainerDetail(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone=user.phone,
            profile_photo=await storage_service.resolve_photo_url(user.profile_photo),
            location=TrainerLocation(address=profile.address, city=profile.city, state=profile.state),
            bio=profile.bio,
            years_of_experience=profile.years_of_experience,
            certifications=[Certification.model_validate(c) for c in profile.certifications or []],
            services=[Service.model_validate(s) for s in profile.services or []],
            specializations=list(profile.specializations or []),
            average_rating=profile.average_rating,
            total_reviews=profile.total_reviews,
            is_verified=profile.is_verified,
        )


# Module-level singleton
trainer_directory_service = TrainerDirectoryService()
