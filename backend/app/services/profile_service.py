"""
WoofPoint Backend — Profile Aggregation Service
=================================================

What:  Reads and writes the combined "user + role profile" view for owners
       and trainers.
Why:   Clients edit one profile form, but the data lives in two tables: the
       `users` row (name, phone, zip, photo) and the role-specific profile.
       This service is the single place that joins and splits them.
How:   Load the User by the caller's id (absent → 404), load the profile by
       user_id (absent → defaults on read, created on write), resolve the
       photo reference to a signed URL, and build a fully backfilled view.

Read path:
    ┌───────────┐    ┌────────────────┐    ┌──────────────┐    ┌──────────┐
    │ User (404)│───▶│ Role profile   │───▶│ Photo → URL  │───▶│ View     │
    │           │    │ (or defaults)  │    │ (fail soft)  │    │ backfill │
    └───────────┘    └────────────────┘    └──────────────┘    └──────────┘

Write path:
    User fields (only those supplied) and the role-profile upsert go out in
    one commit, issued here before the view is built: both land or neither
    does, and a failed commit is a DatabaseError rather than a 200.

Trainer specialization rule:
    keep = [s for s in submitted if norm(s) in {norm(t) for t in service types}]
    keep = keep[:3]            (submission order, never an error)
    norm(x) = x.strip().lower()
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, WoofPointError
from app.models import OwnerProfile, TrainerProfile, User
from app.models.trainer import MAX_SPECIALIZATIONS
from app.schemas.owner import DogView, OwnerLocation, OwnerProfileUpdate, OwnerProfileView
from app.schemas.trainer import (
    BusinessInfo,
    Certification,
    Portfolio,
    Ratings,
    Service,
    TrainerLocation,
    TrainerProfileUpdate,
    TrainerProfileView,
)
from app.security import Identity
from app.services.storage_service import storage_service

logger = logging.getLogger(__name__)

# User columns a profile update may touch
_MUTABLE_USER_FIELDS = ("first_name", "last_name", "phone", "zip_code")


def _normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def filter_specializations(
    specializations: Iterable[str], services: Iterable[Service]
) -> List[str]:
    """
    Keep the specializations that name one of the trainer's service types.

    Matching is trimmed and case-insensitive; the submitted spelling is kept.
    Order follows submission and the result is capped at MAX_SPECIALIZATIONS.
    """
    service_types = {_normalize(s.type) for s in services}
    service_types.discard("")
    valid = [spec for spec in specializations if _normalize(spec) in service_types]
    return valid[:MAX_SPECIALIZATIONS]


class ProfileService:
    """
    Owner and trainer profile aggregation.

    Stateless: every call receives the session, so tests can pass an
    in-memory SQLite session directly.
    """

    # ── Shared helpers ────────────────────────────────────────────────────

    async def _load_user(self, db: AsyncSession, identity: Identity) -> User:
        user = await db.get(User, identity.user_id)
        if user is None:
            raise NotFoundError(resource="User", resource_id=str(identity.user_id))
        return user

    @staticmethod
    def _apply_user_fields(user: User, patch) -> None:
        for field in _MUTABLE_USER_FIELDS:
            value = getattr(patch, field)
            if value is not None:
                setattr(user, field, value)

    # ══════════════════════════════════════════════════════════════════════
    # Owner
    # ══════════════════════════════════════════════════════════════════════

    async def _build_owner_view(
        self, user: User, profile: Optional[OwnerProfile]
    ) -> OwnerProfileView:
        location = OwnerLocation()
        dogs: List[DogView] = []
        if profile is not None:
            location = OwnerLocation(
                address=profile.address,
                city=profile.city,
                state=profile.state,
                zip_code=profile.zip_code,
            )
            dogs = [DogView.model_validate(dog) for dog in profile.dogs]

        return OwnerProfileView(
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone=user.phone,
            zip_code=user.zip_code,
            profile_photo=await storage_service.resolve_photo_url(user.profile_photo),
            location=location,
            dogs=dogs,
        )

    async def get_owner_profile(self, db: AsyncSession, identity: Identity) -> OwnerProfileView:
        """
        Raises:
            NotFoundError: the caller's user row no longer exists
        """
        try:
            user = await self._load_user(db, identity)
            profile = await db.scalar(
                select(OwnerProfile).where(OwnerProfile.user_id == user.id)
            )
        except WoofPointError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error loading owner profile %s: %s", identity.user_id, e)
            raise DatabaseError()

        return await self._build_owner_view(user, profile)

    async def update_owner_profile(
        self, db: AsyncSession, identity: Identity, patch: OwnerProfileUpdate
    ) -> OwnerProfileView:
        """
        Apply supplied user fields, then upsert the owner profile.

        Location is replaced only when `patch.location` is present; its
        omitted sub-fields become "". Dogs are never touched here.
        """
        try:
            user = await self._load_user(db, identity)
            self._apply_user_fields(user, patch)

            profile = await db.scalar(
                select(OwnerProfile).where(OwnerProfile.user_id == user.id)
            )
            if profile is None:
                profile = OwnerProfile(user_id=user.id, dogs=[])
                db.add(profile)
                logger.info("Owner profile created on first update for %s", user.id)

            if patch.location is not None:
                profile.address = patch.location.address
                profile.city = patch.location.city
                profile.state = patch.location.state
                profile.zip_code = patch.location.zip_code

            await db.commit()

        except WoofPointError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating owner profile %s: %s", identity.user_id, e)
            raise DatabaseError()

        logger.info("Owner profile updated for %s", user.id)
        return await self._build_owner_view(user, profile)

    # ══════════════════════════════════════════════════════════════════════
    # Trainer
    # ══════════════════════════════════════════════════════════════════════

    async def _build_trainer_view(
        self, user: User, profile: Optional[TrainerProfile]
    ) -> TrainerProfileView:
        view = TrainerProfileView(
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone=user.phone,
            zip_code=user.zip_code,
            profile_photo=await storage_service.resolve_photo_url(user.profile_photo),
        )
        if profile is None:
            return view

        view.business_info = BusinessInfo(
            years_of_experience=profile.years_of_experience,
            certifications=[Certification.model_validate(c) for c in profile.certifications or []],
        )
        view.services = [Service.model_validate(s) for s in profile.services or []]
        view.location = TrainerLocation(
            address=profile.address, city=profile.city, state=profile.state
        )
        view.portfolio = Portfolio(
            bio=profile.bio, specializations=list(profile.specializations or [])
        )
        view.ratings = Ratings(
            average_rating=profile.average_rating, total_reviews=profile.total_reviews
        )
        return view

    async def get_trainer_profile(
        self, db: AsyncSession, identity: Identity
    ) -> TrainerProfileView:
        """
        Raises:
            NotFoundError: the caller's user row no longer exists
        """
        try:
            user = await self._load_user(db, identity)
            profile = await db.scalar(
                select(TrainerProfile).where(TrainerProfile.user_id == user.id)
            )
        except WoofPointError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error loading trainer profile %s: %s", identity.user_id, e)
            raise DatabaseError()

        return await self._build_trainer_view(user, profile)

    async def update_trainer_profile(
        self, db: AsyncSession, identity: Identity, patch: TrainerProfileUpdate
    ) -> TrainerProfileView:
        """
        Apply supplied user fields, then replace the trainer profile.

        Business info, services, location, and portfolio are overwritten as a
        whole from the patch (omitted parts become defaults). Ratings and
        verification are left alone.
        """
        certifications = [{"name": c.name} for c in patch.certifications]
        services = [s.model_dump() for s in patch.services]
        specializations = filter_specializations(patch.specializations, patch.services)
        if len(specializations) < len(patch.specializations):
            logger.debug(
                "Dropped %d specialization(s) for %s",
                len(patch.specializations) - len(specializations),
                identity.user_id,
            )

        try:
            user = await self._load_user(db, identity)
            self._apply_user_fields(user, patch)

            profile = await db.scalar(
                select(TrainerProfile).where(TrainerProfile.user_id == user.id)
            )
            if profile is None:
                profile = TrainerProfile(user_id=user.id)
                db.add(profile)
                logger.info("Trainer profile created on first update for %s", user.id)

            profile.years_of_experience = patch.years_of_experience
            profile.certifications = certifications
            profile.services = services
            profile.address = patch.location.address
            profile.city = patch.location.city
            profile.state = patch.location.state
            profile.bio = patch.bio
            profile.specializations = specializations

            await db.commit()

        except WoofPointError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating trainer profile %s: %s", identity.user_id, e)
            raise DatabaseError()

        logger.info("Trainer profile updated for %s", user.id)
        return await self._build_trainer_view(user, profile)


# Module-level singleton
profile_service = ProfileService()
