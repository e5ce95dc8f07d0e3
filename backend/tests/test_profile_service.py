"""
WoofPoint Backend — Profile Aggregation Unit Tests
====================================================

What we test:
    ✅ specialization filter: case-insensitive, trimmed, order-preserving, max 3
    ✅ owner read backfills location/dogs; photo resolved to a signed URL
    ✅ owner update: user fields only when sent, location merged with "" defaults,
       location untouched when omitted, profile upserted when missing
    ✅ trainer update: certification/service reshaping, specialization truncation,
       profile replaced as a whole, ratings untouched
    ✅ missing user → NotFoundError
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from app.exceptions import DatabaseError, NotFoundError
from app.models import OwnerProfile, TrainerProfile
from app.schemas.owner import OwnerProfileUpdate
from app.schemas.trainer import Service, TrainerProfileUpdate
from app.security import Identity
from app.services.profile_service import ProfileService, filter_specializations


def _services(*types):
    return [Service(type=t) for t in types]


class TestFilterSpecializations:

    def test_matches_case_insensitively_and_keeps_submitted_spelling(self):
        result = filter_specializations(["  AGILITY ", "puppy"], _services("Agility", "Puppy"))
        assert result == ["  AGILITY ", "puppy"]

    def test_non_matching_entries_are_dropped(self):
        assert filter_specializations(["Agility", "Herding"], _services("agility")) == ["Agility"]

    def test_truncates_to_first_three_matches_in_submission_order(self):
        services = _services("a", "b", "c", "d")
        result = filter_specializations(["d", "x", "c", "b", "a"], services)
        assert result == ["d", "c", "b"]

    def test_empty_service_types_never_match(self):
        assert filter_specializations(["", "  "], _services("", "obedience")) == []


class TestOwnerProfile:

    def setup_method(self):
        self.service = ProfileService()

    @pytest.mark.asyncio
    async def test_read_backfills_defaults(self, db_session, owner, mock_storage):
        _, identity = owner

        view = await self.service.get_owner_profile(db_session, identity)

        assert view.email == "owner@example.com"
        assert view.profile_photo == ""
        assert view.location.model_dump() == {"address": "", "city": "", "state": "", "zip_code": ""}
        assert view.dogs == []

    @pytest.mark.asyncio
    async def test_read_without_profile_row_still_backfills(self, db_session, make_user, mock_storage):
        _, identity = await make_user("owner", with_profile=False)

        view = await self.service.get_owner_profile(db_session, identity)

        assert view.location.city == ""
        assert view.dogs == []

    @pytest.mark.asyncio
    async def test_read_resolves_photo(self, db_session, make_user, mock_storage, signed_url_for):
        _, identity = await make_user("owner", profile_photo="profile-photos/abc-1-me.jpg")

        view = await self.service.get_owner_profile(db_session, identity)

        assert view.profile_photo == signed_url_for("profile-photos/abc-1-me.jpg")

    @pytest.mark.asyncio
    async def test_unknown_user(self, db_session, mock_storage):
        identity = Identity(user_id=uuid.uuid4(), role="owner", email="gone@example.com")
        with pytest.raises(NotFoundError):
            await self.service.get_owner_profile(db_session, identity)

    @pytest.mark.asyncio
    async def test_update_merges_location_and_user_fields(self, db_session, owner, mock_storage):
        user, identity = owner
        patch = OwnerProfileUpdate.model_validate(
            {"firstName": "Ana", "location": {"city": "Austin", "state": None}}
        )

        view = await self.service.update_owner_profile(db_session, identity, patch)

        assert view.first_name == "Ana"
        assert view.last_name == user.last_name
        assert view.location.model_dump() == {"address": "", "city": "Austin", "state": "", "zip_code": ""}

    @pytest.mark.asyncio
    async def test_update_without_location_keeps_stored_location(self, db_session, owner, mock_storage):
        _, identity = owner
        await self.service.update_owner_profile(
            db_session, identity, OwnerProfileUpdate.model_validate({"location": {"city": "Austin"}})
        )

        view = await self.service.update_owner_profile(
            db_session, identity, OwnerProfileUpdate.model_validate({"phone": "5550000000"})
        )

        assert view.phone == "5550000000"
        assert view.location.city == "Austin"

    @pytest.mark.asyncio
    async def test_update_creates_missing_profile(self, db_session, make_user, mock_storage):
        user, identity = await make_user("owner", with_profile=False)

        await self.service.update_owner_profile(
            db_session, identity, OwnerProfileUpdate.model_validate({"location": {"address": "1 Main St"}})
        )

        profile = await db_session.scalar(select(OwnerProfile).where(OwnerProfile.user_id == user.id))
        assert profile is not None
        assert profile.address == "1 Main St"

    @pytest.mark.asyncio
    async def test_update_unknown_user(self, db_session, mock_storage):
        identity = Identity(user_id=uuid.uuid4(), role="owner", email="gone@example.com")
        with pytest.raises(NotFoundError):
            await self.service.update_owner_profile(db_session, identity, OwnerProfileUpdate())


class TestTrainerProfile:

    def setup_method(self):
        self.service = ProfileService()

    @pytest.mark.asyncio
    async def test_read_backfills_nested_objects(self, db_session, trainer, mock_storage):
        _, identity = trainer

        view = await self.service.get_trainer_profile(db_session, identity)

        assert view.business_info.years_of_experience == 0
        assert view.business_info.certifications == []
        assert view.services == []
        assert view.location.model_dump() == {"address": "", "city": "", "state": ""}
        assert view.portfolio.model_dump() == {"bio": "", "specializations": []}
        assert view.ratings.model_dump() == {"average_rating": 0.0, "total_reviews": 0}

    @pytest.mark.asyncio
    async def test_update_reshapes_and_filters(self, db_session, trainer, mock_storage):
        user, identity = trainer
        patch = TrainerProfileUpdate.model_validate(
            {
                "lastName": "Barker",
                "yearsOfExperience": 6,
                "certifications": [{"name": "CPDT-KA", "issuer": "CCPDT"}, {}],
                "services": [
                    {"type": "Agility", "description": "Jumps", "duration": 60, "price": 80},
                    {"type": "Puppy"},
                    {"type": "Obedience", "duration": None},
                    {"type": "Scent"},
                ],
                "bio": "Positive reinforcement only.",
                "specializations": ["scent", "Herding", "AGILITY", "puppy", "obedience"],
                "location": {"city": "Denver"},
            }
        )

        view = await self.service.update_trainer_profile(db_session, identity, patch)

        assert view.last_name == "Barker"
        assert view.first_name == user.first_name
        assert [c.name for c in view.business_info.certifications] == ["CPDT-KA", ""]
        assert view.business_info.years_of_experience == 6
        assert view.services[1].model_dump() == {"type": "Puppy", "description": "", "duration": 0, "price": 0.0}
        assert view.services[2].duration == 0
        assert view.portfolio.specializations == ["scent", "AGILITY", "puppy"]
        assert view.location.model_dump() == {"address": "", "city": "Denver", "state": ""}

        profile = await db_session.scalar(select(TrainerProfile).where(TrainerProfile.user_id == user.id))
        assert profile.certifications == [{"name": "CPDT-KA"}, {"name": ""}]
        assert profile.services[0] == {"type": "Agility", "description": "Jumps", "duration": 60, "price": 80.0}

    @pytest.mark.asyncio
    async def test_update_replaces_whole_profile_but_not_ratings(self, db_session, trainer, mock_storage):
        user, identity = trainer
        profile = await db_session.scalar(select(TrainerProfile).where(TrainerProfile.user_id == user.id))
        profile.average_rating = 4.5
        profile.total_reviews = 12
        await db_session.flush()

        await self.service.update_trainer_profile(
            db_session,
            identity,
            TrainerProfileUpdate.model_validate(
                {"bio": "First bio", "services": [{"type": "Agility"}], "specializations": ["agility"]}
            ),
        )
        view = await self.service.update_trainer_profile(
            db_session, identity, TrainerProfileUpdate.model_validate({"yearsOfExperience": 2})
        )

        assert view.portfolio.bio == ""
        assert view.services == []
        assert view.portfolio.specializations == []
        assert view.ratings.average_rating == 4.5
        assert view.ratings.total_reviews == 12

    @pytest.mark.asyncio
    async def test_update_creates_missing_profile(self, db_session, make_user, mock_storage):
        user, identity = await make_user("trainer", with_profile=False)

        view = await self.service.update_trainer_profile(
            db_session, identity, TrainerProfileUpdate.model_validate({"bio": "New here"})
        )

        assert view.portfolio.bio == "New here"
        profile = await db_session.scalar(select(TrainerProfile).where(TrainerProfile.user_id == user.id))
        assert profile is not None

    @pytest.mark.asyncio
    async def test_null_certification_and_service_entries_become_defaults(
        self, db_session, trainer, mock_storage
    ):
        user, identity = trainer
        patch = TrainerProfileUpdate.model_validate(
            {
                "certifications": [{"name": "X", "junk": 1}, None],
                "services": [None, {"type": "Agility"}],
            }
        )

        view = await self.service.update_trainer_profile(db_session, identity, patch)

        assert [c.name for c in view.business_info.certifications] == ["X", ""]
        assert view.services[0].model_dump() == {"type": "", "description": "", "duration": 0, "price": 0.0}
        profile = await db_session.scalar(select(TrainerProfile).where(TrainerProfile.user_id == user.id))
        assert profile.certifications == [{"name": "X"}, {"name": ""}]

    @pytest.mark.asyncio
    async def test_failed_commit_raises_database_error(self, db_session, trainer, mock_storage, monkeypatch):
        _, identity = trainer
        monkeypatch.setattr(
            db_session,
            "commit",
            AsyncMock(side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))),
        )

        with pytest.raises(DatabaseError):
            await self.service.update_trainer_profile(
                db_session, identity, TrainerProfileUpdate.model_validate({"bio": "Never stored"})
            )
