"""
WoofPoint Backend — Dog Service Unit Tests
============================================

What we test:
    ✅ add: defaults for omitted fields, fresh unique id, list order kept
    ✅ update: shallow merge, unknown id → 404, malformed id → 400
    ✅ delete: removes by id, second delete is a no-op, order renumbered
    ✅ isolation: one owner can never touch another owner's dogs
    ✅ caller without an owner profile → 404
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models import Dog, OwnerProfile
from app.schemas.owner import DogCreate, DogUpdate
from app.services.dog_service import DogService, parse_dog_id


class TestParseDogId:

    def test_accepts_uuid_string(self):
        value = uuid.uuid4()
        assert parse_dog_id(str(value)) == value

    def test_rejects_malformed(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_dog_id("not-a-uuid")
        assert exc_info.value.message == "Invalid dog ID"


class TestAddDog:

    def setup_method(self):
        self.service = DogService()

    @pytest.mark.asyncio
    async def test_sparse_payload_gets_defaults(self, db_session, owner):
        _, identity = owner

        dog = await self.service.add_dog(db_session, identity, DogCreate.model_validate({"name": "Rex"}))

        assert isinstance(dog.id, uuid.UUID)
        assert dog.name == "Rex"
        assert dog.breed == ""
        assert dog.age == 0
        assert dog.size == "small"
        assert dog.photos == []

    @pytest.mark.asyncio
    async def test_explicit_nulls_become_defaults(self, db_session, owner):
        _, identity = owner

        dog = await self.service.add_dog(
            db_session, identity, DogCreate.model_validate({"name": "Rex", "size": None, "photos": None})
        )

        assert dog.size == "small"
        assert dog.photos == []

    @pytest.mark.asyncio
    async def test_ids_are_unique_and_order_is_kept(self, db_session, owner):
        user, identity = owner

        first = await self.service.add_dog(db_session, identity, DogCreate(name="Rex"))
        second = await self.service.add_dog(db_session, identity, DogCreate(name="Bella", size="large"))

        assert first.id != second.id
        profile = await db_session.scalar(select(OwnerProfile).where(OwnerProfile.user_id == user.id))
        assert [d.name for d in profile.dogs] == ["Rex", "Bella"]
        assert [d.position for d in profile.dogs] == [0, 1]

    @pytest.mark.asyncio
    async def test_owner_without_profile(self, db_session, make_user):
        _, identity = await make_user("owner", with_profile=False)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.add_dog(db_session, identity, DogCreate(name="Rex"))
        assert exc_info.value.message == "Owner profile not found"


class TestUpdateDog:

    def setup_method(self):
        self.service = DogService()

    @pytest.mark.asyncio
    async def test_only_sent_fields_change(self, db_session, owner):
        _, identity = owner
        dog = await self.service.add_dog(
            db_session, identity, DogCreate(name="Rex", breed="Beagle", age=3, size="medium")
        )

        updated = await self.service.update_dog(
            db_session, identity, str(dog.id), DogUpdate.model_validate({"age": 4})
        )

        assert updated.id == dog.id
        assert updated.age == 4
        assert updated.name == "Rex"
        assert updated.breed == "Beagle"
        assert updated.size == "medium"

    @pytest.mark.asyncio
    async def test_unknown_dog(self, db_session, owner):
        _, identity = owner
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.update_dog(db_session, identity, str(uuid.uuid4()), DogUpdate(name="Max"))
        assert exc_info.value.message == "Dog not found"

    @pytest.mark.asyncio
    async def test_malformed_id(self, db_session, owner):
        _, identity = owner
        with pytest.raises(ValidationError):
            await self.service.update_dog(db_session, identity, "12", DogUpdate(name="Max"))

    @pytest.mark.asyncio
    async def test_cannot_reach_another_owners_dog(self, db_session, owner, make_user):
        _, identity = owner
        _, other = await make_user("owner", email="other@example.com")
        dog = await self.service.add_dog(db_session, other, DogCreate(name="Bella"))

        with pytest.raises(NotFoundError):
            await self.service.update_dog(db_session, identity, str(dog.id), DogUpdate(name="Stolen"))

        stored = await db_session.get(Dog, dog.id)
        assert stored.name == "Bella"


class TestDeleteDog:

    def setup_method(self):
        self.service = DogService()

    @pytest.mark.asyncio
    async def test_delete_removes_row_and_renumbers(self, db_session, owner):
        user, identity = owner
        first = await self.service.add_dog(db_session, identity, DogCreate(name="Rex"))
        await self.service.add_dog(db_session, identity, DogCreate(name="Bella"))

        await self.service.delete_dog(db_session, identity, str(first.id))

        profile = await db_session.scalar(select(OwnerProfile).where(OwnerProfile.user_id == user.id))
        assert [d.name for d in profile.dogs] == ["Bella"]
        assert profile.dogs[0].position == 0
        assert await db_session.scalar(select(func.count()).select_from(Dog)) == 1

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, db_session, owner):
        _, identity = owner
        dog = await self.service.add_dog(db_session, identity, DogCreate(name="Rex"))

        await self.service.delete_dog(db_session, identity, str(dog.id))
        await self.service.delete_dog(db_session, identity, str(dog.id))

        assert await db_session.scalar(select(func.count()).select_from(Dog)) == 0

    @pytest.mark.asyncio
    async def test_delete_of_another_owners_dog_is_a_no_op(self, db_session, owner, make_user):
        _, identity = owner
        _, other = await make_user("owner", email="other@example.com")
        dog = await self.service.add_dog(db_session, other, DogCreate(name="Bella"))

        await self.service.delete_dog(db_session, identity, str(dog.id))

        assert await db_session.get(Dog, dog.id) is not None

    @pytest.mark.asyncio
    async def test_malformed_id(self, db_session, owner):
        _, identity = owner
        with pytest.raises(ValidationError):
            await self.service.delete_dog(db_session, identity, "bad-id")


class TestCommitFailure:

    def setup_method(self):
        self.service = DogService()

    @pytest.mark.asyncio
    async def test_failed_commit_raises_database_error(self, db_session, owner, monkeypatch):
        _, identity = owner
        monkeypatch.setattr(
            db_session,
            "commit",
            AsyncMock(side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))),
        )

        with pytest.raises(DatabaseError):
            await self.service.add_dog(db_session, identity, DogCreate(name="Rex"))
