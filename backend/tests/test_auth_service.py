"""
WoofPoint Backend — Account Service Unit Tests
================================================

What:  AuthService against a real (in-memory SQLite) session; S3 mocked.

What we test:
    ✅ signup stores a hashed password and creates the matching role profile
    ✅ duplicate email (any letter case) → ConflictError
    ✅ login success / unknown email / wrong password
    ✅ logout with and without an identity
    ✅ photo upload: validation failures, missing user, key stored on the user
"""

import uuid

import jwt
import pytest
from sqlalchemy import func, select

from app.config import settings
from app.exceptions import (
    ConflictError,
    FileTooLargeError,
    NotFoundError,
    UnauthorizedError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from app.models import OwnerProfile, TrainerProfile, User
from app.schemas.auth import LoginRequest, SignupRequest
from app.security import Identity
from app.services.auth_service import AuthService


def _signup(**overrides) -> SignupRequest:
    data = {
        "email": "Jane.Doe@Example.com",
        "password": "secret123",
        "role": "owner",
        "firstName": "Jane",
        "lastName": "Doe",
        "phone": "5551234567",
        "zipCode": "94107",
    }
    data.update(overrides)
    return SignupRequest(**data)


class TestSignup:

    def setup_method(self):
        self.service = AuthService()

    @pytest.mark.asyncio
    async def test_owner_signup_creates_user_and_owner_profile(self, db_session):
        token = await self.service.signup(db_session, _signup())

        payload = jwt.decode(token, settings.jwt_secret, algorithms=["HS256"])
        user = await db_session.scalar(select(User).where(User.email == "jane.doe@example.com"))
        assert user is not None
        assert payload["userId"] == str(user.id)
        assert payload["role"] == "owner"
        assert user.password_hash != "secret123"

        profile = await db_session.scalar(select(OwnerProfile).where(OwnerProfile.user_id == user.id))
        assert profile is not None
        trainer_profiles = await db_session.scalar(select(func.count()).select_from(TrainerProfile))
        assert trainer_profiles == 0

    @pytest.mark.asyncio
    async def test_trainer_signup_creates_trainer_profile(self, db_session):
        await self.service.signup(db_session, _signup(role="trainer", email="coach@example.com"))

        user = await db_session.scalar(select(User).where(User.email == "coach@example.com"))
        profile = await db_session.scalar(select(TrainerProfile).where(TrainerProfile.user_id == user.id))
        assert profile is not None
        assert profile.specializations == []
        assert profile.average_rating == 0

    @pytest.mark.asyncio
    async def test_duplicate_email_is_case_insensitive(self, db_session):
        await self.service.signup(db_session, _signup(email="jane@example.com"))

        with pytest.raises(ConflictError):
            await self.service.signup(db_session, _signup(email="JANE@example.com"))


class TestLogin:

    def setup_method(self):
        self.service = AuthService()

    @pytest.mark.asyncio
    async def test_login_success(self, db_session, make_user):
        user, _ = await make_user("trainer", email="coach@example.com", password="hunter22")

        result = await self.service.login(
            db_session, LoginRequest(email="  Coach@Example.com ", password="hunter22")
        )

        assert result.message == "Login successful"
        assert result.role == "trainer"
        assert result.user.id == user.id
        assert "password_hash" not in result.user.model_dump()
        assert jwt.decode(result.token, settings.jwt_secret, algorithms=["HS256"])["userId"] == str(user.id)

    @pytest.mark.asyncio
    async def test_unknown_email(self, db_session):
        with pytest.raises(UnauthorizedError) as exc_info:
            await self.service.login(db_session, LoginRequest(email="ghost@example.com", password="x"))
        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_wrong_password(self, db_session, make_user):
        await make_user("owner", email="owner@example.com", password="right-one")

        with pytest.raises(UnauthorizedError):
            await self.service.login(
                db_session, LoginRequest(email="owner@example.com", password="wrong-one")
            )


class TestLogout:

    @pytest.mark.asyncio
    async def test_logout_with_and_without_identity(self):
        service = AuthService()
        identity = Identity(user_id=uuid.uuid4(), role="owner", email="o@example.com")

        assert (await service.logout(identity)).message == "Logout successful"
        assert (await service.logout(None)).message == "Logout successful"


class TestUploadPhoto:

    def setup_method(self):
        self.service = AuthService()

    @pytest.mark.asyncio
    async def test_upload_stores_key_and_returns_signed_url(
        self, db_session, owner, mock_storage, signed_url_for
    ):
        user, identity = owner

        result = await self.service.upload_photo(
            db_session, identity, "me.png", "image/png", b"\x89PNG fake bytes"
        )

        expected_key = f"profile-photos/{user.id}-1700000000000-me.png"
        assert user.profile_photo == expected_key
        assert result.photo_url == signed_url_for(expected_key)
        assert result.user.profile_photo == expected_key
        mock_storage["upload"].assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_file(self, db_session, owner, mock_storage):
        _, identity = owner
        with pytest.raises(ValidationError) as exc_info:
            await self.service.upload_photo(db_session, identity, None, None, None)
        assert exc_info.value.message == "No file uploaded"
        mock_storage["upload"].assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_image_rejected(self, db_session, owner, mock_storage):
        _, identity = owner
        with pytest.raises(UnsupportedMediaTypeError):
            await self.service.upload_photo(db_session, identity, "cv.pdf", "application/pdf", b"%PDF")
        mock_storage["upload"].assert_not_awaited()

    @pytest.mark.asyncio
    async def test_oversized_file_rejected(self, db_session, owner, mock_storage):
        _, identity = owner
        content = b"x" * (settings.max_photo_size + 1)
        with pytest.raises(FileTooLargeError):
            await self.service.upload_photo(db_session, identity, "big.jpg", "image/jpeg", content)

    @pytest.mark.asyncio
    async def test_unknown_user(self, db_session, mock_storage):
        identity = Identity(user_id=uuid.uuid4(), role="owner", email="gone@example.com")
        with pytest.raises(NotFoundError):
            await self.service.upload_photo(db_session, identity, "me.jpg", "image/jpeg", b"jpeg")
        mock_storage["upload"].assert_not_awaited()
