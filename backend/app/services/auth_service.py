"""
WoofPoint Backend — Account Service
=====================================

What:  Signup, login, logout, and profile-photo upload.
Why:   Keeps credential handling and account bootstrap out of the route layer.
How:   bcrypt hashing (in a worker thread, it is CPU-bound), PyJWT tokens
       via app.security, S3 uploads via StorageService.
Who:   Called by app/routes/auth.py.

Signup bootstrap:
    A new account always gets its empty role profile in the same
    transaction, so owner dog routes and the trainer directory never see a
    user without the profile its role implies.

        role == "owner"    → OwnerProfile(user_id=...)   (no location, no dogs)
        role == "trainer"  → TrainerProfile(user_id=...) (all defaults)

Logging:
    Account events are logged with user id and email. Passwords, hashes,
    and tokens are never logged.
"""

import asyncio
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    UnauthorizedError,
    WoofPointError,
)
from app.models import OwnerProfile, TrainerProfile, User, UserRole
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    PhotoUploadResponse,
    SignupRequest,
    UserResponse,
)
from app.schemas.common import MessageResponse
from app.security import Identity, create_access_token, hash_password, verify_password
from app.services.storage_service import storage_service

logger = logging.getLogger(__name__)


class AuthService:
    """
    Account lifecycle operations.

    Error Handling Strategy:
        Domain failures raise WoofPointError subclasses directly. Any other
        SQLAlchemy failure is logged and wrapped in DatabaseError so SQL
        details never reach the client.
    """

    async def signup(self, db: AsyncSession, data: SignupRequest) -> str:
        """
        Create a user plus its empty role profile and return a fresh token.

        Raises:
            ConflictError: email already registered (comparison is case-insensitive)
            DatabaseError: persistence failed
        """
        try:
            existing = await db.scalar(select(User.id).where(User.email == data.email))
            if existing is not None:
                logger.warning("Signup rejected, email already registered: %s", data.email)
                raise ConflictError(message="User already exists", context={"field": "email"})

            password_hash = await asyncio.to_thread(hash_password, data.password)
            user = User(
                email=data.email,
                password_hash=password_hash,
                role=data.role,
                first_name=data.first_name,
                last_name=data.last_name,
                phone=data.phone,
                zip_code=data.zip_code,
            )
            db.add(user)
            # Unique index on email catches a concurrent signup that passed the check above
            await db.flush()

            if data.role == UserRole.OWNER.value:
                db.add(OwnerProfile(user_id=user.id, dogs=[]))
            else:
                db.add(TrainerProfile(user_id=user.id))
            await db.commit()

        except WoofPointError:
            raise
        except IntegrityError:
            logger.warning("Signup lost a race on email: %s", data.email)
            raise ConflictError(message="User already exists", context={"field": "email"})
        except SQLAlchemyError as e:
            logger.error("Database error during signup: %s", e)
            raise DatabaseError()

        logger.info("User signed up: %s (%s, role=%s)", user.id, user.email, user.role)
        return create_access_token(user.id, user.role, user.email)

    async def login(self, db: AsyncSession, data: LoginRequest) -> LoginResponse:
        """
        Verify credentials and issue a token.

        Unknown email and wrong password produce the same error so the
        response does not reveal which emails are registered.

        Raises:
            UnauthorizedError: invalid credentials
        """
        try:
            user = await db.scalar(select(User).where(User.email == data.email))
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", e)
            raise DatabaseError()

        if user is None or not await asyncio.to_thread(
            verify_password, data.password, user.password_hash
        ):
            logger.warning("Failed login attempt for %s", data.email)
            raise UnauthorizedError(message="Invalid credentials")

        logger.info("User logged in: %s (%s)", user.id, user.email)
        return LoginResponse(
            user=UserResponse.model_validate(user),
            token=create_access_token(user.id, user.role, user.email),
            role=user.role,
        )

    async def logout(self, identity: Optional[Identity]) -> MessageResponse:
        """
        Stateless logout: tokens are not revoked, the client discards them.
        The call exists so the event shows up in the audit log.
        """
        if identity is not None:
            logger.info("User logged out: %s (%s)", identity.user_id, identity.email)
        else:
            logger.info("Logout without a valid token (anonymous)")
        return MessageResponse(message="Logout successful")

    async def upload_photo(
        self,
        db: AsyncSession,
        identity: Identity,
        filename: Optional[str],
        content_type: Optional[str],
        content: Optional[bytes],
    ) -> PhotoUploadResponse:
        """
        Validate → load user → upload to S3 → store the key on the user.

        The user is loaded before uploading so a deleted account does not
        leave an orphaned object behind.

        Raises:
            ValidationError / UnsupportedMediaTypeError / FileTooLargeError
            NotFoundError: the token's user no longer exists
            StorageError: S3 upload failed
        """
        storage_service.validate_photo(content_type, content)

        try:
            user = await db.get(User, identity.user_id)
            if user is None:
                raise NotFoundError(resource="User", resource_id=str(identity.user_id))

            key = await storage_service.upload_profile_photo(
                user.id, filename, content, content_type
            )
            user.profile_photo = key
            await db.commit()

        except WoofPointError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error saving profile photo for %s: %s", identity.user_id, e)
            raise DatabaseError()

        logger.info("Profile photo updated for %s", user.id)
        return PhotoUploadResponse(
            photo_url=await storage_service.resolve_photo_url(key),
            user=UserResponse.model_validate(user),
        )


# Module-level singleton
auth_service = AuthService()
