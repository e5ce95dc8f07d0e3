"""
WoofPoint Backend — Account Route Handlers
============================================

What:  POST /api/auth/signup, /login, /logout, /upload-photo.
Why:   Entry points for account creation, sign-in, and the profile photo.
How:   Thin handlers: parse the request, call AuthService, return its result.

Security Considerations:
    - Signup and login are rate limited per client IP (RateLimitMiddleware)
    - Upload requires a bearer token; the photo is stored under the caller's id
    - Logout accepts a missing or stale token; it only records the event
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    PhotoUploadResponse,
    SignupRequest,
    SignupResponse,
)
from app.schemas.common import ErrorResponse, MessageResponse
from app.security import Identity, get_current_identity, get_optional_identity
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/signup",
    status_code=201,
    response_model=SignupResponse,
    responses={
        400: {"description": "Invalid body or email already registered", "model": ErrorResponse},
        429: {"description": "Rate limit exceeded", "model": ErrorResponse},
    },
    summary="Create an owner or trainer account",
)
async def signup(
    body: SignupRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SignupResponse:
    token = await auth_service.signup(db, body)
    return SignupResponse(token=token)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Missing email or password", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
        429: {"description": "Rate limit exceeded", "model": ErrorResponse},
    },
    summary="Exchange email and password for a token",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    return await auth_service.login(db, body)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Record a logout (tokens are not revoked)",
)
async def logout(
    identity: Optional[Identity] = Depends(get_optional_identity),
) -> MessageResponse:
    return await auth_service.logout(identity)


@router.post(
    "/upload-photo",
    response_model=PhotoUploadResponse,
    responses={
        400: {"description": "Missing file, not an image, or too large", "model": ErrorResponse},
        401: {"description": "Missing bearer token", "model": ErrorResponse},
        403: {"description": "Invalid or expired token", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Upload the caller's profile photo",
)
async def upload_photo(
    profile_photo: Optional[UploadFile] = File(
        None,
        alias="profilePhoto",
        description="Image file (image/*, max 5MB)",
    ),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> PhotoUploadResponse:
    """
    Store a new profile photo and return a signed URL for it.

    The whole file is read into memory; the size cap is enforced by
    StorageService right after.
    """
    if profile_photo is None:
        return await auth_service.upload_photo(db, identity, None, None, None)

    try:
        content = await profile_photo.read()
        logger.info(
            "Received photo upload from %s: filename=%s, size=%d bytes",
            identity.user_id,
            profile_photo.filename or "unknown",
            len(content),
        )
        return await auth_service.upload_photo(
            db,
            identity,
            filename=profile_photo.filename,
            content_type=profile_photo.content_type,
            content=content,
        )
    finally:
        await profile_photo.close()
