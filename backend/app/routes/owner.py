"""
WoofPoint Backend — Owner Route Handlers
==========================================

What:  Owner profile, dog list, and the trainer directory.
Who:   Called by the owner dashboard.

    GET    /api/owner/profile                 (owner)
    PUT    /api/owner/profile                 (owner)
    POST   /api/owner/dogs                    (owner)
    PUT    /api/owner/dogs/{dogId}            (owner)
    DELETE /api/owner/dogs/{dogId}            (owner)
    GET    /api/owner/trainers                (any authenticated user)
    GET    /api/owner/trainers/{trainerId}    (any authenticated user)

`dogId` and `trainerId` are taken as plain strings so a malformed id is
reported as our 400 `validation_error` by the service, not as a 422 from
path parsing.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.owner import (
    DogCreate,
    DogResponse,
    DogUpdate,
    OwnerProfileResponse,
    OwnerProfileUpdate,
    OwnerProfileUpdateResponse,
)
from app.schemas.trainer import TrainerDetail, TrainerSummary
from app.security import Identity, get_current_identity, require_role
from app.services.dog_service import dog_service
from app.services.profile_service import profile_service
from app.services.trainer_directory_service import trainer_directory_service

router = APIRouter(prefix="/api/owner", tags=["Owner"])

require_owner = require_role("owner")

_AUTH_ERRORS = {
    401: {"description": "Missing bearer token", "model": ErrorResponse},
    403: {"description": "Invalid token or not an owner", "model": ErrorResponse},
}


# ── Profile ───────────────────────────────────────────────────────────────


@router.get(
    "/profile",
    response_model=OwnerProfileResponse,
    responses={**_AUTH_ERRORS, 404: {"description": "User not found", "model": ErrorResponse}},
    summary="Get the caller's owner profile",
)
async def get_owner_profile(
    identity: Identity = Depends(require_owner),
    db: AsyncSession = Depends(get_db_session),
) -> OwnerProfileResponse:
    profile = await profile_service.get_owner_profile(db, identity)
    return OwnerProfileResponse(profile=profile)


@router.put(
    "/profile",
    response_model=OwnerProfileUpdateResponse,
    responses={**_AUTH_ERRORS, 404: {"description": "User not found", "model": ErrorResponse}},
    summary="Update the caller's owner profile",
)
async def update_owner_profile(
    body: OwnerProfileUpdate,
    identity: Identity = Depends(require_owner),
    db: AsyncSession = Depends(get_db_session),
) -> OwnerProfileUpdateResponse:
    profile = await profile_service.update_owner_profile(db, identity, body)
    return OwnerProfileUpdateResponse(profile=profile)


# ── Dogs ──────────────────────────────────────────────────────────────────


@router.post(
    "/dogs",
    status_code=201,
    response_model=DogResponse,
    responses={**_AUTH_ERRORS, 404: {"description": "Owner profile not found", "model": ErrorResponse}},
    summary="Add a dog to the caller's list",
)
async def add_dog(
    body: DogCreate,
    identity: Identity = Depends(require_owner),
    db: AsyncSession = Depends(get_db_session),
) -> DogResponse:
    dog = await dog_service.add_dog(db, identity, body)
    return DogResponse(message="Dog added successfully", dog=dog)


@router.put(
    "/dogs/{dog_id}",
    response_model=DogResponse,
    responses={
        **_AUTH_ERRORS,
        400: {"description": "Malformed dog id or body", "model": ErrorResponse},
        404: {"description": "Owner profile or dog not found", "model": ErrorResponse},
    },
    summary="Patch one of the caller's dogs",
)
async def update_dog(
    dog_id: str,
    body: DogUpdate,
    identity: Identity = Depends(require_owner),
    db: AsyncSession = Depends(get_db_session),
) -> DogResponse:
    dog = await dog_service.update_dog(db, identity, dog_id, body)
    return DogResponse(message="Dog updated successfully", dog=dog)


@router.delete(
    "/dogs/{dog_id}",
    response_model=MessageResponse,
    responses={
        **_AUTH_ERRORS,
        400: {"description": "Malformed dog id", "model": ErrorResponse},
        404: {"description": "Owner profile not found", "model": ErrorResponse},
    },
    summary="Remove one of the caller's dogs (idempotent)",
)
async def delete_dog(
    dog_id: str,
    identity: Identity = Depends(require_owner),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await dog_service.delete_dog(db, identity, dog_id)
    return MessageResponse(message="Dog deleted successfully")


# ── Trainer directory ─────────────────────────────────────────────────────


@router.get(
    "/trainers",
    response_model=List[TrainerSummary],
    summary="List all trainers",
)
async def list_trainers(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> List[TrainerSummary]:
    return await trainer_directory_service.list_trainers(db)


@router.get(
    "/trainers/{trainer_id}",
    response_model=TrainerDetail,
    responses={
        400: {"description": "Malformed trainer id", "model": ErrorResponse},
        404: {"description": "Trainer or trainer profile not found", "model": ErrorResponse},
    },
    summary="Get one trainer's full profile",
)
async def get_trainer(
    trainer_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> TrainerDetail:
    return await trainer_directory_service.get_trainer_by_id(db, trainer_id)
