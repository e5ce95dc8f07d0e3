"""
WoofPoint Backend — Trainer Route Handlers
============================================

What:  GET/PUT /api/trainer/profile for the signed-in trainer.
Who:   Called by the trainer profile editor.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.trainer import (
    TrainerProfileResponse,
    TrainerProfileUpdate,
    TrainerProfileUpdateResponse,
)
from app.security import Identity, require_role
from app.services.profile_service import profile_service

router = APIRouter(prefix="/api/trainer", tags=["Trainer"])

require_trainer = require_role("trainer")

_ERRORS = {
    401: {"description": "Missing bearer token", "model": ErrorResponse},
    403: {"description": "Invalid token or not a trainer", "model": ErrorResponse},
    404: {"description": "User not found", "model": ErrorResponse},
}


@router.get(
    "/profile",
    response_model=TrainerProfileResponse,
    responses=_ERRORS,
    summary="Get the caller's trainer profile",
)
async def get_trainer_profile(
    identity: Identity = Depends(require_trainer),
    db: AsyncSession = Depends(get_db_session),
) -> TrainerProfileResponse:
    profile = await profile_service.get_trainer_profile(db, identity)
    return TrainerProfileResponse(profile=profile)


@router.put(
    "/profile",
    response_model=TrainerProfileUpdateResponse,
    responses=_ERRORS,
    summary="Replace the caller's trainer profile",
    description=(
        "Business info, services, location, and portfolio are replaced as a whole. "
        "Specializations that do not match a service type are dropped and at most "
        "three are kept."
    ),
)
async def update_trainer_profile(
    body: TrainerProfileUpdate,
    identity: Identity = Depends(require_trainer),
    db: AsyncSession = Depends(get_db_session),
) -> TrainerProfileUpdateResponse:
    profile = await profile_service.update_trainer_profile(db, identity, body)
    return TrainerProfileUpdateResponse(profile=profile)
