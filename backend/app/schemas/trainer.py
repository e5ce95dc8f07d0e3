"""
WoofPoint Backend — Trainer Profile & Directory Schemas
=========================================================

What:  Contracts for GET/PUT /api/trainer/profile and the trainer directory
       (GET /api/owner/trainers, GET /api/owner/trainers/{trainerId}).

Write shape (flat, as the profile form submits it):
    {firstName?, lastName?, phone?, zipCode?,
     yearsOfExperience, certifications: [{name}], services: [{type, description, duration, price}],
     bio, specializations: [str], location: {address, city, state}}

Read shape (nested, every sub-object always present):
    {firstName, lastName, email, phone, zipCode, profilePhoto,
     businessInfo: {yearsOfExperience, certifications},
     services, location, portfolio: {bio, specializations},
     ratings: {averageRating, totalReviews}}

Specialization filtering is business logic and lives in ProfileService; the
schemas only normalise shape and defaults.
"""

import uuid
from typing import Any, List, Optional

from pydantic import Field, field_validator

from app.schemas.auth import PHONE_PATTERN, ZIP_CODE_PATTERN
from app.schemas.common import CamelModel, DefaultingModel


# ══════════════════════════════════════════════════════════════════════════
# Nested building blocks
# ══════════════════════════════════════════════════════════════════════════


class Certification(DefaultingModel):
    """Only the name is kept; any other submitted keys are discarded."""

    name: str = ""


class Service(DefaultingModel):
    type: str = ""
    description: str = ""
    duration: int = Field(default=0, ge=0, description="Minutes")
    price: float = Field(default=0.0, ge=0)


class TrainerLocation(DefaultingModel):
    address: str = ""
    city: str = ""
    state: str = ""


class BusinessInfo(CamelModel):
    years_of_experience: int = 0
    certifications: List[Certification] = Field(default_factory=list)


class Portfolio(CamelModel):
    bio: str = ""
    specializations: List[str] = Field(default_factory=list)


class Ratings(CamelModel):
    average_rating: float = 0.0
    total_reviews: int = 0

# ══════════════════════════════════════════════════════════════════════════
# Trainer Profile (self-service)
# ══════════════════════════════════════════════════════════════════════════


class TrainerProfileUpdate(DefaultingModel):
    """
    PUT /api/trainer/profile body.

    The trainer profile is replaced as a whole: anything omitted here is
    stored as its default (0, "" or []). User fields are applied only when
    present.
    """

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    zip_code: Optional[str] = Field(default=None, pattern=ZIP_CODE_PATTERN)

    years_of_experience: int = Field(default=0, ge=0)
    certifications: List[Certification] = Field(default_factory=list)
    services: List[Service] = Field(default_factory=list)
    bio: str = Field(default="", max_length=5000)
    specializations: List[str] = Field(default_factory=list)
    location: TrainerLocation = Field(default_factory=TrainerLocation)

    @field_validator("certifications", "services", mode="before")
    @classmethod
    def null_entries_to_default(cls, v: Any) -> Any:
        """A null list entry becomes an all-default entry ({name: ""}, {type: "", ...})."""
        if isinstance(v, list):
            return [{} if item is None else item for item in v]
        return v


class TrainerProfileView(CamelModel):
    first_name: str
    last_name: str
    email: str
    phone: str
    zip_code: str
    profile_photo: str = ""
    business_info: BusinessInfo = Field(default_factory=BusinessInfo)
    services: List[Service] = Field(default_factory=list)
    location: TrainerLocation = Field(default_factory=TrainerLocation)
    portfolio: Portfolio = Field(default_factory=Portfolio)
    ratings: Ratings = Field(default_factory=Ratings)


class TrainerProfileResponse(CamelModel):
    profile: TrainerProfileView


class TrainerProfileUpdateResponse(CamelModel):
    message: str = "Trainer profile updated successfully"
    profile: TrainerProfileView

# ══════════════════════════════════════════════════════════════════════════
# Trainer Directory (owner-facing)
# ══════════════════════════════════════════════════════════════════════════


class TrainerSummary(CamelModel):
    """One card in the directory list. Trainers without a profile get defaults."""

    id: uuid.UUID
    first_name: str
    last_name: str
    profile_photo: str = ""
    specializations: List[str] = Field(default_factory=list)
    average_rating: float = 0.0
    total_reviews: int = 0
    location: TrainerLocation = Field(default_factory=TrainerLocation)


class TrainerDetail(CamelModel):
    """Full, flattened trainer page."""

    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    phone: str
    profile_photo: str = ""
    location: TrainerLocation = Field(default_factory=TrainerLocation)
    bio: str = ""
    years_of_experience: int = 0
    certifications: List[Certification] = Field(default_factory=list)
    services: List[Service] = Field(default_factory=list)
    specializations: List[str] = Field(default_factory=list)
    average_rating: float = 0.0
    total_reviews: int = 0
    is_verified: bool = False
