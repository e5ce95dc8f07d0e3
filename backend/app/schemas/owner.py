"""
WoofPoint Backend — Owner Profile & Dog Schemas
=================================================

What:  Contracts for GET/PUT /api/owner/profile and the /api/owner/dogs routes.

Defaults (resolved here and nowhere else):
    location.*   → ""       (each sub-field independently)
    dog.name     → ""
    dog.breed    → ""
    dog.age      → 0        (must be >= 0)
    dog.size     → "small"  (small | medium | large)
    dog.photos   → []

DogUpdate is a patch: every field is optional and only the fields the
client actually sent are applied (`model_dump(exclude_unset=True)`).
"""

import uuid
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from app.schemas.auth import PHONE_PATTERN, ZIP_CODE_PATTERN
from app.schemas.common import CamelModel, DefaultingModel

DogSizeLiteral = Literal["small", "medium", "large"]


class OwnerLocation(DefaultingModel):
    """Owner location; used both as input (merge with "" defaults) and output."""

    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


# ══════════════════════════════════════════════════════════════════════════
# Dogs
# ══════════════════════════════════════════════════════════════════════════


class DogCreate(DefaultingModel):
    name: str = Field(default="", max_length=100)
    breed: str = Field(default="", max_length=100)
    age: int = Field(default=0, ge=0)
    size: DogSizeLiteral = "small"
    photos: List[str] = Field(default_factory=list)


class DogUpdate(CamelModel):
    """
    Shallow patch over an existing dog entry.

    Explicit nulls are rejected for non-nullable fields rather than silently
    clearing them; omit a field to keep its current value.
    """

    name: Optional[str] = Field(default=None, max_length=100)
    breed: Optional[str] = Field(default=None, max_length=100)
    age: Optional[int] = Field(default=None, ge=0)
    size: Optional[DogSizeLiteral] = None
    photos: Optional[List[str]] = None

    @field_validator("*")
    @classmethod
    def reject_explicit_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null; omit it to keep the current value")
        return v


class DogView(CamelModel):
    id: uuid.UUID
    name: str = ""
    breed: str = ""
    age: int = 0
    size: str = "small"
    photos: List[str] = Field(default_factory=list)


class DogResponse(CamelModel):
    message: str
    dog: DogView


# ══════════════════════════════════════════════════════════════════════════
# Owner Profile
# ══════════════════════════════════════════════════════════════════════════


class OwnerProfileUpdate(CamelModel):
    """
    PUT /api/owner/profile body.

    User fields are applied only when present. When `location` is present it
    replaces the stored location, with "" for any omitted sub-field; when it
    is absent the stored location is untouched. Dogs are managed through the
    /dogs routes only.
    """

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    zip_code: Optional[str] = Field(default=None, pattern=ZIP_CODE_PATTERN)
    location: Optional[OwnerLocation] = None


class OwnerProfileView(CamelModel):
    """Identity + owner profile, every structured field backfilled."""

    first_name: str
    last_name: str
    email: str
    phone: str
    zip_code: str
    profile_photo: str = Field(default="", description="Signed URL, or '' when unset/unresolvable")
    location: OwnerLocation = Field(default_factory=OwnerLocation)
    dogs: List[DogView] = Field(default_factory=list)


class OwnerProfileResponse(CamelModel):
    profile: OwnerProfileView


class OwnerProfileUpdateResponse(CamelModel):
    message: str = "Owner profile updated successfully"
    profile: OwnerProfileView
