"""
WoofPoint Backend — Account Schemas
=====================================

What:  Request/response contracts for signup, login, logout, and photo upload.

Field rules (mirrors the users table):
    email:     trimmed, lower-cased before lookup/storage
    password:  at least 6 characters
    role:      'owner' or 'trainer'
    phone:     exactly 10 digits
    zipCode:   5 or 6 digits
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from app.schemas.common import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
PHONE_PATTERN = r"^[0-9]{10}$"
ZIP_CODE_PATTERN = r"^[0-9]{5,6}$"


def normalize_email(value: str) -> str:
    """Emails are compared case-insensitively; storage keeps the lower-cased form."""
    return value.strip().lower()


class SignupRequest(CamelModel):
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, max_length=128)
    role: Literal["owner", "trainer"]
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: str = Field(pattern=PHONE_PATTERN)
    zip_code: str = Field(pattern=ZIP_CODE_PATTERN)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return normalize_email(v)


class SignupResponse(CamelModel):
    token: str


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return normalize_email(v)


class UserResponse(CamelModel):
    """Public view of a User row. The password hash is never part of it."""

    id: uuid.UUID
    email: str
    role: str
    first_name: str
    last_name: str
    phone: str
    zip_code: str
    profile_photo: str = ""
    created_at: datetime
    updated_at: datetime


class LoginResponse(CamelModel):
    message: str = "Login successful"
    user: UserResponse
    token: str
    role: str


class PhotoUploadResponse(CamelModel):
    message: str = "Profile photo uploaded successfully"
    photo_url: str = Field(description="Short-lived signed URL for the stored photo")
    user: UserResponse
