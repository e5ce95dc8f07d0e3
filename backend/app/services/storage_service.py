"""
WoofPoint Backend — Photo Storage Service
===========================================

What:  Validates profile-photo uploads, stores them in S3, and resolves
       stored references into short-lived signed URLs.
Why:   The bucket is private. Clients never see a permanent object URL; every
       read hands out a presigned GET that expires after
       `settings.photo_url_expiry_seconds`.
How:   boto3 S3 client (created lazily, so importing the app never needs AWS
       credentials). boto3 is synchronous, so calls run in a worker thread
       via `asyncio.to_thread` to keep the event loop free.
Who:   AuthService (upload), ProfileService and TrainerDirectoryService
       (URL resolution).

Object key layout:
    profile-photos/{userId}-{timestampMillis}-{originalName}

Upload checks (in order):
    1. a non-empty file was sent        → ValidationError
    2. declared content type is image/* → UnsupportedMediaTypeError
    3. size <= settings.max_photo_size  → FileTooLargeError

Resolution is fail-soft: any S3/credential error yields "" so a broken photo
never breaks a profile read.
"""

import asyncio
import logging
import time
import uuid
from pathlib import PurePosixPath
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.config import settings
from app.exceptions import (
    FileTooLargeError,
    StorageError,
    UnsupportedMediaTypeError,
    ValidationError,
)

logger = logging.getLogger(__name__)

PHOTO_KEY_PREFIX = "profile-photos"
DEFAULT_PHOTO_NAME = "photo.jpg"

# Older rows hold a full object URL rather than a bare key
_S3_HOST_MARKER = ".amazonaws.com/"


class StorageService:
    """
    Thin wrapper around the S3 client.

    The client is built on first use and cached for the process lifetime;
    boto3 clients are safe to share between threads.
    """

    def __init__(self) -> None:
        self._client = None

    @property
    def client(self):
        if self._client is None:
            kwargs = {"region_name": settings.aws_region}
            # Explicit keys are optional; boto3 falls back to its default chain
            if settings.aws_access_key_id and settings.aws_secret_access_key:
                kwargs["aws_access_key_id"] = settings.aws_access_key_id
                kwargs["aws_secret_access_key"] = settings.aws_secret_access_key
            self._client = boto3.client("s3", **kwargs)
        return self._client

    # ── Validation ────────────────────────────────────────────────────────

    def validate_photo(
        self,
        content_type: Optional[str],
        content: Optional[bytes],
    ) -> None:
        """
        Reject uploads that are missing, not images, or too large.

        The check runs on the declared content type; the bytes are stored
        as-is and served back only through signed URLs.
        """
        if not content:
            raise ValidationError(message="No file uploaded", field="profilePhoto")

        if not content_type or not content_type.lower().startswith("image/"):
            raise UnsupportedMediaTypeError(content_type)

        if len(content) > settings.max_photo_size:
            raise FileTooLargeError(
                max_size=settings.max_photo_size, actual_size=len(content)
            )

    # ── Keys ──────────────────────────────────────────────────────────────

    @staticmethod
    def build_photo_key(
        user_id: uuid.UUID,
        original_name: Optional[str],
        timestamp_ms: Optional[int] = None,
    ) -> str:
        """
        Build `profile-photos/{userId}-{timestampMillis}-{originalName}`.

        Any directory components in the client-supplied name are dropped so a
        crafted filename cannot escape the prefix.
        """
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        name = PurePosixPath((original_name or "").replace("\\", "/")).name
        if not name or name in (".", ".."):
            name = DEFAULT_PHOTO_NAME
        return f"{PHOTO_KEY_PREFIX}/{user_id}-{timestamp_ms}-{name}"

    @staticmethod
    def extract_key(reference: str) -> str:
        """Return the object key for a stored reference (bare key or full S3 URL)."""
        if _S3_HOST_MARKER in reference:
            key = reference.split(_S3_HOST_MARKER, 1)[1]
            return key.split("?", 1)[0]
        return reference

    # ── S3 operations ─────────────────────────────────────────────────────

    async def upload_profile_photo(
        self,
        user_id: uuid.UUID,
        filename: Optional[str],
        content: bytes,
        content_type: str,
    ) -> str:
        """
        Store the photo and return its object key.

        Raises:
            StorageError: S3 rejected the upload or credentials are unusable
        """
        key = self.build_photo_key(user_id, filename)
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=settings.aws_s3_bucket_name,
                Key=key,
                Body=content,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("S3 upload failed for key %s: %s", key, e)
            raise StorageError(context={"key": key})

        logger.info("Profile photo stored: %s (%d bytes)", key, len(content))
        return key

    async def resolve_photo_url(self, reference: Optional[str]) -> str:
        """Signed GET URL for a stored reference, or "" when unset or unresolvable."""
        if not reference:
            return ""
        key = self.extract_key(reference)
        try:
            return await asyncio.to_thread(
                self.client.generate_presigned_url,
                "get_object",
                Params={"Bucket": settings.aws_s3_bucket_name, "Key": key},
                ExpiresIn=settings.photo_url_expiry_seconds,
            )
        except (ClientError, BotoCoreError) as e:
            logger.warning("Could not sign photo URL for key %s: %s", key, e)
            return ""


# Module-level singleton
storage_service = StorageService()
