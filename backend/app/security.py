"""
WoofPoint Backend — Authentication Gate
=========================================

What:  Password hashing, JWT issuance/verification, and the FastAPI
       dependencies that turn an `Authorization: Bearer <token>` header into
       an `Identity`.
Why:   Every owner/trainer route needs the caller's user id and role before
       any service runs. Services trust the Identity unconditionally; this
       module is the only place a token is inspected.
How:   bcrypt for credential hashes, PyJWT (HS256) for signed tokens,
       `HTTPBearer(auto_error=False)` so a missing header is reported with our
       own error body instead of FastAPI's default.

Failure mapping:
    no header / wrong scheme / empty token    → UnauthorizedError (401)
    bad signature / expired / missing claims  → ForbiddenError    (403)
    role does not own the route               → ForbiddenError    (403)

Token payload:
    {"userId": "<uuid>", "role": "owner|trainer", "email": "...", "iat": ..., "exp": ...}
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings
from app.exceptions import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, as extracted from a verified token."""

    user_id: uuid.UUID
    role: str
    email: str


# ══════════════════════════════════════════════════════════════════════════
# Passwords
# ══════════════════════════════════════════════════════════════════════════


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh salt (cost = settings.bcrypt_rounds)."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))


# ══════════════════════════════════════════════════════════════════════════
# Tokens
# ══════════════════════════════════════════════════════════════════════════


def create_access_token(user_id: uuid.UUID, role: str, email: str) -> str:
    """Issue a signed token valid for `settings.jwt_expiry_days`."""
    now = datetime.now(timezone.utc)
    payload = {
        "userId": str(user_id),
        "role": role,
        "email": email,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Identity:
    """
    Verify signature and expiry, then build the Identity.

    Raises:
        ForbiddenError: token cannot be trusted or lacks the required claims
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise ForbiddenError(context={"reason": "expired"})
    except jwt.InvalidTokenError as e:
        logger.debug("Token rejected: %s", e)
        raise ForbiddenError(context={"reason": "invalid"})

    user_id = payload.get("userId")
    role = payload.get("role")
    if not user_id or not role:
        raise ForbiddenError(context={"reason": "missing_claims"})
    try:
        parsed_id = uuid.UUID(str(user_id))
    except ValueError:
        raise ForbiddenError(context={"reason": "invalid_user_id"})

    return Identity(user_id=parsed_id, role=role, email=payload.get("email", ""))


# ══════════════════════════════════════════════════════════════════════════
# FastAPI dependencies
# ══════════════════════════════════════════════════════════════════════════


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    """Require a valid bearer token."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return decode_access_token(credentials.credentials)


async def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Identity]:
    """Identity when a valid token is presented, None otherwise (used by logout)."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return decode_access_token(credentials.credentials)
    except ForbiddenError:
        return None


def require_role(role: str) -> Callable[..., Identity]:
    """
    Build a dependency that only admits callers holding `role`.

    Usage:
        @router.get("/profile")
        async def get_profile(identity: Identity = Depends(require_role("owner"))): ...
    """

    async def _check_role(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role != role:
            raise ForbiddenError(
                message=f"This resource is only available to {role}s",
                context={"required_role": role, "role": identity.role},
            )
        return identity

    return _check_role
