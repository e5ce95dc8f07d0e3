"""
WoofPoint Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the whole suite.
How:   Environment overrides are applied before anything under `app` is
       imported (settings are read once, at import time).

Fixture Hierarchy:
    Function-scoped (fresh for each test):
    ├── db_session:        AsyncSession on a private in-memory SQLite database
    ├── mock_storage:      StorageService with S3 calls replaced by AsyncMocks
    ├── make_user:         factory creating a user (+ role profile) directly in the DB
    ├── owner / trainer:   ready-made (User, Identity) pairs
    ├── auth_headers:      factory building a Bearer header for an Identity
    └── test_client:       httpx AsyncClient bound to the app, sharing db_session
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-not-for-production-use-0123456789"
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum cost; hashing speed is irrelevant here
os.environ["AWS_S3_BUCKET_NAME"] = "woofpoint-test"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock, patch  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.models  # noqa: E402,F401
from app.database import Base, get_db_session  # noqa: E402
from app.models import OwnerProfile, TrainerProfile, User  # noqa: E402
from app.security import Identity, create_access_token, hash_password  # noqa: E402
from app.services.storage_service import storage_service  # noqa: E402

SIGNED_URL_PREFIX = "https://signed.test/"


def fake_signed_url(reference):
    return f"{SIGNED_URL_PREFIX}{reference}" if reference else ""


def fake_upload(user_id, filename, content, content_type):
    return storage_service.build_photo_key(user_id, filename, timestamp_ms=1700000000000)


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    AsyncSession on a fresh in-memory SQLite database.

    StaticPool keeps the single in-memory connection alive for the whole
    test; without it every checkout would see an empty database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


# ══════════════════════════════════════════════════════════════════════════
# Storage
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_storage():
    """
    Replace the S3-touching methods of the shared StorageService.

    validate_photo and build_photo_key stay real. Signed URLs become
    `https://signed.test/<key>`.
    """
    with patch.object(
        storage_service,
        "upload_profile_photo",
        new=AsyncMock(side_effect=fake_upload),
    ) as upload, patch.object(
        storage_service,
        "resolve_photo_url",
        new=AsyncMock(side_effect=fake_signed_url),
    ) as resolve:
        yield {"upload": upload, "resolve": resolve}


# ══════════════════════════════════════════════════════════════════════════
# Users
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_user(db_session):
    """
    Factory: insert a user and (by default) its empty role profile.

    Usage:
        user, identity = await make_user("trainer", email="t@example.com")
    """
    counter = {"n": 0}

    async def _make(
        role: str = "owner",
        email: str = None,
        password: str = "secret123",
        with_profile: bool = True,
        **fields,
    ):
        counter["n"] += 1
        user = User(
            email=email or f"{role}{counter['n']}@example.com",
            password_hash=hash_password(password),
            role=role,
            first_name=fields.pop("first_name", "Test"),
            last_name=fields.pop("last_name", role.title()),
            phone=fields.pop("phone", "5551234567"),
            zip_code=fields.pop("zip_code", "94107"),
            **fields,
        )
        db_session.add(user)
        await db_session.flush()
        if with_profile:
            if role == "owner":
                db_session.add(OwnerProfile(user_id=user.id, dogs=[]))
            else:
                db_session.add(TrainerProfile(user_id=user.id))
            await db_session.flush()
        # Committed so a rolled-back request in API tests cannot discard fixture rows
        await db_session.commit()
        return user, Identity(user_id=user.id, role=user.role, email=user.email)

    return _make


@pytest_asyncio.fixture
async def owner(make_user):
    return await make_user("owner", email="owner@example.com")


@pytest_asyncio.fixture
async def trainer(make_user):
    return await make_user("trainer", email="trainer@example.com")


@pytest.fixture
def auth_headers():
    def _headers(identity: Identity) -> dict:
        token = create_access_token(identity.user_id, identity.role, identity.email)
        return {"Authorization": f"Bearer {token}"}

    return _headers


# ══════════════════════════════════════════════════════════════════════════
# HTTP client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(db_session, mock_storage):
    """
    httpx AsyncClient talking to the app in-process.

    get_db_session is overridden to hand out the test's session with the
    same rollback-on-error contract (services commit their own writes), so
    data created through fixtures is visible to requests and vice versa.
    """
    from app.main import app

    async def _override_session():
        try:
            yield db_session
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db_session] = _override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def signed_url_for():
    """The URL mock_storage hands out for a given stored reference."""
    return fake_signed_url
