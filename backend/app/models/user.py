"""
WoofPoint Backend — User SQLAlchemy Model
===========================================

What:  ORM model for the `users` table (the identity store).
Why:   Every account, owner or trainer, is one row here; role-specific data
       lives in owner_profiles / trainer_profiles keyed by user_id.
Who:   Used by AuthService (signup/login/photo), ProfileService, and the
       trainer directory.

Table Design Rationale:
    - email is stored lower-cased and trimmed, so the plain unique index
      gives case-insensitive uniqueness
    - role is written once at signup; no service updates it afterwards
    - profile_photo holds an object-storage key (or a legacy object URL);
      clients only ever see short-lived signed URLs built from it
"""

import enum
import uuid

from sqlalchemy import Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, TimestampMixin


class UserRole(str, enum.Enum):
    OWNER = "owner"
    TRAINER = "trainer"


class User(TimestampMixin, Base):
    """
    Represents one marketplace account.

    Lifecycle:
        1. Created at signup together with an empty role profile
        2. Name/phone/zip mutated through the profile update paths
        3. profile_photo mutated by the photo upload
        4. Never hard-deleted
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Lower-cased, trimmed login email",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the account password",
    )

    # Plain string column (not a DB enum) so adding a role is a code change only
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="owner | trainer — immutable after signup",
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    phone: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        comment="Exactly 10 digits",
    )

    zip_code: Mapped[str] = mapped_column(
        String(6),
        nullable=False,
        comment="5 or 6 digits",
    )

    profile_photo: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        default="",
        server_default="",
        comment="Object storage key of the profile photo; empty when unset",
    )

    # The trainer directory filters on role
    __table_args__ = (
        Index("idx_users_role", "role"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
