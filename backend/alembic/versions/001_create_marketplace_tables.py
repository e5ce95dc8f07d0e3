"""Create marketplace tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates users, owner_profiles, dogs, and trainer_profiles.
How:   Portable column types (sa.Uuid, sa.JSON) matching app/models, so the
       same schema runs on PostgreSQL and SQLite.

Rollback: downgrade() drops all four tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, comment="Lower-cased, trimmed login email"),
        sa.Column("password_hash", sa.String(255), nullable=False, comment="bcrypt hash of the account password"),
        sa.Column("role", sa.String(20), nullable=False, comment="owner | trainer — immutable after signup"),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(10), nullable=False, comment="Exactly 10 digits"),
        sa.Column("zip_code", sa.String(6), nullable=False, comment="5 or 6 digits"),
        sa.Column(
            "profile_photo",
            sa.String(1024),
            nullable=False,
            server_default="",
            comment="Object storage key of the profile photo; empty when unset",
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("idx_users_role", "users", ["role"])

    op.create_table(
        "owner_profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("address", sa.String(255), nullable=False, server_default=""),
        sa.Column("city", sa.String(100), nullable=False, server_default=""),
        sa.Column("state", sa.String(100), nullable=False, server_default=""),
        sa.Column("zip_code", sa.String(10), nullable=False, server_default=""),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id"),
    )

    op.create_table(
        "dogs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("owner_profile_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("name", sa.String(100), nullable=False, server_default=""),
        sa.Column("breed", sa.String(100), nullable=False, server_default=""),
        sa.Column("age", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("size", sa.String(10), nullable=False, server_default="small"),
        sa.Column("photos", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_profile_id"], ["owner_profiles.id"], ondelete="CASCADE"),
        sa.CheckConstraint("age >= 0", name="ck_dogs_age_non_negative"),
        sa.CheckConstraint("size IN ('small', 'medium', 'large')", name="ck_dogs_size"),
    )
    op.create_index("ix_dogs_owner_profile_id", "dogs", ["owner_profile_id"])

    op.create_table(
        "trainer_profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("years_of_experience", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("certifications", sa.JSON(), nullable=False),
        sa.Column("services", sa.JSON(), nullable=False),
        sa.Column("address", sa.String(255), nullable=False, server_default=""),
        sa.Column("city", sa.String(100), nullable=False, server_default=""),
        sa.Column("state", sa.String(100), nullable=False, server_default=""),
        sa.Column("bio", sa.Text(), nullable=False),
        sa.Column("specializations", sa.JSON(), nullable=False),
        sa.Column("average_rating", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("total_reviews", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id"),
    )


def downgrade() -> None:
    op.drop_table("trainer_profiles")
    op.drop_index("ix_dogs_owner_profile_id", table_name="dogs")
    op.drop_table("dogs")
    op.drop_table("owner_profiles")
    op.drop_index("idx_users_role", table_name="users")
    op.drop_table("users")
