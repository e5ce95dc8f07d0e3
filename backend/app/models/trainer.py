"""
WoofPoint Backend — Trainer Profile SQLAlchemy Model
======================================================

What:  ORM model for `trainer_profiles`, one-to-one with a trainer User.
Why:   Holds the business info, service catalogue, location, portfolio, and
       ratings shown to owners in the trainer directory.

Storage choices:
    certifications, services, specializations are JSON lists. They are
    always rewritten as a whole by the profile update path and never
    queried individually, so child tables would add joins for nothing.

    ratings and is_verified are read-only from the API's point of view:
    no update path writes them.
"""

import uuid
from typing import Any, Dict, List

from sqlalchemy import Boolean, Float, ForeignKey, Integer, JSON, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, TimestampMixin

# Portfolio specializations are capped; extra entries are truncated on save
MAX_SPECIALIZATIONS = 3


class TrainerProfile(TimestampMixin, Base):
    """Trainer-specific profile. Created empty at signup or by first update (upsert)."""

    __tablename__ = "trainer_profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    # ── Business Info ─────────────────────────────────────────────────────
    years_of_experience: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # [{"name": str}]
    certifications: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    # ── Services ──────────────────────────────────────────────────────────
    # [{"type": str, "description": str, "duration": int, "price": float}]
    services: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    # ── Location ──────────────────────────────────────────────────────────
    address: Mapped[str] = mapped_column(String(255), nullable=False, default="", server_default="")
    city: Mapped[str] = mapped_column(String(100), nullable=False, default="", server_default="")
    state: Mapped[str] = mapped_column(String(100), nullable=False, default="", server_default="")

    # ── Portfolio ─────────────────────────────────────────────────────────
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    specializations: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    # ── Ratings (read-only) ───────────────────────────────────────────────
    average_rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<TrainerProfile(user_id={self.user_id}, services={len(self.services or [])})>"
