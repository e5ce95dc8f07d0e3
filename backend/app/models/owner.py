"""
WoofPoint Backend — Owner Profile & Dog SQLAlchemy Models
===========================================================

What:  ORM models for `owner_profiles` and the dogs each owner keeps.
Why:   An owner's dogs are an ordered list addressed by a stable id, never
       by index. They are modelled as an owning collection: child rows with
       an application-assigned UUID plus a `position` column that only
       carries order.

Collection behaviour:
    OwnerProfile.dogs is an `ordering_list` on `position`:
        - append() sets position = len(list) for the new entry
        - remove() renumbers the remaining entries so order stays dense
        - delete-orphan cascade deletes the row when it leaves the list
    The relationship loads eagerly ("selectin") because lazy loads are not
    available on AsyncSession.

Concurrency:
    Two simultaneous appends for the same owner can compute the same
    position. Both rows survive (there is no unique constraint on position)
    and order between them is arbitrary. Accepted: dog edits are rare and
    per-user.
"""

import enum
import uuid
from typing import List

from sqlalchemy import ForeignKey, Integer, JSON, String, Uuid, CheckConstraint
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, TimestampMixin


class DogSize(str, enum.Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class OwnerProfile(TimestampMixin, Base):
    """
    Owner-specific profile, one-to-one with a User whose role is 'owner'.

    Created empty at signup, or lazily by the first profile update (upsert
    keyed by user_id).
    """

    __tablename__ = "owner_profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    # ── Location ──────────────────────────────────────────────────────────
    address: Mapped[str] = mapped_column(String(255), nullable=False, default="", server_default="")
    city: Mapped[str] = mapped_column(String(100), nullable=False, default="", server_default="")
    state: Mapped[str] = mapped_column(String(100), nullable=False, default="", server_default="")
    zip_code: Mapped[str] = mapped_column(String(10), nullable=False, default="", server_default="")

    dogs: Mapped[List["Dog"]] = relationship(
        back_populates="owner",
        order_by="Dog.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def find_dog(self, dog_id: uuid.UUID) -> "Dog | None":
        """Locate a dog entry by its id (never by list index)."""
        for dog in self.dogs:
            if dog.id == dog_id:
                return dog
        return None

    def __repr__(self) -> str:
        return f"<OwnerProfile(user_id={self.user_id}, dogs={len(self.dogs)})>"


class Dog(TimestampMixin, Base):
    """
    One dog entry in an owner's ordered list.

    Column defaults mirror the documented schema defaults, so an entry
    created from a sparse payload is always fully populated.
    """

    __tablename__ = "dogs"

    # DogService allocates the id when it builds the entry; the column default
    # only covers rows created elsewhere (fixtures, migrations)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    owner_profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("owner_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    breed: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    size: Mapped[str] = mapped_column(String(10), nullable=False, default=DogSize.SMALL.value)
    photos: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    owner: Mapped[OwnerProfile] = relationship(back_populates="dogs")

    __table_args__ = (
        CheckConstraint("age >= 0", name="ck_dogs_age_non_negative"),
        CheckConstraint("size IN ('small', 'medium', 'large')", name="ck_dogs_size"),
    )

    def __repr__(self) -> str:
        return f"<Dog(id={self.id}, name='{self.name}', position={self.position})>"
