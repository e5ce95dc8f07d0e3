"""
WoofPoint Backend — ORM Models
================================

Importing this package registers every table with `Base.metadata`
(Alembic autogenerate and the test suite's `create_all` depend on it).

Tables:
    - users:            identity records (one row per account)
    - owner_profiles:   one-to-one with an owner user
    - dogs:             ordered dog entries owned by an owner profile
    - trainer_profiles: one-to-one with a trainer user
"""

from app.models.user import User, UserRole
from app.models.owner import Dog, DogSize, OwnerProfile
from app.models.trainer import TrainerProfile

__all__ = ["User", "UserRole", "OwnerProfile", "Dog", "DogSize", "TrainerProfile"]
