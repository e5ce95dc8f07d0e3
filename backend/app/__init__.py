"""
WoofPoint Backend
==================

REST API for a two-sided marketplace: dog owners keep a profile and a list
of their dogs and browse trainers; trainers publish their services,
certifications, and portfolio.

Package layout:
    routes/      HTTP surface (/api/auth, /api/owner, /api/trainer, /health)
    security.py  bearer-token gate and password hashing
    services/    profile aggregation, dog list, trainer directory, S3 photos
    models/      SQLAlchemy tables (users, owner_profiles, dogs, trainer_profiles)
    schemas/     Pydantic request/response contracts (camelCase on the wire)
"""

__version__ = "1.0.0"
