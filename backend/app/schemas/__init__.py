"""
WoofPoint Backend — Pydantic Request/Response Schemas
=======================================================

Schemas are the API contract; models are the storage layout. Every request
body has an explicit schema so each optional field has exactly one
documented default, and every response view backfills nested objects so
clients never receive null for a structured field.

JSON keys are camelCase on the wire (snake_case is accepted on input).
"""
