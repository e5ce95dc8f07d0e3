"""
WoofPoint Backend — Shared Schema Building Blocks
===================================================

What:  Base model configuration plus the error, message, and health payloads
       shared by every route module.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for all API schemas.

    - alias_generator=to_camel: `first_name` is `firstName` on the wire
    - populate_by_name: snake_case keys are accepted on input too
    - from_attributes: views can be validated straight from ORM rows
    - str_strip_whitespace: surrounding whitespace never reaches the database
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class MessageResponse(CamelModel):
    message: str = Field(description="Human-readable outcome")


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Dog with ID '...' was not found",
            "details": {"resource": "Dog", "resource_id": "..."},
            "request_id": "a1b2c3d4"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    """Liveness payload for GET /health. Dependencies are not probed."""

    status: str = Field(description="Always 'ok' when the process can serve requests")
    version: str = Field(description="Application version")
    uptime_seconds: float = Field(description="Seconds since service started")


class DefaultingModel(CamelModel):
    """
    CamelModel that treats an explicit JSON null as "use the default".

    Clients send `null` for fields they never filled in; the stored value
    must still be the documented default ("" / 0 / []), never None.
    """

    @field_validator("*", mode="before")
    @classmethod
    def null_to_default(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None and info.field_name is not None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return v
