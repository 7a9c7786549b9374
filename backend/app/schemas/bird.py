"""
Birdhouse Backend - Pydantic Request/Response Schemas
======================================================

What:  Pydantic models defining the API contract for the Bird resource.
How:   FastAPI validates request bodies against these models, serializes
       responses through them, and builds the OpenAPI docs from them.

Whitelisting:
    BirdCreate and BirdUpdate only declare `name`, `species` and `likes`.
    Any other key in the payload (an `id` override, timestamps, junk) is
    dropped during validation (extra="ignore") instead of being rejected.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BirdCreate(BaseModel):
    """Body of POST /birds. Omitted likes start at 0."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(default=None, description="Common name")
    species: Optional[str] = Field(default=None, description="Scientific name")
    likes: int = Field(default=0, ge=0, description="Initial like count")


class BirdUpdate(BaseModel):
    """
    Body of PATCH/PUT /birds/{id}.

    Partial update: only keys present in the payload are written, so services
    read it with model_dump(exclude_unset=True).
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(default=None, description="Common name")
    species: Optional[str] = Field(default=None, description="Scientific name")
    likes: Optional[int] = Field(default=None, ge=0, description="Like count")

    @field_validator("likes")
    @classmethod
    def likes_not_null(cls, v: Optional[int]) -> Optional[int]:
        """The likes column is NOT NULL; an explicit null is a client error."""
        if v is None:
            raise ValueError("likes may not be null")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BirdResponse(BaseModel):
    """JSON representation of a stored bird: {id, name, species, likes}."""

    id: int = Field(description="Store-assigned identifier")
    name: Optional[str] = Field(default=None, description="Common name")
    species: Optional[str] = Field(default=None, description="Scientific name")
    likes: int = Field(description="Like count")

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    """
    Error body returned by the global exception handlers.

    Example:
        {"error": "Bird not found"}
    """

    error: str = Field(description="Human-readable error message")
    request_id: Optional[str] = Field(
        default=None,
        description="Request correlation ID (server errors only)",
    )


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
