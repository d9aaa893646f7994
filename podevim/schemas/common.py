"""Shared schemas."""

from typing import ClassVar, Optional, Tuple

from pydantic import BaseModel, Field, model_validator


class Coordinates(BaseModel):
    """Geographic coordinates."""

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class AddressCreate(BaseModel):
    """Schema for a postal address."""

    line1: str = Field(..., min_length=1, max_length=255)
    line2: Optional[str] = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=128)
    state: str = Field(..., min_length=1, max_length=64)
    postal_code: str = Field(..., min_length=1, max_length=32)
    country: str = Field(..., min_length=1, max_length=64)


class PartialUpdate(BaseModel):
    """
    Base for PUT bodies where every field is optional.

    Only fields present in the body are applied. Fields listed in
    ``non_nullable`` map to NOT NULL columns and cannot be sent as null.
    """

    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def check_non_nullable(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self, *exclude: str) -> dict:
        """Fields sent in the body, minus ``exclude``."""
        return self.model_dump(exclude_unset=True, exclude=set(exclude))


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
