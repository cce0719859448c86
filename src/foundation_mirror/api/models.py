"""Pydantic models for kiosk request payloads.

Fields are optional and values of the wrong type are read as missing, so the
routes can report problems one at a time with field-specific messages
instead of a generic validation error.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FoundationSelection(BaseModel):
    """Shade descriptor chosen by the client."""

    sku: str | None = None
    name: str | None = None
    hex: str | None = None
    undertone: str | None = None

    @field_validator("sku", "name", "hex", "undertone", mode="before")
    @classmethod
    def text_or_none(cls, value: object) -> object:
        return value if isinstance(value, str) else None


class DerenderRequest(BaseModel):
    """Body of ``POST /derender``."""

    model_config = ConfigDict(populate_by_name=True)

    image: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")

    @field_validator("image", "mime_type", mode="before")
    @classmethod
    def text_or_none(cls, value: object) -> object:
        return value if isinstance(value, str) else None


class ApplyFoundationRequest(BaseModel):
    """Body of ``POST /apply-foundation``."""

    model_config = ConfigDict(populate_by_name=True)

    image: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")
    foundation: FoundationSelection | None = None
    session_id: str | None = Field(default=None, alias="sessionId")

    @field_validator("image", "mime_type", "session_id", mode="before")
    @classmethod
    def text_or_none(cls, value: object) -> object:
        return value if isinstance(value, str) else None

    @field_validator("foundation", mode="before")
    @classmethod
    def selection_or_none(cls, value: object) -> object:
        return value if isinstance(value, dict) else None
