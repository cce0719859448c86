"""Domain models for kiosk sessions."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class FoundationTryon:
    """A single foundation shade rendered onto a session's derendered image."""

    applied_at: datetime
    sku: str
    name: str
    hex: str
    undertone: str
    result_image_url: str
    result_mime_type: str


@dataclass(frozen=True)
class SessionRecord:
    """Represents a persisted user journey."""

    id: str
    created_at: datetime
    original_image_url: str
    original_mime_type: str
    derendered_image_url: str
    derendered_mime_type: str
    model: str
    derender_prompt: str
    foundation_tryons: list[FoundationTryon] = field(default_factory=list)
    status: str = "active"
    completed_at: datetime | None = None
    rating: int | None = None
