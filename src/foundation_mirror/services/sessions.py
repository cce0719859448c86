"""Session persistence interfaces and read-side queries."""

from dataclasses import dataclass
from typing import Protocol

from foundation_mirror.domain.sessions import FoundationTryon, SessionRecord


class SessionRepository(Protocol):
    """Persistence interface for kiosk sessions."""

    def create_session(self, session: SessionRecord) -> SessionRecord:
        """Persist a new session and return it as stored."""

    def get_session(self, session_id: str) -> SessionRecord | None:
        """Return a session by id, if present."""

    def list_sessions(self) -> list[SessionRecord]:
        """Return all sessions, newest first."""

    def append_tryon(self, session_id: str, tryon: FoundationTryon) -> None:
        """Atomically append a try-on to a session's history."""


class BlobStore(Protocol):
    """Write-once object storage for session images."""

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Store bytes at a path and return the public URL."""


@dataclass
class SessionQueryService:
    """Read-only access to sessions for the dashboard."""

    repository: SessionRepository

    def list_sessions(self) -> list[SessionRecord]:
        """Return all sessions ordered by creation time, newest first."""
        sessions = self.repository.list_sessions()
        return sorted(sessions, key=lambda session: session.created_at, reverse=True)

    def get_session(self, session_id: str) -> SessionRecord | None:
        """Return one session, or None when the id is unknown."""
        return self.repository.get_session(session_id)


def serialize_session(session: SessionRecord) -> dict[str, object]:
    """Render a session with the camelCase keys used on the wire."""
    return {
        "id": session.id,
        "createdAt": session.created_at.isoformat(),
        "originalImageUrl": session.original_image_url,
        "originalMimeType": session.original_mime_type,
        "derenderedImageUrl": session.derendered_image_url,
        "derenderedMimeType": session.derendered_mime_type,
        "model": session.model,
        "derenderPrompt": session.derender_prompt,
        "foundationTryons": [
            serialize_tryon(tryon) for tryon in session.foundation_tryons
        ],
        "status": session.status,
        "completedAt": session.completed_at.isoformat()
        if session.completed_at
        else None,
        "rating": session.rating,
    }


def serialize_tryon(tryon: FoundationTryon) -> dict[str, object]:
    return {
        "appliedAt": tryon.applied_at.isoformat(),
        "sku": tryon.sku,
        "name": tryon.name,
        "hex": tryon.hex,
        "undertone": tryon.undertone,
        "resultImageUrl": tryon.result_image_url,
        "resultMimeType": tryon.result_mime_type,
    }
