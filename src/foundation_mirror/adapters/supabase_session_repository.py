"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from foundation_mirror.domain.sessions import FoundationTryon, SessionRecord
from foundation_mirror.services.sessions import SessionRepository

_TABLE = "sessions"
_APPEND_FUNCTION = "append_foundation_tryon"


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for kiosk sessions.

    Try-ons live in a ``jsonb`` array column and are appended through a
    database function so concurrent appends do not overwrite each other.
    """

    client: Client

    def create_session(self, session: SessionRecord) -> SessionRecord:
        """Insert a session row and return it as stored."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "id": session.id,
                    "created_at": session.created_at.isoformat(),
                    "original_image_url": session.original_image_url,
                    "original_mime_type": session.original_mime_type,
                    "derendered_image_url": session.derendered_image_url,
                    "derendered_mime_type": session.derendered_mime_type,
                    "model": session.model,
                    "derender_prompt": session.derender_prompt,
                    "foundation_tryons": [
                        _tryon_to_json(tryon) for tryon in session.foundation_tryons
                    ],
                    "status": session.status,
                    "completed_at": session.completed_at.isoformat()
                    if session.completed_at
                    else None,
                    "rating": session.rating,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")
        return _row_to_session(response.data[0])

    def get_session(self, session_id: str) -> SessionRecord | None:
        """Return a session by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", session_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _row_to_session(response.data[0])

    def list_sessions(self) -> list[SessionRecord]:
        """Return all sessions, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [_row_to_session(row) for row in response.data or []]

    def append_tryon(self, session_id: str, tryon: FoundationTryon) -> None:
        """Append a try-on entry with a single atomic update."""
        response = self.client.rpc(
            _APPEND_FUNCTION,
            {"p_session_id": session_id, "p_tryon": _tryon_to_json(tryon)},
        ).execute()
        if response.data is False:
            raise RuntimeError(f"Session {session_id} not found")


def _tryon_to_json(tryon: FoundationTryon) -> dict[str, object]:
    return {
        "applied_at": tryon.applied_at.isoformat(),
        "sku": tryon.sku,
        "name": tryon.name,
        "hex": tryon.hex,
        "undertone": tryon.undertone,
        "result_image_url": tryon.result_image_url,
        "result_mime_type": tryon.result_mime_type,
    }


def _tryon_from_json(entry: dict[str, object]) -> FoundationTryon:
    return FoundationTryon(
        applied_at=_parse_datetime(entry["applied_at"]),
        sku=str(entry["sku"]),
        name=str(entry.get("name") or ""),
        hex=str(entry.get("hex") or ""),
        undertone=str(entry.get("undertone") or ""),
        result_image_url=str(entry["result_image_url"]),
        result_mime_type=str(entry["result_mime_type"]),
    )


def _row_to_session(row: dict[str, object]) -> SessionRecord:
    completed_at = row.get("completed_at")
    tryons = row.get("foundation_tryons") or []
    return SessionRecord(
        id=str(row["id"]),
        created_at=_parse_datetime(row["created_at"]),
        original_image_url=row["original_image_url"],
        original_mime_type=row["original_mime_type"],
        derendered_image_url=row["derendered_image_url"],
        derendered_mime_type=row["derendered_mime_type"],
        model=row["model"],
        derender_prompt=row["derender_prompt"],
        foundation_tryons=[_tryon_from_json(entry) for entry in tryons],
        status=row.get("status") or "active",
        completed_at=_parse_datetime(completed_at)
        if isinstance(completed_at, str) and completed_at
        else None,
        rating=row.get("rating"),
    )


def _parse_datetime(value: object) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))
