"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from foundation_mirror.config import Settings
from foundation_mirror.containers import AppContainer
from foundation_mirror.domain.images import (
    GeneratedImage,
    GenerationOutcome,
    ImagePayload,
    NoImageProduced,
)
from foundation_mirror.domain.sessions import FoundationTryon, SessionRecord
from foundation_mirror.services.derender import DerenderService
from foundation_mirror.services.imaging import ImageModelClient
from foundation_mirror.services.sessions import (
    BlobStore,
    SessionQueryService,
    SessionRepository,
)
from foundation_mirror.services.suggestions import SuggestionClient, SuggestionService
from foundation_mirror.services.tryon import TryonService

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"generated"
JPEG_BYTES = b"\xff\xd8\xff" + b"portrait"


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests."""

    sessions: dict[str, SessionRecord] = field(default_factory=dict)
    fail_on_create: bool = False
    fail_on_append: bool = False

    def create_session(self, session: SessionRecord) -> SessionRecord:
        if self.fail_on_create:
            raise RuntimeError("store unavailable")
        self.sessions[session.id] = session
        return session

    def get_session(self, session_id: str) -> SessionRecord | None:
        return self.sessions.get(session_id)

    def list_sessions(self) -> list[SessionRecord]:
        return sorted(
            self.sessions.values(), key=lambda session: session.created_at, reverse=True
        )

    def append_tryon(self, session_id: str, tryon: FoundationTryon) -> None:
        if self.fail_on_append:
            raise RuntimeError("store unavailable")
        session = self.sessions.get(session_id)
        if session is None:
            raise RuntimeError(f"Session {session_id} not found")
        session.foundation_tryons.append(tryon)


@dataclass
class InMemoryBlobStore(BlobStore):
    """In-memory blob store that records uploads."""

    objects: dict[str, tuple[bytes, str]] = field(default_factory=dict)

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        self.objects[path] = (data, content_type)
        return f"https://blobs.example.com/{path}"


@dataclass
class FakeImageModelClient(ImageModelClient):
    """Fake image model returning queued outcomes, or a fixed PNG by default."""

    outcomes: list[GenerationOutcome] = field(default_factory=list)
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        system_instruction: str,
        prompt: str,
        images: list[ImagePayload],
    ) -> GenerationOutcome:
        self.calls.append(
            {
                "model": model,
                "system_instruction": system_instruction,
                "prompt": prompt,
                "images": images,
            }
        )
        if self.outcomes:
            return self.outcomes.pop(0)
        return GeneratedImage(image=ImagePayload(data=PNG_BYTES, mime_type="image/png"))


@dataclass
class FakeSuggestionClient(SuggestionClient):
    """Fake suggestion model returning a fixed text answer."""

    text: str = '["30W", "40N", "50N"]'
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def complete(self, *, model: str, prompt: str, image: ImagePayload) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


@dataclass
class SteppingClock:
    """Clock that advances one second per call."""

    current: datetime = field(
        default_factory=lambda: datetime(2025, 1, 1, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


def make_session(
    session_id: str = "session-1",
    created_at: datetime | None = None,
) -> SessionRecord:
    return SessionRecord(
        id=session_id,
        created_at=created_at or datetime(2025, 1, 1, tzinfo=UTC),
        original_image_url=(
            f"https://blobs.example.com/sessions/{session_id}/original.jpg"
        ),
        original_mime_type="image/jpeg",
        derendered_image_url=(
            f"https://blobs.example.com/sessions/{session_id}/derendered.png"
        ),
        derendered_mime_type="image/png",
        model="gemini-3-pro-image-preview",
        derender_prompt="Remove all makeup.",
    )


def no_image(text: str = "I cannot edit this photo.") -> NoImageProduced:
    return NoImageProduced(raw_text=text)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        gemini_api_key="gemini-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def image_client() -> FakeImageModelClient:
    return FakeImageModelClient()


@pytest.fixture
def suggestion_client() -> FakeSuggestionClient:
    return FakeSuggestionClient()


@pytest.fixture
def container(
    settings: Settings,
    session_repository: InMemorySessionRepository,
    blob_store: InMemoryBlobStore,
    image_client: FakeImageModelClient,
    suggestion_client: FakeSuggestionClient,
    tmp_path: Path,
) -> AppContainer:
    suggestion_service = SuggestionService(
        client=suggestion_client, model=settings.openai_suggestion_model
    )
    derender_service = DerenderService(
        image_client=image_client,
        session_repository=session_repository,
        blob_store=blob_store,
        suggestion_service=suggestion_service,
        model=settings.image_model,
    )
    tryon_service = TryonService(
        image_client=image_client,
        session_repository=session_repository,
        blob_store=blob_store,
        model=settings.image_model,
        swatch_dir=tmp_path,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        derender_service=derender_service,
        tryon_service=tryon_service,
        session_query_service=SessionQueryService(session_repository),
        close_resources=close_resources,
    )
