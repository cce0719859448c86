"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from foundation_mirror.adapters.gemini_image_client import GeminiImageClient
from foundation_mirror.adapters.gemini_suggestion_client import (
    GeminiSuggestionClient,
)
from foundation_mirror.adapters.openai_suggestion_client import (
    OpenAISuggestionClient,
)
from foundation_mirror.adapters.supabase_blob_store import SupabaseBlobStore
from foundation_mirror.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from foundation_mirror.config import Settings
from foundation_mirror.services.derender import DerenderService
from foundation_mirror.services.sessions import SessionQueryService
from foundation_mirror.services.suggestions import SuggestionService
from foundation_mirror.services.tryon import TryonService

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    derender_service: DerenderService
    tryon_service: TryonService
    session_query_service: SessionQueryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session_repository = SupabaseSessionRepository(supabase_client)
    blob_store = SupabaseBlobStore(supabase_client, resolved_settings.supabase_bucket)
    image_client = (
        GeminiImageClient.create(
            resolved_settings.gemini_api_key,
            resolved_settings.image_model_timeout_seconds,
        )
        if resolved_settings.gemini_api_key
        else None
    )
    openai_client = (
        OpenAISuggestionClient.create(resolved_settings.openai_api_key)
        if resolved_settings.openai_api_key
        else None
    )
    suggestion_service = _build_suggestion_service(
        resolved_settings, openai_client, image_client
    )
    derender_service = DerenderService(
        image_client=image_client,
        session_repository=session_repository,
        blob_store=blob_store,
        suggestion_service=suggestion_service,
        model=resolved_settings.image_model,
    )
    tryon_service = TryonService(
        image_client=image_client,
        session_repository=session_repository,
        blob_store=blob_store,
        model=resolved_settings.image_model,
        swatch_dir=resolved_settings.swatch_dir,
    )
    session_query_service = SessionQueryService(session_repository)

    async def close_resources() -> None:
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        derender_service=derender_service,
        tryon_service=tryon_service,
        session_query_service=session_query_service,
        close_resources=close_resources,
    )


def _build_suggestion_service(
    settings: Settings,
    openai_client: OpenAISuggestionClient | None,
    image_client: GeminiImageClient | None,
) -> SuggestionService:
    """Prefer OpenAI when configured, else reuse the Gemini key for suggestions."""
    if openai_client is not None:
        return SuggestionService(
            client=openai_client, model=settings.openai_suggestion_model
        )
    if image_client is not None:
        return SuggestionService(
            client=GeminiSuggestionClient(client=image_client.client),
            model=settings.gemini_suggestion_model,
        )
    logger.warning("No model API key configured; shade suggestions are disabled")
    return SuggestionService(client=None, model=settings.openai_suggestion_model)
