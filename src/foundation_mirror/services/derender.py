"""Makeup removal and session creation."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from foundation_mirror.domain.images import ImagePayload, NoImageProduced
from foundation_mirror.domain.sessions import SessionRecord
from foundation_mirror.services.errors import non_critical
from foundation_mirror.services.imaging import ImageModelClient, require_image_client
from foundation_mirror.services.sessions import BlobStore, SessionRepository
from foundation_mirror.services.suggestions import SuggestionService

logger = logging.getLogger(__name__)

DERENDER_SYSTEM_INSTRUCTION = (
    "You are an expert digital retoucher and dermatologist. Your goal is to "
    "reveal the subject's natural, healthy skin by digitally removing all "
    "cosmetic makeup.\n\n"
    "1. Remove all foundation, blush, eyeshadow, eyeliner, lipstick, and contour.\n"
    "2. Reveal the underlying skin tone consistent with the neck/hairline.\n"
    "3. The resulting skin should appear **naturally clear, hydrated, and "
    "healthy**. It should NOT look airbrushed, plastic, or blurry.\n"
    "4. RETAIN natural skin micro-texture (pores) to ensure realism, but DO NOT "
    "GENERATE blemishes, acne, redness, or blotchiness that is not present.\n"
    "5. Strictly preserve the original facial identity, bone structure, and "
    "expression."
)

DERENDER_PROMPT = (
    "Remove all makeup to reveal a clean, fresh-faced, natural look. The skin "
    "should look healthy and clear with realistic micro-texture, but free of "
    "blemishes. Do not smooth the skin excessively."
)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class DerenderResult:
    """A derendered image plus whatever the follow-up steps produced."""

    image: ImagePayload
    session_id: str | None
    suggested_foundations: list[str]


@dataclass
class DerenderService:
    """Strips makeup from a portrait and opens a session for it."""

    image_client: ImageModelClient | None
    session_repository: SessionRepository
    blob_store: BlobStore
    suggestion_service: SuggestionService
    model: str
    clock: Callable[[], datetime] = field(default=_utcnow)

    async def derender(self, image: ImagePayload) -> DerenderResult | NoImageProduced:
        """Run the derender pipeline for one uploaded portrait."""
        client = require_image_client(self.image_client)
        outcome = await client.generate(
            model=self.model,
            system_instruction=DERENDER_SYSTEM_INSTRUCTION,
            prompt=DERENDER_PROMPT,
            images=[image],
        )
        if isinstance(outcome, NoImageProduced):
            logger.warning(
                "Model returned text instead of image",
                extra={"raw_text": outcome.raw_text},
            )
            return outcome

        derendered = outcome.image
        session_id: str | None = None
        with non_critical("store derender session"):
            session_id = self._store_session(image, derendered).id
        suggestions = await self.suggestion_service.suggest(derendered)
        return DerenderResult(
            image=derendered,
            session_id=session_id,
            suggested_foundations=suggestions,
        )

    def _store_session(
        self, original: ImagePayload, derendered: ImagePayload
    ) -> SessionRecord:
        session_id = str(uuid4())
        prefix = f"sessions/{session_id}"
        original_url = self.blob_store.upload(
            f"{prefix}/original{original.extension}",
            original.data,
            original.mime_type,
        )
        derendered_url = self.blob_store.upload(
            f"{prefix}/derendered{derendered.extension}",
            derendered.data,
            derendered.mime_type,
        )
        session = self.session_repository.create_session(
            SessionRecord(
                id=session_id,
                created_at=self.clock(),
                original_image_url=original_url,
                original_mime_type=original.mime_type,
                derendered_image_url=derendered_url,
                derendered_mime_type=derendered.mime_type,
                model=self.model,
                derender_prompt=DERENDER_PROMPT,
            )
        )
        logger.info("Created session", extra={"session_id": session.id})
        return session
