"""Foundation try-on rendering."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from foundation_mirror.domain.catalog import Shade
from foundation_mirror.domain.images import ImagePayload, NoImageProduced
from foundation_mirror.domain.sessions import FoundationTryon
from foundation_mirror.services.errors import non_critical
from foundation_mirror.services.imaging import ImageModelClient, require_image_client
from foundation_mirror.services.sessions import BlobStore, SessionRepository

logger = logging.getLogger(__name__)

TRYON_SYSTEM_INSTRUCTION = (
    "You are an expert cosmetic artist and digital makeup specialist. Your task "
    "is to apply foundation makeup to the provided portrait image.\n\n"
    "IMPORTANT GUIDELINES:\n"
    "1. Apply the foundation ONLY to the face and neck areas - do not alter "
    "hair, eyes, lips, eyebrows, or background.\n"
    "2. The foundation should create a smooth, polished, professional makeup "
    "finish - like real foundation does.\n"
    "3. Strictly preserve the original facial identity, bone structure, and "
    "expression.\n"
    "4. Even out skin tone and create a smooth, refined complexion by softening "
    "pores, fine lines, and minor imperfections.\n"
    "5. The coverage should be medium to full - creating that polished makeup "
    "look with the foundation shade.\n"
    "6. Blend the foundation seamlessly at the jawline and hairline edges with "
    "no harsh lines.\n"
    "7. The result should look like professionally applied makeup - smooth and "
    "polished but still realistic, NOT plastic or heavily airbrushed."
)

SWATCH_NOTE = "The second image shows the exact foundation color/texture to apply."


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class TryonResult:
    """A rendered try-on image for one shade."""

    image: ImagePayload
    sku: str


@dataclass
class TryonService:
    """Renders a shade onto a derendered face and records it on the session."""

    image_client: ImageModelClient | None
    session_repository: SessionRepository
    blob_store: BlobStore
    model: str
    swatch_dir: Path | None = None
    clock: Callable[[], datetime] = field(default=_utcnow)

    async def apply(
        self, *, image: ImagePayload, shade: Shade, session_id: str
    ) -> TryonResult | NoImageProduced:
        """Apply a shade; persistence failures never affect the returned image."""
        client = require_image_client(self.image_client)
        swatch = self.load_swatch(shade.sku)
        images = [image] if swatch is None else [image, swatch]
        outcome = await client.generate(
            model=self.model,
            system_instruction=TRYON_SYSTEM_INSTRUCTION,
            prompt=build_tryon_prompt(shade, with_swatch=swatch is not None),
            images=images,
        )
        if isinstance(outcome, NoImageProduced):
            logger.warning(
                "Model returned text instead of image",
                extra={"raw_text": outcome.raw_text, "sku": shade.sku},
            )
            return outcome

        with non_critical(
            "record foundation try-on", session_id=session_id, sku=shade.sku
        ):
            self._record(session_id, shade, outcome.image)
        return TryonResult(image=outcome.image, sku=shade.sku)

    def load_swatch(self, sku: str) -> ImagePayload | None:
        """Read the reference swatch for a SKU, if one is bundled."""
        if self.swatch_dir is None or not sku or Path(sku).name != sku:
            return None
        path = self.swatch_dir / f"{sku}.png"
        try:
            return ImagePayload(data=path.read_bytes(), mime_type="image/png")
        except OSError:
            logger.info("No swatch image available", extra={"sku": sku})
            return None

    def _record(self, session_id: str, shade: Shade, result: ImagePayload) -> None:
        applied_at = self.clock()
        millis = int(applied_at.timestamp() * 1000)
        url = self.blob_store.upload(
            f"sessions/{session_id}/foundation-{shade.sku}-{millis}{result.extension}",
            result.data,
            result.mime_type,
        )
        self.session_repository.append_tryon(
            session_id,
            FoundationTryon(
                applied_at=applied_at,
                sku=shade.sku,
                name=shade.name,
                hex=shade.hex,
                undertone=shade.undertone,
                result_image_url=url,
                result_mime_type=result.mime_type,
            ),
        )
        logger.info(
            "Recorded foundation try-on",
            extra={"session_id": session_id, "sku": shade.sku},
        )


def build_tryon_prompt(shade: Shade, *, with_swatch: bool) -> str:
    """Describe the shade to apply."""
    prompt = (
        "Apply this foundation to the face in the portrait:\n"
        f"- Foundation shade: {shade.name}\n"
        f"- Color: {shade.hex}\n"
        f"- Undertone: {shade.undertone}\n\n"
        "Create a smooth, polished foundation finish that looks like professional "
        "makeup application. The skin should appear even-toned and refined with "
        "the foundation color, with a natural but polished appearance. Blend "
        "seamlessly at all edges."
    )
    if with_swatch:
        return f"{prompt}\n\n{SWATCH_NOTE}"
    return prompt
