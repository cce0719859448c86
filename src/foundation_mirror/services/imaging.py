"""Interface for the external image-generation model."""

from typing import Protocol

from foundation_mirror.domain.images import GenerationOutcome, ImagePayload
from foundation_mirror.services.errors import ConfigurationError


class ImageModelClient(Protocol):
    """Interface for image-to-image generation."""

    async def generate(
        self,
        *,
        model: str,
        system_instruction: str,
        prompt: str,
        images: list[ImagePayload],
    ) -> GenerationOutcome:
        """Return the first image part, or the text the model answered with."""


def require_image_client(client: ImageModelClient | None) -> ImageModelClient:
    """Return the configured client or fail with a configuration error."""
    if client is None:
        raise ConfigurationError("GEMINI_API_KEY is not set")
    return client
