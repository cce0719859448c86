"""Gemini text client for shade suggestions."""

from dataclasses import dataclass

from google import genai
from google.genai import types

from foundation_mirror.domain.images import ImagePayload
from foundation_mirror.services.suggestions import SuggestionClient


@dataclass
class GeminiSuggestionClient(SuggestionClient):
    """Suggestion client sharing the Gemini client used for image generation."""

    client: genai.Client

    async def complete(self, *, model: str, prompt: str, image: ImagePayload) -> str:
        """Return the raw text answer; parsing is left to the caller."""
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=[
                prompt,
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
            ],
        )
        return response.text or ""
