"""Gemini client for image-to-image generation."""

from dataclasses import dataclass

from google import genai
from google.genai import types

from foundation_mirror.domain.images import (
    GeneratedImage,
    GenerationOutcome,
    ImagePayload,
    NoImageProduced,
)
from foundation_mirror.services.imaging import ImageModelClient


@dataclass
class GeminiImageClient(ImageModelClient):
    """Image client backed by the Gemini generateContent API."""

    client: genai.Client

    @classmethod
    def create(cls, api_key: str, timeout_seconds: float) -> "GeminiImageClient":
        """Create a Gemini client with a single request timeout."""
        http_options = types.HttpOptions(timeout=int(timeout_seconds * 1000))
        return cls(client=genai.Client(api_key=api_key, http_options=http_options))

    async def generate(
        self,
        *,
        model: str,
        system_instruction: str,
        prompt: str,
        images: list[ImagePayload],
    ) -> GenerationOutcome:
        """Send the prompt and images; pick the first inline image in the reply."""
        contents: list[object] = [prompt]
        contents.extend(
            types.Part.from_bytes(data=image.data, mime_type=image.mime_type)
            for image in images
        )
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=contents,
            config=types.GenerateContentConfig(system_instruction=system_instruction),
        )
        parts = _response_parts(response)
        for part in parts:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                return GeneratedImage(
                    image=ImagePayload(
                        data=inline.data, mime_type=inline.mime_type or "image/png"
                    )
                )
        text = "".join(part.text for part in parts if getattr(part, "text", None))
        return NoImageProduced(raw_text=text)


def _response_parts(response: object) -> list[object]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    content = getattr(candidates[0], "content", None)
    return list(getattr(content, "parts", None) or [])
