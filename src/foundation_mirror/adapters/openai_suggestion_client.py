"""OpenAI Responses API client for shade suggestions."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from foundation_mirror.domain.images import ImagePayload
from foundation_mirror.services.suggestions import SuggestionClient


@dataclass
class OpenAISuggestionClient(SuggestionClient):
    """Suggestion client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAISuggestionClient":
        """Create an OpenAI suggestion client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def complete(self, *, model: str, prompt: str, image: ImagePayload) -> str:
        """Return the raw text answer; parsing is left to the caller."""
        response = await self.client.responses.create(
            model=model,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {"type": "input_image", "image_url": image.to_data_url()},
                    ],
                }
            ],
            store=False,
        )
        return response.output_text or ""

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
