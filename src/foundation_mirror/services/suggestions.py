"""Foundation shade suggestions from a fast vision model."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Protocol

from foundation_mirror.domain.catalog import CATALOG, Shade, catalog_skus
from foundation_mirror.domain.images import ImagePayload

logger = logging.getLogger(__name__)

SUGGESTION_COUNT = 3

_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


class SuggestionClient(Protocol):
    """Interface for a vision model that answers in plain text."""

    async def complete(self, *, model: str, prompt: str, image: ImagePayload) -> str:
        """Return the model's text answer for an image and prompt."""


@dataclass
class SuggestionService:
    """Asks a vision model to pick the best-matching shades for a face."""

    client: SuggestionClient | None
    model: str
    catalog: tuple[Shade, ...] = CATALOG

    async def suggest(self, image: ImagePayload) -> list[str]:
        """Return up to three catalog SKUs, best match first.

        Never raises: any upstream or parsing failure yields an empty list.
        """
        if self.client is None:
            logger.info("Shade suggestions skipped: no suggestion model configured")
            return []
        try:
            text = await self.client.complete(
                model=self.model,
                prompt=build_suggestion_prompt(self.catalog),
                image=image,
            )
            suggestions = parse_suggestions(text, catalog_skus(self.catalog))
        except Exception:
            logger.exception("Shade suggestion request failed")
            return []
        logger.info("Suggested shades: %s", suggestions)
        return suggestions


def build_suggestion_prompt(catalog: tuple[Shade, ...]) -> str:
    """Build the instruction listing every shade in the catalog."""
    listing = "\n".join(
        f"- {shade.sku}: {shade.name} ({shade.hex}, {shade.undertone} undertone)"
        for shade in catalog
    )
    return (
        "Analyze this person's natural skin tone in the portrait and recommend "
        "exactly 3 foundation shades that would be the best match.\n\n"
        f"Available foundations:\n{listing}\n\n"
        "Consider:\n"
        "1. The person's skin depth (light to deep)\n"
        "2. Their undertone (warm, cool, or neutral)\n"
        "3. Match to face, neck, and visible skin areas\n\n"
        "Return ONLY a JSON array with exactly 3 SKU codes, ordered from best "
        "match to third best match.\n"
        'Example: ["110W", "120W", "100N"]\n\n'
        "Do not include any other text, just the JSON array."
    )


def parse_suggestions(
    text: str | None, valid_skus: set[str], limit: int = SUGGESTION_COUNT
) -> list[str]:
    """Extract SKUs from a model answer that should be a JSON array.

    Code fences are stripped and the bracketed span is parsed. Entries that are
    not catalog SKUs are dropped, as are repeats.
    """
    cleaned = _FENCE_RE.sub("", text or "").strip()
    match = _ARRAY_RE.search(cleaned)
    if match:
        cleaned = match.group(0)
    try:
        parsed = json.loads(cleaned)
    except (ValueError, RecursionError):
        logger.warning("Could not parse shade suggestions", extra={"raw": text})
        return []
    if not isinstance(parsed, list):
        return []
    suggestions: list[str] = []
    for entry in parsed:
        if isinstance(entry, str) and entry in valid_skus and entry not in suggestions:
            suggestions.append(entry)
        if len(suggestions) == limit:
            break
    return suggestions
