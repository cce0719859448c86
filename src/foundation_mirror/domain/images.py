"""Image payloads and generation outcomes."""

import base64
from dataclasses import dataclass

DEFAULT_MIME_TYPE = "image/jpeg"

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}


@dataclass(frozen=True)
class ImagePayload:
    """Raw image bytes with their declared MIME type."""

    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE

    @classmethod
    def from_base64(cls, encoded: str, mime_type: str | None) -> "ImagePayload":
        """Decode a base64 string, tolerating a data URL prefix."""
        raw = encoded.split(",")[-1]
        return cls(data=base64.b64decode(raw), mime_type=mime_type or DEFAULT_MIME_TYPE)

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"

    @property
    def extension(self) -> str:
        return _EXTENSIONS.get(self.mime_type.lower(), ".jpg")


@dataclass(frozen=True)
class GeneratedImage:
    """The model returned an image part."""

    image: ImagePayload


@dataclass(frozen=True)
class NoImageProduced:
    """The model answered without an image; carries whatever text it returned."""

    raw_text: str


GenerationOutcome = GeneratedImage | NoImageProduced
